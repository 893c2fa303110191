"""
Live API client for apifootball.com (v3)

Every public call returns a list of validated records. Transport, HTTP,
decoding and validation failures are logged and turned into an empty list;
nothing is raised to the caller and nothing is retried.
"""
import logging
import threading
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from app.schemas import Country, League, Team, Standing

logger = logging.getLogger("api_client")

T = TypeVar("T", bound=BaseModel)

DEFAULT_BASE_URL = "https://apiv3.apifootball.com"
DEFAULT_TIMEOUT_MS = 10000


class UpstreamError(Exception):
    """Raised inside the client when the upstream answer is unusable."""
    pass


class FootballApiClient:
    """
    Thin fetcher over the apifootball.com action-style API.

    All endpoints share one URL and are selected by the `action` query param:
        GET {base_url}/?action=get_standings&league_id=152&APIkey=...
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        max_concurrent_requests: int = 10,
    ):
        """
        Initialize the client.

        Args:
            api_key: apifootball.com key sent as the APIkey query param
            base_url: API root URL
            timeout_ms: Per-request timeout in milliseconds
            max_concurrent_requests: Cap on simultaneous upstream requests
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_ms / 1000.0
        # Limits concurrent API requests across all request threads
        self._semaphore = threading.Semaphore(max(1, max_concurrent_requests))

        if not api_key:
            logger.warning("API_FOOTBALL_KEY is not set - upstream calls will be rejected")

    @classmethod
    def from_settings(cls, settings) -> "FootballApiClient":
        """Build a client from a Settings object."""
        return cls(
            api_key=settings.api_football_key,
            base_url=settings.api_football_base_url,
            timeout_ms=settings.api_timeout_ms,
            max_concurrent_requests=settings.max_concurrent_requests,
        )

    # ========================================================================
    # Public fetchers
    # ========================================================================

    def get_countries(self) -> List[Country]:
        """Fetch all countries."""
        logger.info("Fetching countries from external API")
        return self._fetch_list("get_countries", {}, Country)

    def get_leagues(self, country_id: str) -> List[League]:
        """Fetch leagues for a country."""
        logger.info(f"Fetching leagues for country ID: {country_id}")
        return self._fetch_list("get_leagues", {"country_id": country_id}, League)

    def get_teams(self, league_id: str) -> List[Team]:
        """Fetch teams for a league."""
        logger.info(f"Fetching teams for league ID: {league_id}")
        return self._fetch_list("get_teams", {"league_id": league_id}, Team)

    def get_standings(self, league_id: str) -> List[Standing]:
        """Fetch the full standings table for a league."""
        logger.info(f"Fetching standings for league ID: {league_id}")
        return self._fetch_list("get_standings", {"league_id": league_id}, Standing)

    # ========================================================================
    # Internal Methods
    # ========================================================================

    def _fetch_list(
        self,
        action: str,
        params: Dict[str, Any],
        model: Type[T],
    ) -> List[T]:
        """
        Request an action and parse the payload into a list of `model`.

        Returns an empty list on any failure.
        """
        try:
            payload = self._make_request(action, params)
            return self._parse_records(action, payload, model)
        except requests.RequestException as e:
            logger.error(f"Error fetching {action}: {e}")
        except ValueError as e:
            # Covers JSON decode errors and pydantic ValidationError
            logger.error(f"Invalid response for {action}: {e}")
        except UpstreamError as e:
            logger.warning(f"Upstream returned no usable data for {action}: {e}")
        except Exception as e:
            logger.error(f"Unexpected error fetching {action}: {e}", exc_info=True)

        logger.warning("Returning empty list due to API error")
        return []

    def _make_request(self, action: str, params: Dict[str, Any]) -> Any:
        """Perform the HTTP GET and return decoded JSON."""
        request_params = {"action": action, **params, "APIkey": self._api_key}

        with self._semaphore:
            response = requests.get(
                f"{self._base_url}/",
                params=request_params,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            return response.json()

    @staticmethod
    def _parse_records(action: str, payload: Any, model: Type[T]) -> List[T]:
        """
        Validate a decoded payload.

        apifootball answers "no data" and auth failures with a JSON object
        like {"error": 404, "message": "No country found"} instead of a list.
        """
        if isinstance(payload, dict):
            raise UpstreamError(
                f"{payload.get('error', 'unknown')} - {payload.get('message', 'no message')}"
            )
        if not isinstance(payload, list):
            raise UpstreamError(f"unexpected payload type {type(payload).__name__}")

        try:
            return [model.model_validate(item) for item in payload]
        except ValidationError as e:
            logger.debug(f"Validation failed for {action} payload: {e}")
            raise
