"""
Football Standings API - Main FastAPI Application
Proxies apifootball.com with an in-memory TTL cache and an offline mode
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.dependencies import get_expiry_sweeper, get_football_service
from app.schemas import (
    CacheClearResponse,
    Country,
    ErrorResponse,
    HealthResponse,
    League,
    OfflineModeResponse,
    Standing,
    Team,
)
from app.service import FootballService
from config.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger("api")

# Version tracking
APP_VERSION = "1.0.0"
APP_NAME = "Football Standings API"


# ===== LIFECYCLE =====

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run periodic eviction of expired cache entries while the app is up."""
    sweeper = get_expiry_sweeper()
    sweeper.start()
    try:
        yield
    finally:
        sweeper.stop()


app = FastAPI(
    title=APP_NAME,
    description="Countries, leagues, teams and standings from apifootball.com with TTL caching",
    version=APP_VERSION,
    lifespan=lifespan,
)


# ===== ERROR HANDLING =====

def _error_body(status: int, error: str, message: str, request: Request) -> dict:
    return ErrorResponse(
        status=status,
        error=error,
        message=message,
        path=request.url.path,
    ).model_dump()


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Missing or malformed query parameters are client errors (400)."""
    problems = []
    for err in exc.errors():
        name = err.get("loc", ["", "?"])[-1]
        if err.get("type") == "missing":
            problems.append(f"Required parameter '{name}' is missing")
        else:
            problems.append(f"Invalid value for parameter '{name}'")

    logger.warning(f"Bad request on {request.url.path}: {'; '.join(problems)}")
    return JSONResponse(
        status_code=400,
        content=_error_body(400, "Bad Request", "; ".join(problems), request),
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(
            exc.status_code,
            _reason(exc.status_code),
            str(exc.detail),
            request,
        ),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_error_body(
            500,
            "Internal Server Error",
            "An unexpected error occurred. Please try again later.",
            request,
        ),
    )


def _reason(status_code: int) -> str:
    return {
        400: "Bad Request",
        404: "Not Found",
        405: "Method Not Allowed",
        503: "Service Unavailable",
    }.get(status_code, "Error")


def _require(value: str, name: str) -> str:
    """Reject blank identifiers that passed FastAPI's presence check."""
    if not value or not value.strip():
        raise HTTPException(status_code=400, detail=f"{name} is required")
    return value.strip()


# ===== HEALTH =====

@app.get("/api/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    logger.debug("Health check requested")
    return HealthResponse(
        status="UP",
        timestamp=datetime.now().isoformat(),
        service=APP_NAME,
        version=APP_VERSION,
    )


# ===== FOOTBALL DATA =====

@app.get("/api/countries", response_model=List[Country])
def get_countries(service: FootballService = Depends(get_football_service)):
    """All available countries."""
    logger.info("GET /api/countries - Fetching all countries")
    return service.get_countries()


@app.get("/api/leagues", response_model=List[League])
def get_leagues(
    country_id: str = Query(..., description="Country ID to fetch leagues for"),
    service: FootballService = Depends(get_football_service),
):
    """Leagues of a country."""
    logger.info(f"GET /api/leagues?country_id={country_id} - Fetching leagues")
    return service.get_leagues(_require(country_id, "Country ID"))


@app.get("/api/teams", response_model=List[Team])
def get_teams(
    league_id: str = Query(..., description="League ID to fetch teams for"),
    service: FootballService = Depends(get_football_service),
):
    """Teams of a league."""
    logger.info(f"GET /api/teams?league_id={league_id} - Fetching teams")
    return service.get_teams(_require(league_id, "League ID"))


@app.get("/api/standings", response_model=List[Standing])
def get_standings(
    league_id: str = Query(..., description="League ID to fetch standings for"),
    team_name: Optional[str] = Query(default=None, description="Optional team name filter"),
    service: FootballService = Depends(get_football_service),
):
    """
    League standings, optionally filtered by team name.

    The filter is a case-insensitive substring match and is applied after
    the cache, so every filter value shares the league's cached table.
    """
    logger.info(
        f"GET /api/standings?league_id={league_id}&team_name={team_name} - Fetching standings"
    )
    return service.get_standings(_require(league_id, "League ID"), team_name)


# ===== OFFLINE MODE & CACHE =====

@app.post("/api/offline-mode", response_model=OfflineModeResponse)
def toggle_offline_mode(
    enabled: bool = Query(..., description="Enable offline mode"),
    service: FootballService = Depends(get_football_service),
):
    """Serve cached data only (enabled=true) or resume upstream fetches."""
    logger.info(f"POST /api/offline-mode?enabled={enabled}")
    service.set_offline_mode(enabled)
    return OfflineModeResponse(
        offline_mode=service.is_offline_mode(),
        message=f"Offline mode {'enabled' if enabled else 'disabled'}",
    )


@app.get("/api/offline-mode", response_model=OfflineModeResponse)
def get_offline_mode(service: FootballService = Depends(get_football_service)):
    """Current offline mode state."""
    return OfflineModeResponse(offline_mode=service.is_offline_mode())


@app.delete("/api/cache", response_model=CacheClearResponse)
def clear_cache(service: FootballService = Depends(get_football_service)):
    """Clear all cached football data."""
    logger.info("DELETE /api/cache - Clearing cache")
    cleared = service.clear_cache()
    return CacheClearResponse(message="Cache cleared successfully", cleared=cleared)


@app.get("/api/cache/stats")
def cache_stats(service: FootballService = Depends(get_football_service)):
    """Get cache statistics."""
    return service.get_cache_stats()
