"""
Unit tests for the read-through FootballService.

The upstream client is replaced by a stub that records calls.
"""
import threading

import pytest

from app.cache import ResourceKind, TTLCache
from app.schemas import Country, League, Team, Standing
from app.service import FootballService, filter_standings


# =============================================================================
# Test Fixtures (Mock Data)
# =============================================================================

class FakeClock:

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class StubApiClient:
    """Records every upstream call and returns canned data."""

    def __init__(self, countries=None, leagues=None, teams=None, standings=None):
        self.countries = countries or []
        self.leagues = leagues or []
        self.teams = teams or []
        self.standings = standings or []
        self.calls = []

    def get_countries(self):
        self.calls.append(("countries", None))
        return list(self.countries)

    def get_leagues(self, country_id):
        self.calls.append(("leagues", country_id))
        return list(self.leagues)

    def get_teams(self, league_id):
        self.calls.append(("teams", league_id))
        return list(self.teams)

    def get_standings(self, league_id):
        self.calls.append(("standings", league_id))
        return list(self.standings)


@pytest.fixture
def standings():
    return [
        Standing(team_id="141", team_name="Arsenal", overall_league_position="1"),
        Standing(team_id="2626", team_name="Chelsea", overall_league_position="2"),
        Standing(team_id="3000", team_name=None, overall_league_position="3"),
    ]


@pytest.fixture
def api(standings):
    return StubApiClient(
        countries=[Country(country_id="44", country_name="England")],
        leagues=[League(league_id="152", league_name="Premier League", country_id="44")],
        teams=[Team(team_key="141", team_name="Arsenal")],
        standings=standings,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(api, clock):
    return FootballService(api_client=api, cache=TTLCache(clock=clock))


# =============================================================================
# fetch_with_cache
# =============================================================================

class TestFetchWithCache:

    def test_miss_fetches_once_then_serves_from_cache(self, service):
        calls = []

        def fetch():
            calls.append(1)
            return ["data"]

        assert service.fetch_with_cache("k", 1000, fetch) == ["data"]
        assert service.fetch_with_cache("k", 1000, fetch) == ["data"]
        assert len(calls) == 1

    def test_offline_miss_returns_empty_without_fetching(self, service):
        service.set_offline_mode(True)

        def fetch():
            raise AssertionError("fetch must not be called while offline")

        assert service.fetch_with_cache("k", 1000, fetch) == []
        assert service.cache.size() == 0

    def test_empty_result_is_not_cached(self, service):
        calls = []

        def fetch():
            calls.append(1)
            return []

        assert service.fetch_with_cache("k", 1000, fetch) == []
        assert service.fetch_with_cache("k", 1000, fetch) == []
        assert len(calls) == 2
        assert service.cache.size() == 0

    def test_expired_entry_is_refetched(self, service, clock):
        results = iter([["first"], ["second"]])

        service.fetch_with_cache("k", 1000, lambda: next(results))
        clock.now += 5
        assert service.fetch_with_cache("k", 1000, lambda: next(results)) == ["second"]

    def test_offline_still_serves_cached_entries(self, service):
        service.fetch_with_cache("k", 60_000, lambda: ["cached"])
        service.set_offline_mode(True)

        assert service.fetch_with_cache("k", 60_000, lambda: ["other"]) == ["cached"]

    def test_concurrent_misses_may_both_fetch(self, service):
        """Simultaneous misses are not coalesced; both reach upstream."""
        barrier = threading.Barrier(2)
        calls = []
        lock = threading.Lock()

        def fetch():
            with lock:
                calls.append(1)
            barrier.wait(timeout=5)
            return ["data"]

        threads = [
            threading.Thread(target=service.fetch_with_cache, args=("k", 60_000, fetch))
            for _ in range(2)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 2
        assert service.cache.get("k") == ["data"]


# =============================================================================
# Resources
# =============================================================================

class TestResources:

    def test_countries_cached_under_countries_key(self, service, api):
        first = service.get_countries()
        second = service.get_countries()

        assert [c.country_name for c in first] == ["England"]
        assert second == first
        assert api.calls == [("countries", None)]
        assert service.cache.contains("countries")

    def test_leagues_keyed_by_country(self, service, api):
        service.get_leagues("44")
        service.get_leagues("44")
        service.get_leagues("45")

        assert api.calls == [("leagues", "44"), ("leagues", "45")]
        assert service.cache.contains("leagues_44")
        assert service.cache.contains("leagues_45")

    def test_teams_keyed_by_league(self, service, api):
        teams = service.get_teams("152")

        assert teams[0].team_name == "Arsenal"
        assert service.cache.contains("teams_152")

    def test_resources_use_their_own_ttl(self, api, clock):
        service = FootballService(
            api_client=api,
            cache=TTLCache(clock=clock),
            ttls={ResourceKind.STANDINGS: 1000},
        )
        assert service.ttl_for(ResourceKind.STANDINGS) == 1000
        assert service.ttl_for(ResourceKind.COUNTRIES) == 86_400_000

        service.get_standings("152")
        service.get_countries()
        clock.now += 10

        assert service.cache.get("standings_152") is None
        assert service.cache.get("countries") is not None

    def test_upstream_failure_returns_empty_and_retries_next_call(self, clock):
        api = StubApiClient()
        service = FootballService(api_client=api, cache=TTLCache(clock=clock))

        assert service.get_teams("152") == []
        api.teams = [Team(team_key="1", team_name="Arsenal")]
        assert len(service.get_teams("152")) == 1
        assert api.calls == [("teams", "152"), ("teams", "152")]


# =============================================================================
# Standings filter
# =============================================================================

class TestStandingsFilter:

    @pytest.mark.parametrize("needle", ["arse", "ARSE", "Arse"])
    def test_filter_is_case_insensitive_substring(self, service, needle):
        result = service.get_standings("152", needle)
        assert [s.team_name for s in result] == ["Arsenal"]

    def test_filter_keeps_surrounding_spaces(self):
        rows = [
            Standing(team_name="Manchester United"),
            Standing(team_name="Man City"),
        ]
        assert [s.team_name for s in filter_standings(rows, "man ")] == ["Man City"]
        assert len(filter_standings(rows, "man")) == 2

    @pytest.mark.parametrize("needle", [None, "", "   "])
    def test_blank_filter_returns_full_table(self, service, needle):
        result = service.get_standings("152", needle)
        assert len(result) == 3

    def test_filter_does_not_touch_cached_table(self, service, api):
        service.get_standings("152", "chel")
        service.get_standings("152", "arse")

        cached = service.cache.get("standings_152")
        assert len(cached) == 3
        assert api.calls == [("standings", "152")]

    def test_filter_with_no_match_returns_empty(self, service):
        assert service.get_standings("152", "Liverpool") == []

    def test_filter_standings_helper(self, standings):
        assert filter_standings(standings, "sea")[0].team_name == "Chelsea"
        assert filter_standings([], "sea") == []


# =============================================================================
# Offline mode and cache control
# =============================================================================

class TestOfflineAndCacheControl:

    def test_offline_flag_toggles(self, service):
        assert service.is_offline_mode() is False
        service.set_offline_mode(True)
        assert service.is_offline_mode() is True
        service.set_offline_mode(False)
        assert service.is_offline_mode() is False

    def test_initial_offline_flag(self, api):
        service = FootballService(api_client=api, offline_mode=True)
        assert service.is_offline_mode() is True
        assert service.get_countries() == []
        assert api.calls == []

    def test_toggling_offline_keeps_cache(self, service):
        service.get_countries()
        service.set_offline_mode(True)
        service.set_offline_mode(False)
        assert service.cache.contains("countries")

    def test_clear_cache_keeps_offline_flag(self, service):
        service.get_countries()
        service.set_offline_mode(True)

        assert service.clear_cache() == 1
        assert service.is_offline_mode() is True
        assert service.get_countries() == []

    def test_put_then_clear_end_to_end(self, service):
        service.cache.put("teams_10", ["TeamA", "TeamB"], 3_600_000)
        assert service.cache.get("teams_10") == ["TeamA", "TeamB"]

        service.clear_cache()
        assert service.cache.get("teams_10") is None

    def test_cache_stats_include_policy(self, service):
        service.get_countries()
        stats = service.get_cache_stats()

        assert stats["entries"] == 1
        assert stats["offline_mode"] is False
        assert stats["ttl_ms"]["standings"] == 300_000
