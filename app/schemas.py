"""
Pydantic schemas for upstream records and API responses.

Field names match the apifootball.com JSON keys so records pass through
unchanged. Every upstream field is an optional string; unknown keys are ignored.
"""
from pydantic import BaseModel
from typing import Optional


# ===== DOMAIN RECORDS =====

class ApiRecord(BaseModel):
    """Base for upstream records; numeric values are accepted as strings"""

    class Config:
        coerce_numbers_to_str = True


class Country(ApiRecord):
    """Country as returned by action=get_countries"""
    country_id: Optional[str] = None
    country_name: Optional[str] = None
    country_logo: Optional[str] = None


class League(ApiRecord):
    """League as returned by action=get_leagues"""
    country_id: Optional[str] = None
    country_name: Optional[str] = None
    league_id: Optional[str] = None
    league_name: Optional[str] = None
    league_season: Optional[str] = None
    league_logo: Optional[str] = None
    country_logo: Optional[str] = None


class Venue(ApiRecord):
    """Team venue, nested inside a team record"""
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    venue_city: Optional[str] = None
    venue_capacity: Optional[str] = None
    venue_surface: Optional[str] = None


class Team(ApiRecord):
    """Team as returned by action=get_teams"""
    team_key: Optional[str] = None
    team_name: Optional[str] = None
    team_country: Optional[str] = None
    team_founded: Optional[str] = None
    team_badge: Optional[str] = None
    venue: Optional[Venue] = None


class Standing(ApiRecord):
    """
    One row of a league table as returned by action=get_standings.

    "payed" is the upstream spelling of matches played.
    """
    country_name: Optional[str] = None
    league_id: Optional[str] = None
    league_name: Optional[str] = None
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    overall_promotion: Optional[str] = None

    # Overall
    overall_league_position: Optional[str] = None
    overall_league_payed: Optional[str] = None
    overall_league_W: Optional[str] = None
    overall_league_D: Optional[str] = None
    overall_league_L: Optional[str] = None
    overall_league_GF: Optional[str] = None
    overall_league_GA: Optional[str] = None
    overall_league_PTS: Optional[str] = None

    # Home
    home_league_position: Optional[str] = None
    home_league_payed: Optional[str] = None
    home_league_W: Optional[str] = None
    home_league_D: Optional[str] = None
    home_league_L: Optional[str] = None
    home_league_GF: Optional[str] = None
    home_league_GA: Optional[str] = None
    home_league_PTS: Optional[str] = None

    # Away
    away_league_position: Optional[str] = None
    away_league_payed: Optional[str] = None
    away_league_W: Optional[str] = None
    away_league_D: Optional[str] = None
    away_league_L: Optional[str] = None
    away_league_GF: Optional[str] = None
    away_league_GA: Optional[str] = None
    away_league_PTS: Optional[str] = None

    league_round: Optional[str] = None
    team_badge: Optional[str] = None
    fk_stage_key: Optional[str] = None
    stage_name: Optional[str] = None


# ===== RESPONSE SCHEMAS =====

class OfflineModeResponse(BaseModel):
    """Result of reading or toggling offline mode"""
    offline_mode: bool
    message: Optional[str] = None


class CacheClearResponse(BaseModel):
    """Result of clearing the cache"""
    message: str
    cleared: int


class HealthResponse(BaseModel):
    """Service liveness"""
    status: str
    timestamp: str
    service: str
    version: str


class ErrorResponse(BaseModel):
    """Error body returned for 4xx/5xx responses"""
    status: int
    error: str
    message: str
    path: str
