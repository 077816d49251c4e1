"""Pydantic models for standings and leaderboard responses."""

from typing import Optional

from pydantic import BaseModel, Field


class TeamStanding(BaseModel):
    rank: int
    team_id: int
    team_name: str
    total_sets_won: int
    total_sets_lost: int
    win_percentage: float
    has_played: bool
    win_percentage_display: str


class SeasonStandingsResponse(BaseModel):
    season_id: int
    season_name: str
    standings: list[TeamStanding] = Field(default_factory=list)
    leader: Optional[TeamStanding] = Field(default=None)


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: int
    display_name: Optional[str] = Field(default=None)
    email: str
    total_sets_won: int
    total_sets_lost: int
    games_played: int
    win_percentage: float
    win_percentage_display: str
    teams_played_on: list[str] = Field(default_factory=list)


class LeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntry] = Field(default_factory=list)
    most_sets_won: Optional[LeaderboardEntry] = Field(default=None)


class TallyDrift(BaseModel):
    team_id: int
    stored_won: int
    stored_lost: int
    derived_won: int
    derived_lost: int


class RecomputeResult(BaseModel):
    season_id: int
    teams_checked: int
    drift: list[TallyDrift] = Field(default_factory=list)
    applied: bool = False
