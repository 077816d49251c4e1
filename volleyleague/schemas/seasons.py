"""Season definitions and per-season team enrollment with running tallies."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import Column, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from volleyleague.schemas.base import utc_now


class SeasonStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


class Season(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "seasons"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    start_date: date
    end_date: date
    # {"day_of_week": 0-6 (Sunday first), "time": "HH:MM", "exclude_dates": ["YYYY-MM-DD"]}
    recurring_config: Dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSONB, nullable=False)
    )
    status: SeasonStatus = Field(default=SeasonStatus.DRAFT, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)


class SeasonTeam(SQLModel, table=True):  # type: ignore[call-arg]
    """Authoritative standings input: cumulative sets for a team in a season."""

    __tablename__ = "season_teams"
    __table_args__ = (
        UniqueConstraint("season_id", "team_id", name="uq_season_teams_season_team"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    season_id: int = Field(foreign_key="seasons.id", index=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    total_sets_won: int = Field(default=0, ge=0)
    total_sets_lost: int = Field(default=0, ge=0)
