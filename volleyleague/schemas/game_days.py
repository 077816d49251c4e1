"""Game days plus the results and participation recorded against them."""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from volleyleague.schemas.base import utc_now


class GameDay(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "game_days"
    __table_args__ = (
        UniqueConstraint("season_id", "game_date", name="uq_game_days_season_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    season_id: int = Field(foreign_key="seasons.id", index=True)
    game_date: date = Field(index=True)
    description: Optional[str] = Field(default=None)
    image_url: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)


class GameResult(SQLModel, table=True):  # type: ignore[call-arg]
    """One team's sets for one game day. Resubmission replaces the row."""

    __tablename__ = "game_results"
    __table_args__ = (
        UniqueConstraint(
            "game_day_id", "team_id", name="uq_game_results_game_day_team"
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    game_day_id: int = Field(foreign_key="game_days.id", index=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    sets_won: int = Field(ge=0)
    sets_lost: int = Field(ge=0)
    recorded_at: datetime = Field(default_factory=utc_now)
    reported_by: Optional[int] = Field(default=None, foreign_key="users.id")


class GameDayPlayer(SQLModel, table=True):  # type: ignore[call-arg]
    """Roster members who actually played for a team on a game day."""

    __tablename__ = "game_day_players"
    __table_args__ = (
        UniqueConstraint(
            "game_day_id",
            "team_id",
            "user_id",
            name="uq_game_day_players_game_day_team_user",
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    game_day_id: int = Field(foreign_key="game_days.id", index=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)
