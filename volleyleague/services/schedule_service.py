"""Season schedule generation.

A season plays once a week on a fixed weekday. The pure helpers here expand
that recurrence rule into calendar dates; the async helpers persist and read
the resulting game days.

Weekdays follow the league convention 0=Sunday .. 6=Saturday, which is not
Python's ``date.weekday()`` numbering (0=Monday).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.schedule import GameDayRead, UpcomingGameDay
from volleyleague.schemas.game_days import GameDay, GameDayPlayer, GameResult
from volleyleague.schemas.seasons import Season, SeasonTeam
from volleyleague.schemas.teams import MemberStatus, TeamMember

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
DEFAULT_GAME_TIME = "19:00"
ONE_WEEK = timedelta(days=7)
EDITABLE_GAME_DAY_FIELDS = frozenset({"description", "image_url"})


class ScheduleError(ValueError):
    """Invalid recurrence rule or weekday."""


def to_sunday_weekday(d: date) -> int:
    """Return the weekday of ``d`` with 0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7


def _check_weekday(day_of_week: Any) -> int:
    if (
        isinstance(day_of_week, bool)
        or not isinstance(day_of_week, int)
        or not 0 <= day_of_week <= 6
    ):
        raise ScheduleError(
            f"day_of_week must be an integer from 0 (Sunday) to 6, got {day_of_week!r}"
        )
    return day_of_week


def _check_time(value: Any) -> str:
    try:
        datetime.strptime(value, "%H:%M")
    except (TypeError, ValueError) as exc:
        raise ScheduleError(f"time must be HH:MM, got {value!r}") from exc
    return value


@dataclass(frozen=True)
class RecurrenceRule:
    """Weekly game slot for a season, stored as the season's recurring_config."""

    day_of_week: int
    time: str = DEFAULT_GAME_TIME
    exclude_dates: frozenset[date] = frozenset()

    def __post_init__(self) -> None:
        _check_weekday(self.day_of_week)
        _check_time(self.time)

    @property
    def weekday_name(self) -> str:
        return WEEKDAY_NAMES[self.day_of_week]

    @classmethod
    def from_config(cls, config: Any) -> RecurrenceRule:
        """Parse the JSON stored on a season row."""
        if not isinstance(config, dict) or "day_of_week" not in config:
            raise ScheduleError("recurring_config must include day_of_week")

        raw_excludes = config.get("exclude_dates") or []
        try:
            excludes = frozenset(date.fromisoformat(str(v)) for v in raw_excludes)
        except ValueError as exc:
            raise ScheduleError(f"invalid exclude_dates entry: {exc}") from exc

        return cls(
            day_of_week=config["day_of_week"],
            time=config.get("time") or DEFAULT_GAME_TIME,
            exclude_dates=excludes,
        )

    def to_config(self) -> dict[str, Any]:
        return {
            "day_of_week": self.day_of_week,
            "time": self.time,
            "exclude_dates": [d.isoformat() for d in sorted(self.exclude_dates)],
        }

    def dates_between(self, start_date: date, end_date: date) -> list[date]:
        return generate_game_dates(
            start_date, end_date, self.day_of_week, self.exclude_dates
        )


def generate_game_dates(
    start_date: date,
    end_date: date,
    day_of_week: int,
    exclude_dates: Iterable[date] = (),
) -> list[date]:
    """Expand a weekly rule into ascending game dates within [start, end].

    The first date is the earliest ``day_of_week`` on or after ``start_date``.
    Excluded dates are skipped without shifting later weeks. An inverted range
    yields an empty list.
    """
    _check_weekday(day_of_week)
    excluded = frozenset(exclude_dates)

    offset = (day_of_week - to_sunday_weekday(start_date)) % 7
    cursor = start_date + timedelta(days=offset)

    dates: list[date] = []
    while cursor <= end_date:
        if cursor not in excluded:
            dates.append(cursor)
        cursor += ONE_WEEK
    return dates


def _to_read(game_day: GameDay) -> GameDayRead:
    return GameDayRead(
        id=game_day.id or 0,
        season_id=game_day.season_id,
        game_date=game_day.game_date,
        weekday=WEEKDAY_NAMES[to_sunday_weekday(game_day.game_date)],
        description=game_day.description,
        image_url=game_day.image_url,
    )


async def generate_season_game_days(
    db: AsyncSession,
    season_id: int,
    *,
    replace: bool = False,
) -> list[GameDayRead]:
    """Persist the season's generated dates as game day rows.

    Args:
        db: Async database session
        season_id: Season to schedule
        replace: Drop an existing schedule first. Refused once any of its
            game days has a recorded result.

    Returns:
        The created game days, ordered by date.
    """
    # Row lock serializes concurrent generation for the same season
    locked = await db.execute(
        select(Season).where(Season.id == season_id).with_for_update()  # type: ignore[arg-type]
    )
    season = locked.scalar_one_or_none()
    if season is None:
        raise ValueError("season_not_found")

    rule = RecurrenceRule.from_config(season.recurring_config)

    existing = await db.execute(
        select(GameDay.id).where(GameDay.season_id == season_id)  # type: ignore[arg-type]
    )
    existing_ids = list(existing.scalars().all())
    if existing_ids:
        if not replace:
            raise ValueError("schedule_exists")
        result_count = await db.scalar(
            select(func.count())
            .select_from(GameResult)
            .where(GameResult.game_day_id.in_(existing_ids))  # type: ignore[attr-defined]
        )
        if result_count:
            raise ValueError("season_has_results")
        await db.execute(
            delete(GameDayPlayer).where(
                GameDayPlayer.game_day_id.in_(existing_ids)  # type: ignore[attr-defined]
            )
        )
        await db.execute(
            delete(GameDay).where(GameDay.season_id == season_id)  # type: ignore[arg-type]
        )
        logger.info(
            f"Cleared {len(existing_ids)} game day(s) for season {season_id}"
        )

    game_days = [
        GameDay(season_id=season_id, game_date=d)
        for d in rule.dates_between(season.start_date, season.end_date)
    ]
    db.add_all(game_days)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ValueError("schedule_exists") from exc

    logger.info(
        f"Generated {len(game_days)} game day(s) for season {season_id} "
        f"({rule.weekday_name}s at {rule.time})"
    )
    return [_to_read(gd) for gd in game_days]


async def list_season_game_days(db: AsyncSession, season_id: int) -> list[GameDayRead]:
    """Return a season's game days in date order."""
    if await db.get(Season, season_id) is None:
        raise ValueError("season_not_found")

    result = await db.execute(
        select(GameDay)
        .where(GameDay.season_id == season_id)  # type: ignore[arg-type]
        .order_by(GameDay.game_date, GameDay.id)  # type: ignore[arg-type]
    )
    return [_to_read(gd) for gd in result.scalars().all()]


async def list_upcoming_game_days(
    db: AsyncSession,
    *,
    user_id: int,
    today: date,
    limit: int = 10,
) -> list[UpcomingGameDay]:
    """Game days on or after ``today`` in seasons the user's teams play in."""
    stmt = (
        select(GameDay, Season.name)
        .join(Season, Season.id == GameDay.season_id)  # type: ignore[arg-type]
        .where(
            GameDay.season_id.in_(  # type: ignore[attr-defined]
                select(SeasonTeam.season_id)
                .join(TeamMember, TeamMember.team_id == SeasonTeam.team_id)  # type: ignore[arg-type]
                .where(
                    TeamMember.user_id == user_id,  # type: ignore[arg-type]
                    TeamMember.status == MemberStatus.ACCEPTED,  # type: ignore[arg-type]
                )
            ),
            GameDay.game_date >= today,  # type: ignore[operator]
        )
        .order_by(GameDay.game_date, GameDay.id)  # type: ignore[arg-type]
        .limit(limit)
    )
    result = await db.execute(stmt)
    return [
        UpcomingGameDay(
            **_to_read(game_day).model_dump(),
            season_name=season_name,
        )
        for game_day, season_name in result.all()
    ]


async def update_game_day(
    db: AsyncSession,
    game_day_id: int,
    changes: dict[str, Any],
) -> GameDayRead:
    """Update the descriptive fields of a game day.

    The date itself is fixed at generation time and cannot be edited.
    """
    unknown = set(changes) - EDITABLE_GAME_DAY_FIELDS
    if unknown:
        raise ValueError(f"uneditable_fields:{','.join(sorted(unknown))}")

    game_day = await db.get(GameDay, game_day_id)
    if game_day is None:
        raise ValueError("game_day_not_found")

    for key, value in changes.items():
        setattr(game_day, key, value)
    db.add(game_day)
    await db.commit()
    await db.refresh(game_day)
    return _to_read(game_day)
