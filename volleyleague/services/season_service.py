"""Season administration: creation, lifecycle status, team enrollment, deletion.

Routes should be thin wrappers around these functions.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.seasons import RecurrenceConfig, SeasonRead, SeasonTeamRead
from volleyleague.schemas.game_days import GameDay, GameDayPlayer, GameResult
from volleyleague.schemas.seasons import Season, SeasonStatus, SeasonTeam
from volleyleague.schemas.teams import Team
from volleyleague.services.schedule_service import RecurrenceRule

logger = logging.getLogger(__name__)


def to_season_read(season: Season) -> SeasonRead:
    rule = RecurrenceRule.from_config(season.recurring_config)
    return SeasonRead(
        id=season.id or 0,
        name=season.name,
        start_date=season.start_date,
        end_date=season.end_date,
        recurring_config=RecurrenceConfig(**rule.to_config()),
        status=season.status,
        created_at=season.created_at,
    )


async def create_season(
    db: AsyncSession,
    *,
    name: str,
    start_date: date,
    end_date: date,
    day_of_week: int,
    time: str,
    exclude_dates: Iterable[date] = (),
) -> SeasonRead:
    """Create a draft season with a weekly recurrence rule.

    Raises:
        ValueError: "invalid_date_range" when start is after end.
        ScheduleError: When the weekday or time is invalid.
    """
    if start_date > end_date:
        raise ValueError("invalid_date_range")
    rule = RecurrenceRule(
        day_of_week=day_of_week,
        time=time,
        exclude_dates=frozenset(exclude_dates),
    )

    season = Season(
        name=name.strip(),
        start_date=start_date,
        end_date=end_date,
        recurring_config=rule.to_config(),
        status=SeasonStatus.DRAFT,
    )
    db.add(season)
    await db.commit()
    await db.refresh(season)

    logger.info(
        f"Created season {season.id} '{season.name}' "
        f"{start_date.isoformat()}..{end_date.isoformat()} on {rule.weekday_name}s"
    )
    return to_season_read(season)


async def list_seasons(db: AsyncSession) -> list[SeasonRead]:
    """All seasons, newest first."""
    result = await db.execute(
        select(Season).order_by(Season.created_at.desc(), Season.id.desc())  # type: ignore[attr-defined,union-attr]
    )
    return [to_season_read(s) for s in result.scalars().all()]


async def get_season(db: AsyncSession, season_id: int) -> SeasonRead:
    season = await db.get(Season, season_id)
    if season is None:
        raise ValueError("season_not_found")
    return to_season_read(season)


async def update_season_status(
    db: AsyncSession,
    season_id: int,
    status: SeasonStatus,
) -> SeasonRead:
    """Move a season to any lifecycle status; transitions are unconstrained."""
    season = await db.get(Season, season_id)
    if season is None:
        raise ValueError("season_not_found")

    previous = season.status
    season.status = status
    db.add(season)
    await db.commit()
    await db.refresh(season)
    logger.info(f"Season {season_id} status {previous.value} -> {status.value}")
    return to_season_read(season)


async def list_season_teams(db: AsyncSession, season_id: int) -> list[SeasonTeamRead]:
    if await db.get(Season, season_id) is None:
        raise ValueError("season_not_found")

    result = await db.execute(
        select(SeasonTeam, Team.name)
        .join(Team, Team.id == SeasonTeam.team_id)  # type: ignore[arg-type]
        .where(SeasonTeam.season_id == season_id)  # type: ignore[arg-type]
        .order_by(Team.name)
    )
    return [
        SeasonTeamRead(
            team_id=st.team_id,
            team_name=name,
            total_sets_won=st.total_sets_won,
            total_sets_lost=st.total_sets_lost,
        )
        for st, name in result.all()
    ]


async def set_season_teams(
    db: AsyncSession,
    season_id: int,
    team_ids: Sequence[int],
) -> list[SeasonTeamRead]:
    """Replace the set of teams enrolled in a season.

    Teams that stay enrolled keep their tallies. A team with recorded results
    in the season cannot be removed.
    """
    season = await db.get(Season, season_id)
    if season is None:
        raise ValueError("season_not_found")

    wanted = set(team_ids)
    if wanted:
        found = await db.execute(select(Team.id).where(Team.id.in_(wanted)))  # type: ignore[union-attr]
        if set(found.scalars().all()) != wanted:
            raise ValueError("team_not_found")

    current = await db.execute(
        select(SeasonTeam.team_id).where(SeasonTeam.season_id == season_id)  # type: ignore[arg-type]
    )
    enrolled = set(current.scalars().all())

    to_remove = enrolled - wanted
    if to_remove:
        played = await db.execute(
            select(GameResult.team_id)
            .join(GameDay, GameDay.id == GameResult.game_day_id)  # type: ignore[arg-type]
            .where(
                GameDay.season_id == season_id,  # type: ignore[arg-type]
                GameResult.team_id.in_(to_remove),  # type: ignore[attr-defined]
            )
            .limit(1)
        )
        if played.first() is not None:
            raise ValueError("team_has_results")
        await db.execute(
            delete(SeasonTeam).where(
                SeasonTeam.season_id == season_id,  # type: ignore[arg-type]
                SeasonTeam.team_id.in_(to_remove),  # type: ignore[attr-defined]
            )
        )

    db.add_all(
        SeasonTeam(season_id=season_id, team_id=team_id)
        for team_id in sorted(wanted - enrolled)
    )
    await db.commit()

    logger.info(
        f"Season {season_id} teams: +{len(wanted - enrolled)} -{len(to_remove)}"
    )
    return await list_season_teams(db, season_id)


async def delete_season(db: AsyncSession, season_id: int) -> None:
    """Delete a season with its game days, results, participation and tallies."""
    season = await db.get(Season, season_id)
    if season is None:
        raise ValueError("season_not_found")

    game_day_ids = select(GameDay.id).where(GameDay.season_id == season_id)  # type: ignore[arg-type]
    await db.execute(
        delete(GameDayPlayer).where(GameDayPlayer.game_day_id.in_(game_day_ids))  # type: ignore[attr-defined]
    )
    await db.execute(
        delete(GameResult).where(GameResult.game_day_id.in_(game_day_ids))  # type: ignore[attr-defined]
    )
    await db.execute(delete(GameDay).where(GameDay.season_id == season_id))  # type: ignore[arg-type]
    await db.execute(delete(SeasonTeam).where(SeasonTeam.season_id == season_id))  # type: ignore[arg-type]
    await db.delete(season)
    await db.commit()
    logger.info(f"Deleted season {season_id} '{season.name}'")
