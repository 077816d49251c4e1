"""Recording game results and keeping season tallies in step.

A team has at most one result per game day. Submitting again replaces the
previous sets through a single ``INSERT ... ON CONFLICT DO UPDATE`` and moves
the season tally by the difference, all in one transaction. The season-team
row is locked first so concurrent submissions for the same team serialize.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.results import BulkTeamResult, TeamResultRead
from volleyleague.schemas.base import utc_now
from volleyleague.schemas.game_days import GameDay, GameDayPlayer, GameResult
from volleyleague.schemas.seasons import SeasonTeam
from volleyleague.schemas.teams import MemberStatus, TeamMember
from volleyleague.services.standings_service import StandingsError

logger = logging.getLogger(__name__)


@dataclass
class _Applied:
    result: GameResult
    previous: Optional[tuple[int, int]]


async def _load_game_day(db: AsyncSession, game_day_id: int) -> GameDay:
    game_day = await db.get(GameDay, game_day_id)
    if game_day is None:
        raise ValueError("game_day_not_found")
    return game_day


async def _apply_result(
    db: AsyncSession,
    game_day: GameDay,
    *,
    team_id: int,
    sets_won: int,
    sets_lost: int,
    reported_by: Optional[int],
) -> _Applied:
    """Upsert one team's result and shift its season tally. Does not commit."""
    if sets_won < 0 or sets_lost < 0:
        raise StandingsError(
            f"sets must be non-negative (won={sets_won}, lost={sets_lost})"
        )

    locked = await db.execute(
        select(SeasonTeam)
        .where(
            SeasonTeam.season_id == game_day.season_id,  # type: ignore[arg-type]
            SeasonTeam.team_id == team_id,  # type: ignore[arg-type]
        )
        .with_for_update()
    )
    season_team = locked.scalar_one_or_none()
    if season_team is None:
        raise ValueError("team_not_in_season")

    prior = await db.execute(
        select(GameResult.sets_won, GameResult.sets_lost).where(  # type: ignore[call-overload]
            GameResult.game_day_id == game_day.id,
            GameResult.team_id == team_id,
        )
    )
    prior_row = prior.first()
    previous = (prior_row.sets_won, prior_row.sets_lost) if prior_row else None

    recorded_at = utc_now()
    stmt = (
        insert(GameResult)
        .values(
            game_day_id=game_day.id,
            team_id=team_id,
            sets_won=sets_won,
            sets_lost=sets_lost,
            recorded_at=recorded_at,
            reported_by=reported_by,
        )
        .on_conflict_do_update(
            constraint="uq_game_results_game_day_team",
            set_={
                "sets_won": sets_won,
                "sets_lost": sets_lost,
                "recorded_at": recorded_at,
                "reported_by": reported_by,
            },
        )
        .returning(GameResult)
    )
    upserted = await db.execute(stmt, execution_options={"populate_existing": True})
    result = upserted.scalar_one()

    old_won, old_lost = previous or (0, 0)
    season_team.total_sets_won += sets_won - old_won
    season_team.total_sets_lost += sets_lost - old_lost
    if season_team.total_sets_won < 0 or season_team.total_sets_lost < 0:
        raise StandingsError(
            f"season tally for team {team_id} would go negative; recompute standings"
        )
    db.add(season_team)

    return _Applied(result=result, previous=previous)


async def _replace_players(
    db: AsyncSession,
    *,
    game_day_id: int,
    team_id: int,
    player_ids: Sequence[int],
) -> list[int]:
    unique_ids = list(dict.fromkeys(player_ids))
    if unique_ids:
        members = await db.execute(
            select(TeamMember.user_id).where(
                TeamMember.team_id == team_id,  # type: ignore[arg-type]
                TeamMember.status == MemberStatus.ACCEPTED,  # type: ignore[arg-type]
                TeamMember.user_id.in_(unique_ids),  # type: ignore[attr-defined]
            )
        )
        if set(members.scalars().all()) != set(unique_ids):
            raise ValueError("player_not_on_roster")

    await db.execute(
        delete(GameDayPlayer).where(
            GameDayPlayer.game_day_id == game_day_id,  # type: ignore[arg-type]
            GameDayPlayer.team_id == team_id,  # type: ignore[arg-type]
        )
    )
    db.add_all(
        GameDayPlayer(game_day_id=game_day_id, team_id=team_id, user_id=user_id)
        for user_id in unique_ids
    )
    return unique_ids


def _to_read(result: GameResult, player_ids: list[int]) -> TeamResultRead:
    return TeamResultRead(
        game_day_id=result.game_day_id,
        team_id=result.team_id,
        sets_won=result.sets_won,
        sets_lost=result.sets_lost,
        recorded_at=result.recorded_at,
        reported_by=result.reported_by,
        player_ids=player_ids,
    )


async def _played_ids(db: AsyncSession, game_day_id: int, team_id: int) -> list[int]:
    rows = await db.execute(
        select(GameDayPlayer.user_id)
        .where(
            GameDayPlayer.game_day_id == game_day_id,  # type: ignore[arg-type]
            GameDayPlayer.team_id == team_id,  # type: ignore[arg-type]
        )
        .order_by(GameDayPlayer.user_id)
    )
    return list(rows.scalars().all())


async def record_team_result(
    db: AsyncSession,
    *,
    game_day_id: int,
    team_id: int,
    sets_won: int,
    sets_lost: int,
    reported_by: Optional[int] = None,
    player_ids: Optional[Sequence[int]] = None,
) -> TeamResultRead:
    """Record (or replace) a team's result for a game day.

    Args:
        db: Async database session
        game_day_id: Game day the result belongs to
        team_id: Reporting team; must be enrolled in the game day's season
        sets_won: Sets the team won (>= 0)
        sets_lost: Sets the team lost (>= 0)
        reported_by: User submitting the result
        player_ids: Who played. Replaces the stored list when given; every id
            must be an accepted member of the team.

    Returns:
        The stored result with its played roster.
    """
    try:
        game_day = await _load_game_day(db, game_day_id)
        applied = await _apply_result(
            db,
            game_day,
            team_id=team_id,
            sets_won=sets_won,
            sets_lost=sets_lost,
            reported_by=reported_by,
        )
        if player_ids is not None:
            played = await _replace_players(
                db, game_day_id=game_day_id, team_id=team_id, player_ids=player_ids
            )
        else:
            played = await _played_ids(db, game_day_id, team_id)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    action = "Replaced" if applied.previous else "Recorded"
    logger.info(
        f"{action} result for team {team_id} on game day {game_day_id}: "
        f"{sets_won}-{sets_lost} ({len(played)} player(s))"
    )
    return _to_read(applied.result, played)


async def record_game_day_results(
    db: AsyncSession,
    *,
    game_day_id: int,
    results: Sequence[BulkTeamResult],
    reported_by: Optional[int] = None,
) -> list[TeamResultRead]:
    """Admin entry of every team's result for one game day in one transaction.

    Played rosters are left as captains reported them.
    """
    team_ids = [r.team_id for r in results]
    if len(team_ids) != len(set(team_ids)):
        raise ValueError("duplicate_team")

    try:
        game_day = await _load_game_day(db, game_day_id)
        # Tally rows are locked in team id order
        by_team: dict[int, _Applied] = {}
        for r in sorted(results, key=lambda r: r.team_id):
            by_team[r.team_id] = await _apply_result(
                db,
                game_day,
                team_id=r.team_id,
                sets_won=r.sets_won,
                sets_lost=r.sets_lost,
                reported_by=reported_by,
            )
        applied = [by_team[team_id] for team_id in team_ids]
        played = [
            await _played_ids(db, game_day_id, a.result.team_id) for a in applied
        ]
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(f"Recorded {len(applied)} result(s) for game day {game_day_id}")
    return [_to_read(a.result, p) for a, p in zip(applied, played)]


async def get_team_result(
    db: AsyncSession,
    *,
    game_day_id: int,
    team_id: int,
) -> Optional[TeamResultRead]:
    """Existing result and played roster, or None when nothing was reported."""
    row = await db.execute(
        select(GameResult).where(
            GameResult.game_day_id == game_day_id,  # type: ignore[arg-type]
            GameResult.team_id == team_id,  # type: ignore[arg-type]
        )
    )
    result = row.scalar_one_or_none()
    if result is None:
        return None
    return _to_read(result, await _played_ids(db, game_day_id, team_id))
