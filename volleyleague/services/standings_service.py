"""Team standings and the all-time player leaderboard.

Rankings are by win percentage over sets:

    win_pct = 100 * won / (won + lost), or 0 when nothing has been played.

Team ties fall back to total sets won; anything still tied keeps its input
order (Python's sort is stable). The leaderboard adds games played as a
third key.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Iterable, Mapping, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.standings import (
    LeaderboardEntry,
    LeaderboardResponse,
    RecomputeResult,
    SeasonStandingsResponse,
    TallyDrift,
    TeamStanding,
)
from volleyleague.schemas.game_days import GameDay, GameDayPlayer, GameResult
from volleyleague.schemas.seasons import Season, SeasonTeam
from volleyleague.schemas.teams import Team
from volleyleague.schemas.users import LeagueUser

logger = logging.getLogger(__name__)

NOT_PLAYED_DISPLAY = "-"


class StandingsError(ValueError):
    """Malformed tallies (negative sets, duplicate results)."""


@dataclass(frozen=True)
class TeamTally:
    team_id: int
    team_name: str
    sets_won: int
    sets_lost: int


@dataclass(frozen=True)
class ResultRow:
    """The fields of a game result the calculator needs."""

    game_day_id: int
    team_id: int
    sets_won: int
    sets_lost: int


@dataclass(frozen=True)
class Appearance:
    """A user marked as having played for a team on a game day."""

    game_day_id: int
    team_id: int
    user_id: int


@dataclass(frozen=True)
class PlayerIdentity:
    user_id: int
    email: str
    display_name: Optional[str] = None


@dataclass
class _PlayerTotals:
    sets_won: int = 0
    sets_lost: int = 0
    games: set[tuple[int, int]] = field(default_factory=set)
    team_names: set[str] = field(default_factory=set)


def _check_sets(won: int, lost: int, what: str) -> None:
    if won < 0 or lost < 0:
        raise StandingsError(
            f"{what} has negative sets (won={won}, lost={lost})"
        )


def has_played(won: int, lost: int) -> bool:
    return won + lost > 0


def win_percentage(won: int, lost: int) -> float:
    """Percentage of sets won, 0 when no sets were played."""
    total = won + lost
    if total == 0:
        return 0.0
    return 100 * won / total


def _win_ratio(won: int, lost: int) -> Fraction:
    # Exact ratio so equal percentages compare equal regardless of float rounding
    total = won + lost
    return Fraction(won, total) if total else Fraction(0)


def format_win_percentage(won: int, lost: int) -> str:
    """'-' for a team that has not played, otherwise e.g. '85.7%'."""
    if not has_played(won, lost):
        return NOT_PLAYED_DISPLAY
    return f"{win_percentage(won, lost):.1f}%"


def rank_teams(tallies: Iterable[TeamTally]) -> list[TeamStanding]:
    """Order teams by win percentage, then sets won.

    Args:
        tallies: Team tallies in a deterministic order (ties keep it)

    Returns:
        Standings with 1-based ranks; empty when no teams were given.
    """
    rows = list(tallies)
    for tally in rows:
        _check_sets(tally.sets_won, tally.sets_lost, f"team {tally.team_id}")

    ordered = sorted(
        rows,
        key=lambda t: (-_win_ratio(t.sets_won, t.sets_lost), -t.sets_won),
    )
    return [
        TeamStanding(
            rank=position,
            team_id=t.team_id,
            team_name=t.team_name,
            total_sets_won=t.sets_won,
            total_sets_lost=t.sets_lost,
            win_percentage=win_percentage(t.sets_won, t.sets_lost),
            has_played=has_played(t.sets_won, t.sets_lost),
            win_percentage_display=format_win_percentage(t.sets_won, t.sets_lost),
        )
        for position, t in enumerate(ordered, start=1)
    ]


def tally_results(
    results: Iterable[ResultRow],
    team_names: Mapping[int, str],
) -> list[TeamTally]:
    """Sum raw results per team.

    Every team in ``team_names`` gets a tally, zero if it has no results, in
    the mapping's order. Results for teams missing from the mapping are
    ignored.
    """
    won: dict[int, int] = defaultdict(int)
    lost: dict[int, int] = defaultdict(int)
    for row in results:
        _check_sets(row.sets_won, row.sets_lost, f"result {row.game_day_id}/{row.team_id}")
        won[row.team_id] += row.sets_won
        lost[row.team_id] += row.sets_lost

    return [
        TeamTally(
            team_id=team_id,
            team_name=name,
            sets_won=won.get(team_id, 0),
            sets_lost=lost.get(team_id, 0),
        )
        for team_id, name in team_names.items()
    ]


def aggregate_leaderboard(
    results: Iterable[ResultRow],
    appearances: Iterable[Appearance],
    team_names: Mapping[int, str],
    players: Mapping[int, PlayerIdentity],
) -> list[LeaderboardEntry]:
    """Build the player leaderboard from results and participation.

    A player is credited with a team's sets for every (game day, team) pair
    they appear in that has a recorded result. Players without any such pair
    are left out entirely.
    """
    by_game: dict[tuple[int, int], ResultRow] = {}
    for row in results:
        _check_sets(row.sets_won, row.sets_lost, f"result {row.game_day_id}/{row.team_id}")
        key = (row.game_day_id, row.team_id)
        if key in by_game:
            raise StandingsError(
                f"duplicate result for game day {key[0]} and team {key[1]}"
            )
        by_game[key] = row

    totals: dict[int, _PlayerTotals] = {}
    for appearance in appearances:
        key = (appearance.game_day_id, appearance.team_id)
        result = by_game.get(key)
        if result is None:
            continue
        player = totals.setdefault(appearance.user_id, _PlayerTotals())
        if key in player.games:
            continue
        player.games.add(key)
        player.sets_won += result.sets_won
        player.sets_lost += result.sets_lost
        player.team_names.add(team_names.get(appearance.team_id, f"Team {appearance.team_id}"))

    rows: list[tuple[PlayerIdentity, _PlayerTotals]] = []
    for user_id in sorted(totals):
        identity = players.get(user_id)
        if identity is None:
            raise StandingsError(f"no user record for player {user_id}")
        rows.append((identity, totals[user_id]))

    rows.sort(
        key=lambda item: (
            -_win_ratio(item[1].sets_won, item[1].sets_lost),
            -item[1].sets_won,
            -len(item[1].games),
        )
    )
    return [
        LeaderboardEntry(
            rank=position,
            user_id=identity.user_id,
            display_name=identity.display_name,
            email=identity.email,
            total_sets_won=t.sets_won,
            total_sets_lost=t.sets_lost,
            games_played=len(t.games),
            win_percentage=win_percentage(t.sets_won, t.sets_lost),
            win_percentage_display=format_win_percentage(t.sets_won, t.sets_lost),
            teams_played_on=sorted(t.team_names),
        )
        for position, (identity, t) in enumerate(rows, start=1)
    ]


def most_sets_won(entries: Iterable[LeaderboardEntry]) -> Optional[LeaderboardEntry]:
    """Entry with the most sets won; the earlier entry wins a tie."""
    best: Optional[LeaderboardEntry] = None
    for entry in entries:
        if best is None or entry.total_sets_won > best.total_sets_won:
            best = entry
    return best


async def get_season_standings(
    db: AsyncSession,
    season_id: int,
) -> SeasonStandingsResponse:
    """Rank a season's enrolled teams from their stored tallies."""
    season = await db.get(Season, season_id)
    if season is None:
        raise ValueError("season_not_found")

    result = await db.execute(
        select(
            SeasonTeam.team_id,
            Team.name,
            SeasonTeam.total_sets_won,
            SeasonTeam.total_sets_lost,
        )  # type: ignore[call-overload]
        .select_from(SeasonTeam)
        .join(Team, Team.id == SeasonTeam.team_id)
        .where(SeasonTeam.season_id == season_id)
        .order_by(SeasonTeam.id)
    )
    tallies = [
        TeamTally(
            team_id=row.team_id,
            team_name=row.name,
            sets_won=row.total_sets_won,
            sets_lost=row.total_sets_lost,
        )
        for row in result.all()
    ]
    standings = rank_teams(tallies)

    return SeasonStandingsResponse(
        season_id=season_id,
        season_name=season.name,
        standings=standings,
        leader=standings[0] if standings else None,
    )


async def get_player_leaderboard(
    db: AsyncSession,
    limit: int = 20,
) -> LeaderboardResponse:
    """All-time leaderboard across every season."""
    result_rows = await db.execute(
        select(
            GameResult.game_day_id,
            GameResult.team_id,
            GameResult.sets_won,
            GameResult.sets_lost,
        )  # type: ignore[call-overload]
    )
    results = [
        ResultRow(
            game_day_id=r.game_day_id,
            team_id=r.team_id,
            sets_won=r.sets_won,
            sets_lost=r.sets_lost,
        )
        for r in result_rows.all()
    ]

    appearance_rows = await db.execute(
        select(
            GameDayPlayer.game_day_id,
            GameDayPlayer.team_id,
            GameDayPlayer.user_id,
        )  # type: ignore[call-overload]
    )
    appearances = [
        Appearance(game_day_id=r.game_day_id, team_id=r.team_id, user_id=r.user_id)
        for r in appearance_rows.all()
    ]
    if not appearances:
        return LeaderboardResponse()

    team_rows = await db.execute(select(Team.id, Team.name))  # type: ignore[call-overload]
    team_names = {r.id: r.name for r in team_rows.all()}

    user_ids = {a.user_id for a in appearances}
    user_rows = await db.execute(
        select(LeagueUser).where(LeagueUser.id.in_(user_ids))  # type: ignore[union-attr]
    )
    players = {
        u.id: PlayerIdentity(user_id=u.id, email=u.email, display_name=u.display_name)
        for u in user_rows.scalars().all()
        if u.id is not None
    }

    entries = aggregate_leaderboard(results, appearances, team_names, players)
    return LeaderboardResponse(
        entries=entries[:limit],
        most_sets_won=most_sets_won(entries),
    )


async def recompute_season_tallies(
    db: AsyncSession,
    season_id: int,
    *,
    apply: bool = False,
) -> RecomputeResult:
    """Derive season tallies from raw results and compare with stored ones.

    Args:
        db: Async database session
        season_id: Season to check
        apply: Overwrite stored tallies that disagree with the derived ones

    Returns:
        RecomputeResult listing every team whose stored tally drifted.
    """
    season = await db.get(Season, season_id)
    if season is None:
        raise ValueError("season_not_found")

    enrolled = await db.execute(
        select(SeasonTeam).where(SeasonTeam.season_id == season_id).order_by(SeasonTeam.id)  # type: ignore[arg-type]
    )
    season_teams = list(enrolled.scalars().all())

    raw = await db.execute(
        select(
            GameResult.game_day_id,
            GameResult.team_id,
            GameResult.sets_won,
            GameResult.sets_lost,
        )  # type: ignore[call-overload]
        .select_from(GameResult)
        .join(GameDay, GameDay.id == GameResult.game_day_id)
        .where(GameDay.season_id == season_id)
    )
    results = [
        ResultRow(
            game_day_id=r.game_day_id,
            team_id=r.team_id,
            sets_won=r.sets_won,
            sets_lost=r.sets_lost,
        )
        for r in raw.all()
    ]

    enrolled_ids = {st.team_id for st in season_teams}
    stray = {r.team_id for r in results} - enrolled_ids
    if stray:
        logger.warning(
            f"Season {season_id} has results for unenrolled team(s) {sorted(stray)}"
        )

    derived = {
        t.team_id: t
        for t in tally_results(results, {st.team_id: str(st.team_id) for st in season_teams})
    }

    drift: list[TallyDrift] = []
    for st in season_teams:
        expected = derived[st.team_id]
        if (st.total_sets_won, st.total_sets_lost) == (expected.sets_won, expected.sets_lost):
            continue
        drift.append(
            TallyDrift(
                team_id=st.team_id,
                stored_won=st.total_sets_won,
                stored_lost=st.total_sets_lost,
                derived_won=expected.sets_won,
                derived_lost=expected.sets_lost,
            )
        )
        logger.warning(
            f"Season {season_id} team {st.team_id} tally drift: stored "
            f"{st.total_sets_won}-{st.total_sets_lost}, derived "
            f"{expected.sets_won}-{expected.sets_lost}"
        )

    if apply and drift:
        for d in drift:
            await db.execute(
                update(SeasonTeam)
                .where(
                    SeasonTeam.season_id == season_id,  # type: ignore[arg-type]
                    SeasonTeam.team_id == d.team_id,  # type: ignore[arg-type]
                )
                .values(total_sets_won=d.derived_won, total_sets_lost=d.derived_lost)
            )
        await db.commit()
        logger.info(f"Rewrote {len(drift)} tally row(s) for season {season_id}")

    return RecomputeResult(
        season_id=season_id,
        teams_checked=len(season_teams),
        drift=drift,
        applied=apply and bool(drift),
    )
