"""Integration-test helpers for seeding league rows and calling as a user."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.schemas.game_days import GameDay, GameDayPlayer, GameResult
from volleyleague.schemas.seasons import Season, SeasonStatus, SeasonTeam
from volleyleague.schemas.teams import MemberStatus, Team, TeamMember
from volleyleague.schemas.users import AdminUser, LeagueUser
from volleyleague.services.league_authz import USER_ID_HEADER


def as_user(user: LeagueUser) -> dict[str, str]:
    """Headers the gateway would forward for ``user``."""
    return {USER_ID_HEADER: str(user.id)}


async def create_user(
    db_session: AsyncSession,
    *,
    email: str,
    display_name: str | None = None,
    admin: bool = False,
) -> LeagueUser:
    user = LeagueUser(email=email.lower(), display_name=display_name)
    db_session.add(user)
    await db_session.flush()
    if admin:
        db_session.add(AdminUser(user_id=user.id))  # type: ignore[arg-type]
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def create_team(
    db_session: AsyncSession,
    *,
    name: str,
    captain: LeagueUser,
    members: Sequence[LeagueUser] = (),
) -> Team:
    """Insert a team with the captain and ``members`` as accepted players."""
    team = Team(name=name, captain_id=captain.id)  # type: ignore[arg-type]
    db_session.add(team)
    await db_session.flush()
    for user in (captain, *members):
        db_session.add(
            TeamMember(
                team_id=team.id,  # type: ignore[arg-type]
                user_id=user.id,  # type: ignore[arg-type]
                status=MemberStatus.ACCEPTED,
            )
        )
    await db_session.commit()
    await db_session.refresh(team)
    return team


async def create_season(
    db_session: AsyncSession,
    *,
    name: str = "Fall League",
    start_date: date = date(2026, 1, 2),
    end_date: date = date(2026, 1, 30),
    day_of_week: int = 5,
    teams: Sequence[Team] = (),
) -> Season:
    season = Season(
        name=name,
        start_date=start_date,
        end_date=end_date,
        recurring_config={"day_of_week": day_of_week, "time": "19:00", "exclude_dates": []},
        status=SeasonStatus.ACTIVE,
    )
    db_session.add(season)
    await db_session.flush()
    for team in teams:
        db_session.add(SeasonTeam(season_id=season.id, team_id=team.id))  # type: ignore[arg-type]
    await db_session.commit()
    await db_session.refresh(season)
    return season


async def create_game_day(
    db_session: AsyncSession,
    *,
    season: Season,
    game_date: date,
) -> GameDay:
    game_day = GameDay(season_id=season.id, game_date=game_date)  # type: ignore[arg-type]
    db_session.add(game_day)
    await db_session.commit()
    await db_session.refresh(game_day)
    return game_day


async def insert_raw_result(
    db_session: AsyncSession,
    *,
    game_day: GameDay,
    team: Team,
    sets_won: int,
    sets_lost: int,
    players: Sequence[LeagueUser] = (),
) -> None:
    """Write a result row directly, leaving season tallies untouched."""
    db_session.add(
        GameResult(
            game_day_id=game_day.id,  # type: ignore[arg-type]
            team_id=team.id,  # type: ignore[arg-type]
            sets_won=sets_won,
            sets_lost=sets_lost,
        )
    )
    for user in players:
        db_session.add(
            GameDayPlayer(
                game_day_id=game_day.id,  # type: ignore[arg-type]
                team_id=team.id,  # type: ignore[arg-type]
                user_id=user.id,  # type: ignore[arg-type]
            )
        )
    await db_session.commit()
