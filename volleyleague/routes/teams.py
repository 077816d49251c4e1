"""Team and roster API routes.

Any signed-in user may create a team and becomes its captain. Roster changes
are limited to the captain (or an admin).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.config import settings
from volleyleague.models.teams import (
    AddPlayerRequest,
    AddPlayerResult,
    RosterResponse,
    TeamCreate,
    TeamRead,
)
from volleyleague.routes.errors import http_error
from volleyleague.schemas.users import LeagueUser
from volleyleague.services import team_service
from volleyleague.services.league_authz import ensure_captain_or_admin, get_current_user
from volleyleague.utils.db_async import get_session

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.get("", response_model=list[TeamRead])
async def list_teams(
    db: AsyncSession = Depends(get_session),
) -> list[TeamRead]:
    """All teams by name."""
    return await team_service.list_all_teams(db)


@router.get("/mine", response_model=list[TeamRead])
async def my_teams(
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> list[TeamRead]:
    """Teams the caller plays on."""
    return await team_service.list_user_teams(db, user.id)  # type: ignore[arg-type]


@router.post("", response_model=TeamRead, status_code=201)
async def create_team(
    payload: TeamCreate,
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> TeamRead:
    try:
        return await team_service.create_team(
            db,
            captain=user,
            name=payload.name,
            player_emails=payload.player_emails,
            roster_limit=settings.roster_limit,
        )
    except ValueError as exc:
        raise http_error(exc) from exc


@router.get("/{team_id}/roster", response_model=RosterResponse)
async def team_roster(
    team_id: int,
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> RosterResponse:
    """Members and pending invites."""
    try:
        return await team_service.get_roster(
            db, team_id, viewer_id=user.id, roster_limit=settings.roster_limit
        )
    except ValueError as exc:
        raise http_error(exc) from exc


@router.post("/{team_id}/players", response_model=AddPlayerResult, status_code=201)
async def add_player(
    team_id: int,
    payload: AddPlayerRequest,
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> AddPlayerResult:
    """Add a registered player or invite an email (captain)."""
    await ensure_captain_or_admin(db, user=user, team_id=team_id)
    try:
        return await team_service.add_player(
            db,
            team_id=team_id,
            email=payload.email,
            invited_by=user.id,  # type: ignore[arg-type]
            roster_limit=settings.roster_limit,
        )
    except ValueError as exc:
        raise http_error(exc) from exc


@router.delete("/{team_id}/members/{member_id}", status_code=204)
async def remove_member(
    team_id: int,
    member_id: int,
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> None:
    await ensure_captain_or_admin(db, user=user, team_id=team_id)
    try:
        await team_service.remove_member(db, team_id=team_id, member_id=member_id)
    except ValueError as exc:
        raise http_error(exc) from exc


@router.delete("/{team_id}/invites/{invite_id}", status_code=204)
async def cancel_invite(
    team_id: int,
    invite_id: int,
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> None:
    await ensure_captain_or_admin(db, user=user, team_id=team_id)
    try:
        await team_service.cancel_invite(db, team_id=team_id, invite_id=invite_id)
    except ValueError as exc:
        raise http_error(exc) from exc
