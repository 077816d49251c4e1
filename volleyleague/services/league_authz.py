"""Authorization helpers for league API endpoints.

Sign-in happens in front of this service; the gateway forwards the signed-in
user's id in the ``X-User-Id`` header. These dependencies turn that id into a
user row and enforce the admin and captain checks.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.schemas.teams import Team
from volleyleague.schemas.users import LeagueUser
from volleyleague.services.admin_service import is_admin
from volleyleague.utils.db_async import get_session

USER_ID_HEADER = "X-User-Id"


async def get_current_user(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
    db: AsyncSession = Depends(get_session),
) -> LeagueUser:
    """Resolve the calling user from the forwarded id (or raise 401)."""
    if not x_user_id or not x_user_id.isdigit():
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = await db.get(LeagueUser, int(x_user_id))
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


async def require_admin(
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> LeagueUser:
    """FastAPI dependency allowing league admins only (raises 403)."""
    if user.id is None or not await is_admin(db, user.id):
        raise HTTPException(status_code=403, detail="Forbidden")
    return user


async def ensure_captain_or_admin(
    db: AsyncSession,
    *,
    user: LeagueUser,
    team_id: int,
) -> Team:
    """Return the team when ``user`` captains it or is an admin."""
    team = await db.get(Team, team_id)
    if team is None:
        raise HTTPException(status_code=404, detail="Team not found")
    if team.captain_id == user.id:
        return team
    if user.id is not None and await is_admin(db, user.id):
        return team
    raise HTTPException(status_code=403, detail="Only the team captain can do that")
