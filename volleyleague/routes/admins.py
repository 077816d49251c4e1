"""League-admin management routes (admin only)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.admins import AdminGrant, AdminRead
from volleyleague.routes.errors import http_error
from volleyleague.schemas.users import LeagueUser
from volleyleague.services import admin_service
from volleyleague.services.league_authz import require_admin
from volleyleague.utils.db_async import get_session

router = APIRouter(prefix="/api/admins", tags=["admins"])


@router.get("", response_model=list[AdminRead])
async def list_admins(
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> list[AdminRead]:
    return await admin_service.list_admins(db)


@router.post("", response_model=AdminRead, status_code=201)
async def grant_admin(
    payload: AdminGrant,
    admin: LeagueUser = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> AdminRead:
    """Grant admin rights to a registered user by email."""
    try:
        return await admin_service.grant_admin(
            db, email=payload.email, granted_by=admin.id  # type: ignore[arg-type]
        )
    except ValueError as exc:
        raise http_error(exc) from exc


@router.delete("/{user_id}", status_code=204)
async def revoke_admin(
    user_id: int,
    admin: LeagueUser = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> None:
    try:
        await admin_service.revoke_admin(
            db, user_id=user_id, revoked_by=admin.id  # type: ignore[arg-type]
        )
    except ValueError as exc:
        raise http_error(exc) from exc
