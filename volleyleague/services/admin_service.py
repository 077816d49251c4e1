"""League-admin grants."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.admins import AdminRead
from volleyleague.schemas.users import AdminUser, LeagueUser

logger = logging.getLogger(__name__)


async def is_admin(db: AsyncSession, user_id: int) -> bool:
    return await db.get(AdminUser, user_id) is not None


async def list_admins(db: AsyncSession) -> list[AdminRead]:
    """Admins, most recently granted first."""
    result = await db.execute(
        select(AdminUser, LeagueUser)
        .join(LeagueUser, LeagueUser.id == AdminUser.user_id)  # type: ignore[arg-type]
        .order_by(AdminUser.granted_at.desc())  # type: ignore[attr-defined]
    )
    return [
        AdminRead(
            user_id=admin.user_id,
            email=user.email,
            display_name=user.display_name,
            granted_at=admin.granted_at,
        )
        for admin, user in result.all()
    ]


async def grant_admin(db: AsyncSession, *, email: str, granted_by: int) -> AdminRead:
    """Grant admin rights to the user registered under ``email``.

    Raises:
        ValueError: "user_not_found" or "already_admin".
    """
    result = await db.execute(
        select(LeagueUser).where(func.lower(LeagueUser.email) == email.strip().lower())
    )
    user = result.scalar_one_or_none()
    if user is None or user.id is None:
        raise ValueError("user_not_found")
    if await is_admin(db, user.id):
        raise ValueError("already_admin")

    admin = AdminUser(user_id=user.id)
    db.add(admin)
    await db.commit()
    await db.refresh(admin)
    logger.info(f"User {user.id} granted admin by user {granted_by}")
    return AdminRead(
        user_id=user.id,
        email=user.email,
        display_name=user.display_name,
        granted_at=admin.granted_at,
    )


async def revoke_admin(db: AsyncSession, *, user_id: int, revoked_by: int) -> None:
    """Remove admin rights. Admins cannot revoke themselves."""
    if user_id == revoked_by:
        raise ValueError("cannot_revoke_self")
    admin = await db.get(AdminUser, user_id)
    if admin is None:
        raise ValueError("admin_not_found")

    await db.delete(admin)
    await db.commit()
    logger.info(f"User {user_id} admin revoked by user {revoked_by}")
