"""Newsletter API routes.

The published feed is public; drafting and publishing are admin-only.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.newsletters import (
    NewsletterCreate,
    NewsletterRead,
    NewsletterUpdate,
)
from volleyleague.routes.errors import http_error
from volleyleague.schemas.users import LeagueUser
from volleyleague.services import newsletter_service
from volleyleague.services.league_authz import require_admin
from volleyleague.utils.db_async import get_session

router = APIRouter(prefix="/api/newsletters", tags=["newsletters"])


@router.get("", response_model=list[NewsletterRead])
async def list_published(
    limit: int = Query(default=50, ge=1, le=200),
    db: AsyncSession = Depends(get_session),
) -> list[NewsletterRead]:
    """Published newsletters, latest first."""
    return await newsletter_service.list_published(db, limit=limit)


@router.get("/all", response_model=list[NewsletterRead])
async def list_all(
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> list[NewsletterRead]:
    """Drafts and published newsletters (admin)."""
    return await newsletter_service.list_all(db)


@router.post("", response_model=NewsletterRead, status_code=201)
async def create_newsletter(
    payload: NewsletterCreate,
    admin: LeagueUser = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> NewsletterRead:
    return await newsletter_service.create_newsletter(
        db,
        title=payload.title,
        content=payload.content,
        created_by=admin.id,  # type: ignore[arg-type]
    )


@router.patch("/{newsletter_id}", response_model=NewsletterRead)
async def update_newsletter(
    newsletter_id: int,
    payload: NewsletterUpdate,
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> NewsletterRead:
    try:
        return await newsletter_service.update_newsletter(
            db, newsletter_id, payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise http_error(exc) from exc


@router.post("/{newsletter_id}/publish", response_model=NewsletterRead)
async def publish_newsletter(
    newsletter_id: int,
    published: bool = Query(default=True, description="False unpublishes"),
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> NewsletterRead:
    try:
        return await newsletter_service.set_published(db, newsletter_id, published)
    except ValueError as exc:
        raise http_error(exc) from exc


@router.delete("/{newsletter_id}", status_code=204)
async def delete_newsletter(
    newsletter_id: int,
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> None:
    try:
        await newsletter_service.delete_newsletter(db, newsletter_id)
    except ValueError as exc:
        raise http_error(exc) from exc
