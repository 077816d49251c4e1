"""League newsletters: admin authoring plus the public published feed."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.newsletters import NewsletterRead
from volleyleague.schemas.base import utc_now
from volleyleague.schemas.newsletters import Newsletter

logger = logging.getLogger(__name__)


def _to_read(newsletter: Newsletter) -> NewsletterRead:
    return NewsletterRead(
        id=newsletter.id or 0,
        title=newsletter.title,
        content=newsletter.content,
        created_by=newsletter.created_by,
        created_at=newsletter.created_at,
        published_at=newsletter.published_at,
    )


async def _get(db: AsyncSession, newsletter_id: int) -> Newsletter:
    newsletter = await db.get(Newsletter, newsletter_id)
    if newsletter is None:
        raise ValueError("newsletter_not_found")
    return newsletter


async def list_published(db: AsyncSession, limit: int = 50) -> list[NewsletterRead]:
    """Published newsletters, most recently published first."""
    result = await db.execute(
        select(Newsletter)
        .where(Newsletter.published_at.is_not(None))  # type: ignore[union-attr]
        .order_by(Newsletter.published_at.desc())  # type: ignore[union-attr]
        .limit(limit)
    )
    return [_to_read(n) for n in result.scalars().all()]


async def list_all(db: AsyncSession) -> list[NewsletterRead]:
    """Every newsletter including drafts, newest first (admin view)."""
    result = await db.execute(
        select(Newsletter).order_by(Newsletter.created_at.desc(), Newsletter.id.desc())  # type: ignore[attr-defined,union-attr]
    )
    return [_to_read(n) for n in result.scalars().all()]


async def create_newsletter(
    db: AsyncSession,
    *,
    title: str,
    content: str,
    created_by: int,
) -> NewsletterRead:
    """Create an unpublished draft."""
    newsletter = Newsletter(title=title.strip(), content=content, created_by=created_by)
    db.add(newsletter)
    await db.commit()
    await db.refresh(newsletter)
    logger.info(f"Newsletter {newsletter.id} drafted by user {created_by}")
    return _to_read(newsletter)


async def update_newsletter(
    db: AsyncSession,
    newsletter_id: int,
    changes: dict[str, Any],
) -> NewsletterRead:
    newsletter = await _get(db, newsletter_id)
    for key in ("title", "content"):
        if changes.get(key) is not None:
            setattr(newsletter, key, changes[key])
    db.add(newsletter)
    await db.commit()
    await db.refresh(newsletter)
    return _to_read(newsletter)


async def set_published(
    db: AsyncSession,
    newsletter_id: int,
    published: bool,
) -> NewsletterRead:
    """Publish (stamp published_at) or unpublish (clear it)."""
    newsletter = await _get(db, newsletter_id)
    if published and newsletter.published_at is None:
        newsletter.published_at = utc_now()
    elif not published:
        newsletter.published_at = None
    db.add(newsletter)
    await db.commit()
    await db.refresh(newsletter)
    logger.info(
        f"Newsletter {newsletter_id} {'published' if published else 'unpublished'}"
    )
    return _to_read(newsletter)


async def delete_newsletter(db: AsyncSession, newsletter_id: int) -> None:
    newsletter = await _get(db, newsletter_id)
    await db.delete(newsletter)
    await db.commit()
    logger.info(f"Newsletter {newsletter_id} deleted")
