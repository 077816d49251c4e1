"""All-time player leaderboard route."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.config import settings
from volleyleague.models.standings import LeaderboardResponse
from volleyleague.services.standings_service import get_player_leaderboard
from volleyleague.utils.db_async import get_session

router = APIRouter(prefix="/api/leaderboard", tags=["standings"])


@router.get("", response_model=LeaderboardResponse)
async def leaderboard(
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    db: AsyncSession = Depends(get_session),
) -> LeaderboardResponse:
    """Players ranked by win percentage across every season.

    Also returns the player with the most sets won, which can differ from the
    top-ranked player.
    """
    return await get_player_leaderboard(db, limit=limit or settings.leaderboard_limit)
