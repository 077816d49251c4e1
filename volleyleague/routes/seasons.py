"""Season API routes.

Provides endpoints for:
- Season administration (create, status, delete)
- Enrolling teams in a season
- Generating and listing the season's game days
- Season standings
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.config import settings
from volleyleague.models.schedule import GameDayRead
from volleyleague.models.seasons import (
    SeasonCreate,
    SeasonRead,
    SeasonStatusUpdate,
    SeasonTeamRead,
    SeasonTeamsUpdate,
)
from volleyleague.models.standings import SeasonStandingsResponse
from volleyleague.routes.errors import http_error
from volleyleague.schemas.users import LeagueUser
from volleyleague.services import schedule_service, season_service
from volleyleague.services.league_authz import require_admin
from volleyleague.services.standings_service import get_season_standings
from volleyleague.utils.db_async import get_session

router = APIRouter(prefix="/api/seasons", tags=["seasons"])


@router.get("", response_model=list[SeasonRead])
async def list_seasons(
    db: AsyncSession = Depends(get_session),
) -> list[SeasonRead]:
    """List seasons, newest first."""
    return await season_service.list_seasons(db)


@router.post("", response_model=SeasonRead, status_code=201)
async def create_season(
    payload: SeasonCreate,
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> SeasonRead:
    """Create a draft season (admin).

    Weekday and time fall back to the league defaults when omitted.
    """
    try:
        return await season_service.create_season(
            db,
            name=payload.name,
            start_date=payload.start_date,
            end_date=payload.end_date,
            day_of_week=(
                payload.day_of_week
                if payload.day_of_week is not None
                else settings.default_game_weekday
            ),
            time=payload.time or settings.default_game_time,
            exclude_dates=payload.exclude_dates,
        )
    except ValueError as exc:
        raise http_error(exc) from exc


@router.get("/{season_id}", response_model=SeasonRead)
async def get_season(
    season_id: int,
    db: AsyncSession = Depends(get_session),
) -> SeasonRead:
    try:
        return await season_service.get_season(db, season_id)
    except ValueError as exc:
        raise http_error(exc) from exc


@router.patch("/{season_id}/status", response_model=SeasonRead)
async def update_status(
    season_id: int,
    payload: SeasonStatusUpdate,
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> SeasonRead:
    """Set the season's lifecycle status (admin). Any transition is allowed."""
    try:
        return await season_service.update_season_status(db, season_id, payload.status)
    except ValueError as exc:
        raise http_error(exc) from exc


@router.delete("/{season_id}", status_code=204)
async def delete_season(
    season_id: int,
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> None:
    """Delete a season and everything recorded under it (admin)."""
    try:
        await season_service.delete_season(db, season_id)
    except ValueError as exc:
        raise http_error(exc) from exc


@router.get("/{season_id}/teams", response_model=list[SeasonTeamRead])
async def list_season_teams(
    season_id: int,
    db: AsyncSession = Depends(get_session),
) -> list[SeasonTeamRead]:
    try:
        return await season_service.list_season_teams(db, season_id)
    except ValueError as exc:
        raise http_error(exc) from exc


@router.put("/{season_id}/teams", response_model=list[SeasonTeamRead])
async def set_season_teams(
    season_id: int,
    payload: SeasonTeamsUpdate,
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> list[SeasonTeamRead]:
    """Replace the teams enrolled in the season (admin)."""
    try:
        return await season_service.set_season_teams(db, season_id, payload.team_ids)
    except ValueError as exc:
        raise http_error(exc) from exc


@router.post(
    "/{season_id}/game-days/generate",
    response_model=list[GameDayRead],
    status_code=201,
)
async def generate_game_days(
    season_id: int,
    replace: bool = Query(default=False, description="Replace an existing schedule"),
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> list[GameDayRead]:
    """Expand the season's weekly rule into game days (admin)."""
    try:
        return await schedule_service.generate_season_game_days(
            db, season_id, replace=replace
        )
    except ValueError as exc:
        raise http_error(exc) from exc


@router.get("/{season_id}/game-days", response_model=list[GameDayRead])
async def list_game_days(
    season_id: int,
    db: AsyncSession = Depends(get_session),
) -> list[GameDayRead]:
    """Season schedule in date order."""
    try:
        return await schedule_service.list_season_game_days(db, season_id)
    except ValueError as exc:
        raise http_error(exc) from exc


@router.get("/{season_id}/standings", response_model=SeasonStandingsResponse)
async def season_standings(
    season_id: int,
    db: AsyncSession = Depends(get_session),
) -> SeasonStandingsResponse:
    """Teams ranked by win percentage, then sets won."""
    try:
        return await get_season_standings(db, season_id)
    except ValueError as exc:
        raise http_error(exc) from exc
