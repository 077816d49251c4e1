"""Game day API routes: schedule details, upcoming games and results."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.results import (
    GameDayResultsSubmit,
    TeamResultRead,
    TeamResultSubmit,
)
from volleyleague.models.schedule import GameDayRead, GameDayUpdate, UpcomingGameDay
from volleyleague.routes.errors import http_error
from volleyleague.schemas.users import LeagueUser
from volleyleague.services import results_service, schedule_service
from volleyleague.services.league_authz import (
    ensure_captain_or_admin,
    get_current_user,
    require_admin,
)
from volleyleague.utils.db_async import get_session

router = APIRouter(prefix="/api/game-days", tags=["game-days"])


@router.get("/upcoming", response_model=list[UpcomingGameDay])
async def upcoming_game_days(
    limit: int = Query(default=10, ge=1, le=50),
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> list[UpcomingGameDay]:
    """Next game days for the seasons the caller's teams are enrolled in."""
    return await schedule_service.list_upcoming_game_days(
        db,
        user_id=user.id,  # type: ignore[arg-type]
        today=date.today(),
        limit=limit,
    )


@router.patch("/{game_day_id}", response_model=GameDayRead)
async def update_game_day(
    game_day_id: int,
    payload: GameDayUpdate,
    db: AsyncSession = Depends(get_session),
    _admin: LeagueUser = Depends(require_admin),
) -> GameDayRead:
    """Set the description and schedule image of a game day (admin)."""
    try:
        return await schedule_service.update_game_day(
            db, game_day_id, payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise http_error(exc) from exc


@router.get("/{game_day_id}/results/{team_id}", response_model=TeamResultRead)
async def get_team_result(
    game_day_id: int,
    team_id: int,
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> TeamResultRead:
    """A team's reported result and played roster (captain or admin)."""
    await ensure_captain_or_admin(db, user=user, team_id=team_id)
    result = await results_service.get_team_result(
        db, game_day_id=game_day_id, team_id=team_id
    )
    if result is None:
        raise HTTPException(status_code=404, detail="result_not_found")
    return result


@router.put("/{game_day_id}/results/{team_id}", response_model=TeamResultRead)
async def report_team_result(
    game_day_id: int,
    team_id: int,
    payload: TeamResultSubmit,
    user: LeagueUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> TeamResultRead:
    """Report or correct a team's sets and who played (captain or admin)."""
    await ensure_captain_or_admin(db, user=user, team_id=team_id)
    try:
        return await results_service.record_team_result(
            db,
            game_day_id=game_day_id,
            team_id=team_id,
            sets_won=payload.sets_won,
            sets_lost=payload.sets_lost,
            reported_by=user.id,
            player_ids=payload.player_ids,
        )
    except ValueError as exc:
        raise http_error(exc) from exc


@router.put("/{game_day_id}/results", response_model=list[TeamResultRead])
async def enter_game_day_results(
    game_day_id: int,
    payload: GameDayResultsSubmit,
    admin: LeagueUser = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> list[TeamResultRead]:
    """Enter results for several teams on one game day (admin)."""
    try:
        return await results_service.record_game_day_results(
            db,
            game_day_id=game_day_id,
            results=payload.results,
            reported_by=admin.id,
        )
    except ValueError as exc:
        raise http_error(exc) from exc
