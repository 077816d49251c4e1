"""Integration tests for season standings, the leaderboard and tally recompute."""

from datetime import date

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.integration.league_helpers import (
    create_game_day,
    create_season,
    create_team,
    create_user,
    insert_raw_result,
)
from volleyleague.services.results_service import record_team_result
from volleyleague.services.standings_service import (
    get_season_standings,
    recompute_season_tallies,
)


@pytest.mark.asyncio
async def test_season_standings_ranked(app_client: AsyncClient, db_session: AsyncSession):
    captain = await create_user(db_session, email="cap@example.com")
    a = await create_team(db_session, name="A", captain=captain)
    b = await create_team(db_session, name="B", captain=captain)
    c = await create_team(db_session, name="C", captain=captain)
    idle = await create_team(db_session, name="Idle", captain=captain)
    season = await create_season(db_session, teams=[c, b, a, idle])
    game_day = await create_game_day(db_session, season=season, game_date=date(2026, 1, 2))

    for team, won, lost in ((a, 12, 2), (b, 10, 4), (c, 8, 6)):
        await record_team_result(
            db_session, game_day_id=game_day.id, team_id=team.id, sets_won=won, sets_lost=lost
        )

    response = await app_client.get(f"/api/seasons/{season.id}/standings")
    assert response.status_code == 200
    body = response.json()
    assert [s["team_name"] for s in body["standings"]] == ["A", "B", "C", "Idle"]
    assert [s["win_percentage_display"] for s in body["standings"]] == [
        "85.7%",
        "71.4%",
        "57.1%",
        "-",
    ]
    assert body["leader"]["team_name"] == "A"


@pytest.mark.asyncio
async def test_standings_for_unknown_season(app_client: AsyncClient):
    response = await app_client.get("/api/seasons/999999/standings")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_empty_season_has_no_leader(db_session: AsyncSession):
    season = await create_season(db_session)
    standings = await get_season_standings(db_session, season.id)
    assert standings.standings == []
    assert standings.leader is None


@pytest.mark.asyncio
async def test_leaderboard_excludes_players_who_never_played(
    app_client: AsyncClient, db_session: AsyncSession
):
    ana = await create_user(db_session, email="ana@example.com", display_name="Ana")
    ben = await create_user(db_session, email="ben@example.com", display_name="Ben")
    bench = await create_user(db_session, email="bench@example.com")
    spikers = await create_team(db_session, name="Spikers", captain=ana, members=[bench])
    diggers = await create_team(db_session, name="Diggers", captain=ben)
    season = await create_season(db_session, teams=[spikers, diggers])
    game_day = await create_game_day(db_session, season=season, game_date=date(2026, 1, 2))

    await record_team_result(
        db_session,
        game_day_id=game_day.id,
        team_id=spikers.id,
        sets_won=2,
        sets_lost=0,
        player_ids=[ana.id],
    )
    await record_team_result(
        db_session,
        game_day_id=game_day.id,
        team_id=diggers.id,
        sets_won=6,
        sets_lost=4,
        player_ids=[ben.id],
    )

    response = await app_client.get("/api/leaderboard")
    assert response.status_code == 200
    body = response.json()
    assert [e["display_name"] for e in body["entries"]] == ["Ana", "Ben"]
    assert bench.id not in [e["user_id"] for e in body["entries"]]
    assert body["entries"][0]["teams_played_on"] == ["Spikers"]
    assert body["most_sets_won"]["display_name"] == "Ben"


@pytest.mark.asyncio
async def test_leaderboard_limit(app_client: AsyncClient, db_session: AsyncSession):
    ana = await create_user(db_session, email="ana@example.com")
    ben = await create_user(db_session, email="ben@example.com")
    team = await create_team(db_session, name="Spikers", captain=ana, members=[ben])
    season = await create_season(db_session, teams=[team])
    game_day = await create_game_day(db_session, season=season, game_date=date(2026, 1, 2))
    await record_team_result(
        db_session,
        game_day_id=game_day.id,
        team_id=team.id,
        sets_won=2,
        sets_lost=1,
        player_ids=[ana.id, ben.id],
    )

    response = await app_client.get("/api/leaderboard", params={"limit": 1})
    assert len(response.json()["entries"]) == 1


@pytest.mark.asyncio
async def test_recompute_reports_and_repairs_drift(db_session: AsyncSession):
    captain = await create_user(db_session, email="cap@example.com")
    team = await create_team(db_session, name="Spikers", captain=captain)
    season = await create_season(db_session, teams=[team])
    game_day = await create_game_day(db_session, season=season, game_date=date(2026, 1, 2))
    await insert_raw_result(db_session, game_day=game_day, team=team, sets_won=3, sets_lost=2)

    checked = await recompute_season_tallies(db_session, season.id)
    assert checked.teams_checked == 1
    assert [(d.derived_won, d.derived_lost) for d in checked.drift] == [(3, 2)]
    assert checked.applied is False

    repaired = await recompute_season_tallies(db_session, season.id, apply=True)
    assert repaired.applied is True

    standings = await get_season_standings(db_session, season.id)
    assert (standings.leader.total_sets_won, standings.leader.total_sets_lost) == (3, 2)

    clean = await recompute_season_tallies(db_session, season.id)
    assert clean.drift == []
