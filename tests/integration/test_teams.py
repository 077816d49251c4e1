"""Integration tests for teams, rosters and invites."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.integration.league_helpers import as_user, create_team, create_user
from volleyleague.services import team_service


@pytest.mark.asyncio
async def test_create_team_adds_members_and_invites(
    app_client: AsyncClient, db_session: AsyncSession
):
    captain = await create_user(db_session, email="cap@example.com")
    await create_user(db_session, email="ana@example.com", display_name="Ana")

    response = await app_client.post(
        "/api/teams",
        json={
            "name": "Spikers",
            "player_emails": ["ANA@example.com", "new@example.com", "cap@example.com"],
        },
        headers=as_user(captain),
    )
    assert response.status_code == 201
    team = response.json()
    assert team["is_captain"] is True

    roster = await app_client.get(f"/api/teams/{team['id']}/roster", headers=as_user(captain))
    assert roster.status_code == 200
    body = roster.json()
    assert sorted(m["email"] for m in body["members"]) == ["ana@example.com", "cap@example.com"]
    assert [i["email"] for i in body["invites"]] == ["new@example.com"]
    assert body["roster_limit"] == 10

    mine = await app_client.get("/api/teams/mine", headers=as_user(captain))
    assert [t["name"] for t in mine.json()] == ["Spikers"]


@pytest.mark.asyncio
async def test_team_name_must_be_unique(app_client: AsyncClient, db_session: AsyncSession):
    captain = await create_user(db_session, email="cap@example.com")
    await create_team(db_session, name="Spikers", captain=captain)

    response = await app_client.post(
        "/api/teams", json={"name": "spikers"}, headers=as_user(captain)
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "team_name_taken"


@pytest.mark.asyncio
async def test_roster_limit_counts_invites(db_session: AsyncSession):
    captain = await create_user(db_session, email="cap@example.com")
    with pytest.raises(ValueError, match="roster_full"):
        await team_service.create_team(
            db_session,
            captain=captain,
            name="Crowded",
            player_emails=["a@example.com", "b@example.com"],
            roster_limit=2,
        )

    team = await team_service.create_team(
        db_session,
        captain=captain,
        name="Pair",
        player_emails=["a@example.com"],
        roster_limit=2,
    )
    with pytest.raises(ValueError, match="roster_full"):
        await team_service.add_player(
            db_session,
            team_id=team.id,
            email="b@example.com",
            invited_by=captain.id,
            roster_limit=2,
        )


@pytest.mark.asyncio
async def test_add_player_outcomes(app_client: AsyncClient, db_session: AsyncSession):
    captain = await create_user(db_session, email="cap@example.com")
    await create_user(db_session, email="ana@example.com")
    team = await create_team(db_session, name="Spikers", captain=captain)
    url = f"/api/teams/{team.id}/players"

    added = await app_client.post(url, json={"email": "ana@example.com"}, headers=as_user(captain))
    assert added.status_code == 201
    assert added.json() == {"outcome": "added", "email": "ana@example.com"}

    invited = await app_client.post(url, json={"email": "New@Example.com"}, headers=as_user(captain))
    assert invited.json() == {"outcome": "invited", "email": "new@example.com"}

    again = await app_client.post(url, json={"email": "new@example.com"}, headers=as_user(captain))
    assert again.status_code == 409
    assert again.json()["detail"] == "already_invited"


@pytest.mark.asyncio
async def test_only_captain_edits_roster(app_client: AsyncClient, db_session: AsyncSession):
    captain = await create_user(db_session, email="cap@example.com")
    player = await create_user(db_session, email="ana@example.com")
    team = await create_team(db_session, name="Spikers", captain=captain, members=[player])

    response = await app_client.post(
        f"/api/teams/{team.id}/players",
        json={"email": "new@example.com"},
        headers=as_user(player),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_remove_member_and_cancel_invite(
    app_client: AsyncClient, db_session: AsyncSession
):
    captain = await create_user(db_session, email="cap@example.com")
    player = await create_user(db_session, email="ana@example.com")
    team = await create_team(db_session, name="Spikers", captain=captain, members=[player])
    await team_service.add_player(
        db_session, team_id=team.id, email="new@example.com", invited_by=captain.id
    )

    roster = await team_service.get_roster(db_session, team.id)
    by_user = {m.user_id: m.member_id for m in roster.members}
    headers = as_user(captain)

    removed = await app_client.delete(
        f"/api/teams/{team.id}/members/{by_user[player.id]}", headers=headers
    )
    assert removed.status_code == 204

    captain_removal = await app_client.delete(
        f"/api/teams/{team.id}/members/{by_user[captain.id]}", headers=headers
    )
    assert captain_removal.status_code == 403

    cancelled = await app_client.delete(
        f"/api/teams/{team.id}/invites/{roster.invites[0].invite_id}", headers=headers
    )
    assert cancelled.status_code == 204

    roster = await team_service.get_roster(db_session, team.id)
    assert [m.user_id for m in roster.members] == [captain.id]
    assert roster.invites == []
