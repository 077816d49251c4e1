"""Integration tests for granting and revoking league-admin rights."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.integration.league_helpers import as_user, create_user


@pytest.mark.asyncio
async def test_grant_and_revoke(app_client: AsyncClient, db_session: AsyncSession):
    admin = await create_user(db_session, email="admin@example.com", admin=True)
    player = await create_user(db_session, email="ana@example.com", display_name="Ana")
    headers = as_user(admin)

    granted = await app_client.post(
        "/api/admins", json={"email": "ANA@example.com"}, headers=headers
    )
    assert granted.status_code == 201
    assert granted.json()["user_id"] == player.id

    duplicate = await app_client.post(
        "/api/admins", json={"email": "ana@example.com"}, headers=headers
    )
    assert duplicate.status_code == 409

    listed = await app_client.get("/api/admins", headers=headers)
    assert {a["email"] for a in listed.json()} == {"admin@example.com", "ana@example.com"}

    revoked = await app_client.delete(f"/api/admins/{player.id}", headers=headers)
    assert revoked.status_code == 204
    assert (await app_client.get("/api/admins", headers=as_user(player))).status_code == 403


@pytest.mark.asyncio
async def test_admin_cannot_revoke_self(app_client: AsyncClient, db_session: AsyncSession):
    admin = await create_user(db_session, email="admin@example.com", admin=True)
    response = await app_client.delete(f"/api/admins/{admin.id}", headers=as_user(admin))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_grant_unknown_email(app_client: AsyncClient, db_session: AsyncSession):
    admin = await create_user(db_session, email="admin@example.com", admin=True)
    response = await app_client.post(
        "/api/admins", json={"email": "ghost@example.com"}, headers=as_user(admin)
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_user_header_is_unauthorized(app_client: AsyncClient):
    response = await app_client.get("/api/admins", headers={"X-User-Id": "999999"})
    assert response.status_code == 401
