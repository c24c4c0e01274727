"""API tests for registration, sign-in and guest redemption."""

from datetime import timedelta

import pytest

from familytree.core.config import settings
from familytree.core.datetime_utils import utc_now
from familytree.core.messages import message


@pytest.mark.asyncio
async def test_register_creates_owner(client, fake_user_repo, fake_tree_owner_repo):
    response = await client.post(
        "/auth/register",
        json={"email": "new@example.com", "full_name": "Trần Văn Mới", "password": "longenough"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "new@example.com"
    assert "password" not in str(body)
    assert len(fake_tree_owner_repo._store) == 1


@pytest.mark.asyncio
async def test_register_duplicate_email_is_conflict(client, owner):
    response = await client.post(
        "/auth/register",
        json={"email": owner.email, "full_name": "Someone", "password": "longenough"},
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_register_short_password_is_bad_request(client):
    response = await client.post(
        "/auth/register",
        json={"email": "short@example.com", "full_name": "Short", "password": "1234567"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid request"
    assert any("body.password" in error for error in body["errors"])


@pytest.mark.asyncio
async def test_login_sets_cookie_that_authenticates(client, owner, owner_password):
    response = await client.post(
        "/auth/login", json={"email": owner.email, "password": owner_password}
    )

    assert response.status_code == 200
    assert response.json()["role"] == "owner"
    set_cookie = response.headers["set-cookie"]
    assert settings.SESSION_COOKIE_NAME in set_cookie
    assert "httponly" in set_cookie.lower()

    session = await client.get("/auth/session")
    assert session.status_code == 200
    assert session.json()["user_id"] == owner.id


@pytest.mark.asyncio
async def test_login_wrong_password_is_unauthorized(client, owner):
    response = await client.post(
        "/auth/login", json={"email": owner.email, "password": "not-the-password"}
    )

    assert response.status_code == 401
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_missing_session_is_unauthorized(client):
    response = await client.get("/family-trees")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_cookie(client, owner, owner_password):
    await client.post("/auth/login", json={"email": owner.email, "password": owner_password})

    response = await client.post("/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert (await client.get("/auth/session")).status_code == 401


class TestGuestRedemption:
    @pytest.mark.asyncio
    async def test_valid_code_starts_guest_session(self, client, guest_editor, tree, guest_code):
        response = await client.post("/auth/guest", json={"access_code": guest_code})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["redirect_url"] == f"/family-trees/{tree.id}"
        assert body["guest_info"]["family_tree_name"] == tree.family_name

        session = (await client.get("/auth/session")).json()
        assert session["role"] == "guest"
        assert session["guest_member_id"] == guest_editor.family_member_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, status, key",
        [
            ({}, 400, "access_code_required"),
            ({"access_code": "short"}, 400, "access_code_invalid"),
            ({"access_code": "z" * 45}, 404, "access_code_unknown"),
        ],
    )
    async def test_rejected_codes(self, client, guest_editor, payload, status, key):
        response = await client.post("/auth/guest", json=payload)

        assert response.status_code == status
        assert response.json() == {"detail": message(key)}

    @pytest.mark.asyncio
    async def test_expired_code_is_unauthorized(self, client, guest_editor, guest_code):
        guest_editor.created_at = utc_now() - timedelta(
            hours=settings.GUEST_CODE_TTL_HOURS, minutes=1
        )

        response = await client.post("/auth/guest", json={"access_code": guest_code})

        assert response.status_code == 401
        assert response.json() == {"detail": message("access_code_expired")}
