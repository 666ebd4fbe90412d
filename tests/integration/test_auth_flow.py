"""End-to-end tests for registration, verification, login and password reset."""

import pytest

from tasknest.domain.entities import MAX_ATTEMPTS

PASSWORD = "Sup3rSecret"


async def _register(client, email="alice@example.com", name="Alice", password=PASSWORD):
    return await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )


def _wrong(code: str) -> str:
    return "000000" if code != "000000" else "111111"


@pytest.mark.asyncio
async def test_register_verify_and_login(client, latest_code):
    response = await _register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == "alice@example.com"
    assert "expiresAt" in body["data"]

    response = await client.post(
        "/api/auth/verify-email",
        json={"email": "alice@example.com", "otp": latest_code("alice@example.com")},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["email"] == "alice@example.com"
    assert data["user"]["emailVerified"] is True
    assert data["user"]["status"] == "active"
    assert data["workspace"]["ownerId"] == data["user"]["id"]
    assert data["user"]["workspaces"] == [data["workspace"]["id"]]
    assert data["token"]
    assert data["expiresIn"] > 0

    response = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
    )
    assert response.status_code == 200
    token = response.json()["data"]["token"]

    response = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Alice"


@pytest.mark.asyncio
async def test_register_rejects_weak_password(client):
    response = await _register(client, password="short")

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert {e["code"] for e in body["errors"]} >= {"password_too_short", "password_no_digit"}


@pytest.mark.asyncio
async def test_register_existing_account_conflicts(client, make_account):
    await make_account("alice@example.com")

    response = await _register(client)

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_wrong_code_then_lockout(client, latest_code):
    await _register(client)
    real = latest_code("alice@example.com")

    for _ in range(MAX_ATTEMPTS):
        response = await client.post(
            "/api/auth/verify-email",
            json={"email": "alice@example.com", "otp": _wrong(real)},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid OTP"

    response = await client.post(
        "/api/auth/verify-email", json={"email": "alice@example.com", "otp": real}
    )
    assert response.status_code == 429

    response = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_resend_replaces_code(client, latest_code):
    await _register(client)
    first = latest_code("alice@example.com")

    response = await client.post("/api/auth/resend-otp", json={"email": "alice@example.com"})
    assert response.status_code == 200
    second = latest_code("alice@example.com")

    if first != second:
        response = await client.post(
            "/api/auth/verify-email", json={"email": "alice@example.com", "otp": first}
        )
        assert response.status_code == 400

    response = await client.post(
        "/api/auth/verify-email", json={"email": "alice@example.com", "otp": second}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_resend_without_registration(client):
    response = await client.post("/api/auth/resend-otp", json={"email": "ghost@example.com"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_verify_rejects_non_numeric_code(client):
    response = await client.post(
        "/api/auth/verify-email", json={"email": "alice@example.com", "otp": "abcdef"}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email_look_the_same(client, make_account):
    await make_account("bob@example.com")

    wrong = await client.post(
        "/api/auth/login", json={"email": "bob@example.com", "password": "Wr0ngPassword"}
    )
    unknown = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": PASSWORD}
    )

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


@pytest.mark.asyncio
async def test_forgot_and_reset_password(client, make_account, latest_code, console_provider):
    await make_account("bob@example.com")

    response = await client.post("/api/auth/forgot-password", json={"email": "bob@example.com"})
    assert response.status_code == 200
    code = latest_code("bob@example.com")

    response = await client.post(
        "/api/auth/reset-password",
        json={"email": "bob@example.com", "otp": code, "password": "N3wPassword"},
    )
    assert response.status_code == 200

    response = await client.post(
        "/api/auth/reset-password",
        json={"email": "bob@example.com", "otp": code, "password": "An0therOne"},
    )
    assert response.status_code == 400

    old = await client.post(
        "/api/auth/login", json={"email": "bob@example.com", "password": PASSWORD}
    )
    new = await client.post(
        "/api/auth/login", json={"email": "bob@example.com", "password": "N3wPassword"}
    )
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_forgot_password_unknown_email_is_silent(client, console_provider):
    response = await client.post(
        "/api/auth/forgot-password", json={"email": "nobody@example.com"}
    )

    assert response.status_code == 200
    assert response.json()["message"].startswith("If an account exists")
    assert console_provider.outbox == []


@pytest.mark.asyncio
async def test_verification_code_cannot_reset_password(client, make_account, latest_code):
    await _register(client, email="carol@example.com", name="Carol")
    verification_code = latest_code("carol@example.com")
    await client.post(
        "/api/auth/verify-email", json={"email": "carol@example.com", "otp": verification_code}
    )

    response = await client.post(
        "/api/auth/reset-password",
        json={"email": "carol@example.com", "otp": verification_code, "password": "N3wPassword"},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_profile_update_and_password_change(client, make_account, auth_headers):
    account = await make_account("dave@example.com", name="Dave")
    headers = auth_headers(account)

    response = await client.patch(
        "/api/users/me", json={"name": "David", "theme": "dark"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "David"
    assert response.json()["data"]["preferences"]["theme"] == "dark"

    response = await client.put(
        "/api/users/me/password",
        json={"currentPassword": "Wr0ngPassword", "newPassword": "N3wPassword"},
        headers=headers,
    )
    assert response.status_code == 401

    response = await client.put(
        "/api/users/me/password",
        json={"currentPassword": PASSWORD, "newPassword": "N3wPassword"},
        headers=headers,
    )
    assert response.status_code == 200
