"""Tests for the error envelope, status mapping and health check."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tasknest.domain import exceptions as errors
from tasknest.infrastructure.api.app import status_for


@pytest.mark.parametrize(
    "error,expected",
    [
        (errors.CodeNotFound(), 400),
        (errors.RegistrationNotFound(), 404),
        (errors.InvalidOrExpiredInvitation(), 404),
        (errors.Conflict(), 409),
        (errors.AlreadyMember(), 409),
        (errors.CodeExpired(), 400),
        (errors.InvitationExpired(), 400),
        (errors.AlreadyUsed(), 400),
        (errors.TooManyAttempts(), 429),
        (errors.NoLongerPending(), 400),
        (errors.CannotRemoveOwner(), 400),
        (errors.Unauthorized(), 403),
        (errors.InvalidCredentials(), 401),
        (errors.ValidationFailed(), 400),
        (errors.DeliveryFailed(), 502),
        (errors.LifecycleError(), 400),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected


def test_error_messages_default_and_override():
    assert errors.CodeNotFound().message == "Invalid OTP"
    assert errors.NotFound("Workspace not found").message == "Workspace not found"


@pytest.mark.asyncio
async def test_request_validation_uses_envelope(client):
    response = await client.post("/api/auth/register", json={"email": "not-an-email"})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    fields = {e["field"] for e in body["errors"]}
    assert {"email", "name", "password"} <= fields


@pytest.mark.asyncio
async def test_missing_authorization_header(client):
    response = await client.get("/api/users/me")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Missing Authorization header"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_invalid_token(client):
    response = await client.get("/api/users/me", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_domain_error_uses_envelope(client):
    response = await client.post(
        "/api/auth/verify-email", json={"email": "ghost@example.com", "otp": "123456"}
    )

    assert response.status_code in (400, 404)
    body = response.json()
    assert body["success"] is False
    assert "data" not in body


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client):
    response = await client.get("/api/users/me", headers={"X-Correlation-ID": "cid_test"})

    assert response.headers["X-Correlation-ID"] == "cid_test"


@pytest.mark.asyncio
@pytest.mark.parametrize("healthy,status_code", [(True, 200), (False, 503)])
async def test_health_check(client, monkeypatch, healthy, status_code):
    manager = MagicMock()
    manager.check_connection = AsyncMock(return_value=healthy)
    monkeypatch.setattr("tasknest.infrastructure.api.app.get_db_manager", lambda: manager)

    response = await client.get("/health")

    assert response.status_code == status_code
    assert response.json()["database"] == ("connected" if healthy else "disconnected")
