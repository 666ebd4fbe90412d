"""End-to-end tests for looking up other users."""

import pytest


@pytest.mark.asyncio
async def test_get_user_by_id(client, make_account, auth_headers):
    viewer = await make_account("viewer@example.com", name="Viewer")
    alice = await make_account("alice@example.com", name="Alice")

    response = await client.get(f"/api/users/{alice.id}", headers=auth_headers(viewer))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data == {
        "id": alice.id,
        "name": "Alice",
        "email": "alice@example.com",
        "avatar": alice.avatar,
        "status": "active",
    }

    response = await client.get("/api/users/missing", headers=auth_headers(viewer))
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


@pytest.mark.asyncio
async def test_lookup_requires_authentication(client, make_account):
    alice = await make_account("alice@example.com")

    assert (await client.get(f"/api/users/{alice.id}")).status_code == 401
    assert (await client.get("/api/users/search/alice")).status_code == 401


@pytest.mark.asyncio
async def test_search_users(client, make_account, auth_headers):
    viewer = await make_account("viewer@example.com", name="Viewer")
    await make_account("alice@example.com", name="Alice")
    await make_account("bob@example.com", name="Bob")

    response = await client.get("/api/users/search/ALI", headers=auth_headers(viewer))

    assert response.status_code == 200
    assert [user["email"] for user in response.json()["data"]] == ["alice@example.com"]


@pytest.mark.asyncio
async def test_search_within_workspace(client, make_account, auth_headers):
    owner = await make_account("owner@example.com", name="Owner")
    await make_account("alice@example.com", name="Alice")
    stranger = await make_account("alina@example.com", name="Alina")
    headers = auth_headers(owner)
    workspace_id = (
        await client.post("/api/workspaces", json={"name": "Team"}, headers=headers)
    ).json()["data"]["id"]
    await client.post(
        f"/api/workspaces/{workspace_id}/members",
        json={"email": "alice@example.com"},
        headers=headers,
    )

    response = await client.get(
        "/api/users/search/ali", params={"workspaceId": workspace_id}, headers=headers
    )
    assert [user["name"] for user in response.json()["data"]] == ["Alice"]

    response = await client.get(
        "/api/users/search/ali",
        params={"workspaceId": workspace_id},
        headers=auth_headers(stranger),
    )
    assert response.status_code == 403

    response = await client.get(
        "/api/users/search/ali", params={"workspaceId": "missing"}, headers=headers
    )
    assert response.status_code == 404
