"""End-to-end tests for workspace management."""

import pytest


@pytest.fixture
def owner(make_account, auth_headers):
    async def _owner():
        account = await make_account("owner@example.com", name="Owner")
        return account, auth_headers(account)

    return _owner


async def _create(client, headers, **body):
    body.setdefault("name", "Design")
    return await client.post("/api/workspaces", json=body, headers=headers)


@pytest.mark.asyncio
async def test_create_list_get_and_update(client, owner):
    account, headers = await owner()

    response = await _create(client, headers, description="Design team", color="#112233")

    assert response.status_code == 201
    workspace = response.json()["data"]
    assert workspace["ownerId"] == account.id
    assert workspace["color"] == "#112233"
    assert workspace["members"][0]["role"] == "admin"
    assert [s["name"] for s in workspace["settings"]["taskStatuses"]][0] == "To Do"

    response = await client.get("/api/workspaces", headers=headers)
    assert [w["id"] for w in response.json()["data"]] == [workspace["id"]]

    response = await client.get(f"/api/workspaces/{workspace['id']}", headers=headers)
    assert response.json()["data"]["name"] == "Design"

    response = await client.patch(
        f"/api/workspaces/{workspace['id']}", json={"name": "Product"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Product"
    assert response.json()["data"]["description"] == "Design team"

    response = await client.get("/api/users/me", headers=headers)
    assert response.json()["data"]["workspaces"] == [workspace["id"]]


@pytest.mark.asyncio
async def test_create_rejects_unknown_fields_and_bad_color(client, owner):
    _, headers = await owner()

    assert (await _create(client, headers, color="red")).status_code == 422
    assert (await _create(client, headers, ownerId="someone")).status_code == 422


@pytest.mark.asyncio
async def test_non_member_cannot_read(client, owner, make_account, auth_headers):
    _, headers = await owner()
    workspace_id = (await _create(client, headers)).json()["data"]["id"]
    stranger = await make_account("stranger@example.com")

    response = await client.get(f"/api/workspaces/{workspace_id}", headers=auth_headers(stranger))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_missing_workspace(client, owner):
    _, headers = await owner()

    response = await client.get("/api/workspaces/missing", headers=headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_add_and_remove_members(client, owner, make_account, auth_headers):
    _, headers = await owner()
    workspace_id = (await _create(client, headers)).json()["data"]["id"]
    member = await make_account("member@example.com", name="Member")

    response = await client.post(
        f"/api/workspaces/{workspace_id}/members",
        json={"email": "member@example.com", "role": "manager"},
        headers=headers,
    )
    assert response.status_code == 201
    assert response.json()["data"]["userId"] == member.id
    assert response.json()["data"]["role"] == "manager"

    response = await client.post(
        f"/api/workspaces/{workspace_id}/members",
        json={"email": "member@example.com"},
        headers=headers,
    )
    assert response.status_code == 409

    response = await client.patch(
        f"/api/workspaces/{workspace_id}", json={"name": "Nope"}, headers=auth_headers(member)
    )
    assert response.status_code == 403

    response = await client.delete(
        f"/api/workspaces/{workspace_id}/members/{member.id}", headers=headers
    )
    assert response.status_code == 200

    response = await client.get("/api/users/me", headers=auth_headers(member))
    assert response.json()["data"]["workspaces"] == []


@pytest.mark.asyncio
async def test_member_can_leave_but_owner_cannot_be_removed(
    client, owner, make_account, auth_headers
):
    account, headers = await owner()
    workspace_id = (await _create(client, headers)).json()["data"]["id"]
    member = await make_account("member@example.com")
    await client.post(
        f"/api/workspaces/{workspace_id}/members",
        json={"email": "member@example.com"},
        headers=headers,
    )
    member_headers = auth_headers(member)

    response = await client.delete(
        f"/api/workspaces/{workspace_id}/members/{account.id}", headers=member_headers
    )
    assert response.status_code == 403

    response = await client.delete(
        f"/api/workspaces/{workspace_id}/members/{account.id}", headers=headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Cannot remove workspace owner"

    response = await client.delete(
        f"/api/workspaces/{workspace_id}/members/{member.id}", headers=member_headers
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_add_unknown_user(client, owner):
    _, headers = await owner()
    workspace_id = (await _create(client, headers)).json()["data"]["id"]

    response = await client.post(
        f"/api/workspaces/{workspace_id}/members",
        json={"email": "ghost@example.com"},
        headers=headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_only_owner_can_delete_workspace(client, owner, make_account, auth_headers):
    _, headers = await owner()
    workspace_id = (await _create(client, headers)).json()["data"]["id"]
    member = await make_account("member@example.com")
    await client.post(
        f"/api/workspaces/{workspace_id}/members",
        json={"email": "member@example.com", "role": "admin"},
        headers=headers,
    )

    response = await client.delete(f"/api/workspaces/{workspace_id}", headers=auth_headers(member))
    assert response.status_code == 403

    response = await client.delete(f"/api/workspaces/{workspace_id}", headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Workspace deleted successfully"

    response = await client.get(f"/api/workspaces/{workspace_id}", headers=headers)
    assert response.status_code == 404
    response = await client.get("/api/users/me", headers=auth_headers(member))
    assert response.json()["data"]["workspaces"] == []
    response = await client.delete(f"/api/workspaces/{workspace_id}", headers=headers)
    assert response.status_code == 404
