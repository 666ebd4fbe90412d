"""Unit tests for workspace management."""

import pytest

from tasknest.domain.entities import WorkspaceRole, WorkspaceUpdate
from tasknest.domain.exceptions import (
    AlreadyMember,
    CannotRemoveOwner,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from tasknest.domain.services import WorkspaceService


def _service(memory_db) -> WorkspaceService:
    return WorkspaceService(memory_db.store())


@pytest.mark.asyncio
async def test_create_workspace(memory_db, make_account):
    owner = await make_account("owner@example.com")

    workspace = await _service(memory_db).create_workspace(
        owner.id, "  Launch  ", description="Q3", color="#111111", icon="rocket"
    )

    assert workspace.name == "Launch"
    assert workspace.color == "#111111"
    assert workspace.icon == "rocket"
    assert workspace.role_of(owner.id) == WorkspaceRole.ADMIN
    assert (await memory_db.store().accounts.get_by_id(owner.id)).workspace_ids == [workspace.id]


@pytest.mark.asyncio
async def test_create_workspace_blank_name(memory_db, make_account):
    owner = await make_account("owner@example.com")

    with pytest.raises(ValidationFailed):
        await _service(memory_db).create_workspace(owner.id, "   ")


@pytest.mark.asyncio
async def test_list_and_get(memory_db, make_account):
    owner = await make_account("owner@example.com")
    stranger = await make_account("stranger@example.com")
    first = await _service(memory_db).create_workspace(owner.id, "One")
    await _service(memory_db).create_workspace(owner.id, "Two")

    workspaces = await _service(memory_db).list_for_account(owner.id)

    assert {w.name for w in workspaces} == {"One", "Two"}
    assert await _service(memory_db).list_for_account(stranger.id) == []
    assert (await _service(memory_db).get(first.id, owner.id)).name == "One"
    with pytest.raises(Unauthorized):
        await _service(memory_db).get(first.id, stranger.id)
    with pytest.raises(NotFound):
        await _service(memory_db).get("missing", owner.id)


@pytest.mark.asyncio
async def test_update_requires_admin(memory_db, make_account):
    owner = await make_account("owner@example.com")
    member = await make_account("member@example.com")
    workspace = await _service(memory_db).create_workspace(owner.id, "Team")
    await _service(memory_db).add_member_by_email(workspace.id, owner.id, member.email)

    with pytest.raises(Unauthorized):
        await _service(memory_db).update(workspace.id, member.id, WorkspaceUpdate(name="Mine"))

    updated = await _service(memory_db).update(
        workspace.id, owner.id, WorkspaceUpdate(description="All hands")
    )
    assert updated.description == "All hands"
    stored = await memory_db.store().workspaces.get_by_id(workspace.id)
    assert stored.description == "All hands"
    assert stored.get_member(member.id) is not None


@pytest.mark.asyncio
async def test_add_member_by_email(memory_db, make_account):
    owner = await make_account("owner@example.com")
    carol = await make_account("carol@example.com")
    workspace = await _service(memory_db).create_workspace(owner.id, "Team")

    member = await _service(memory_db).add_member_by_email(
        workspace.id, owner.id, "Carol@Example.com", WorkspaceRole.MANAGER
    )

    assert member.user_id == carol.id
    assert member.role == WorkspaceRole.MANAGER
    assert workspace.id in (await memory_db.store().accounts.get_by_id(carol.id)).workspace_ids
    with pytest.raises(AlreadyMember):
        await _service(memory_db).add_member_by_email(workspace.id, owner.id, carol.email)


@pytest.mark.asyncio
async def test_add_member_unknown_email(memory_db, make_account):
    owner = await make_account("owner@example.com")
    workspace = await _service(memory_db).create_workspace(owner.id, "Team")

    with pytest.raises(NotFound, match="User not found"):
        await _service(memory_db).add_member_by_email(workspace.id, owner.id, "ghost@example.com")


@pytest.mark.asyncio
async def test_manager_cannot_add_members_directly(memory_db, make_account):
    owner = await make_account("owner@example.com")
    manager = await make_account("manager@example.com")
    await make_account("carol@example.com")
    workspace = await _service(memory_db).create_workspace(owner.id, "Team")
    await _service(memory_db).add_member_by_email(
        workspace.id, owner.id, manager.email, WorkspaceRole.MANAGER
    )

    with pytest.raises(Unauthorized):
        await _service(memory_db).add_member_by_email(workspace.id, manager.id, "carol@example.com")


@pytest.mark.asyncio
async def test_remove_member_rules(memory_db, make_account):
    owner = await make_account("owner@example.com")
    carol = await make_account("carol@example.com")
    dave = await make_account("dave@example.com")
    workspace = await _service(memory_db).create_workspace(owner.id, "Team")
    await _service(memory_db).add_member_by_email(workspace.id, owner.id, carol.email)
    await _service(memory_db).add_member_by_email(workspace.id, owner.id, dave.email)

    with pytest.raises(Unauthorized):
        await _service(memory_db).remove_member(workspace.id, carol.id, dave.id)
    with pytest.raises(CannotRemoveOwner):
        await _service(memory_db).remove_member(workspace.id, owner.id, owner.id)

    await _service(memory_db).remove_member(workspace.id, carol.id, carol.id)
    await _service(memory_db).remove_member(workspace.id, owner.id, dave.id)

    stored = await memory_db.store().workspaces.get_by_id(workspace.id)
    assert [m.user_id for m in stored.members] == [owner.id]
    assert (await memory_db.store().accounts.get_by_id(dave.id)).workspace_ids == []


@pytest.mark.asyncio
async def test_delete_workspace(memory_db, make_account):
    owner = await make_account("owner@example.com")
    carol = await make_account("carol@example.com")
    workspace = await _service(memory_db).create_workspace(owner.id, "Team")
    keep = await _service(memory_db).create_workspace(owner.id, "Keep")
    await _service(memory_db).add_member_by_email(workspace.id, owner.id, carol.email)

    with pytest.raises(Unauthorized, match="owner"):
        await _service(memory_db).delete(workspace.id, carol.id)

    await _service(memory_db).delete(workspace.id, owner.id)

    store = memory_db.store()
    assert await store.workspaces.get_by_id(workspace.id) is None
    assert (await store.accounts.get_by_id(owner.id)).workspace_ids == [keep.id]
    assert (await store.accounts.get_by_id(carol.id)).workspace_ids == []
    with pytest.raises(NotFound):
        await _service(memory_db).delete(workspace.id, owner.id)
