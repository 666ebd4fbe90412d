"""Unit tests for the invitation state machine."""

from datetime import timedelta

import pytest

from tasknest.domain.entities import (
    InvitationMetadata,
    InvitationRole,
    InvitationStatus,
)
from tasknest.domain.exceptions import (
    Conflict,
    InvalidOrExpiredInvitation,
    InvitationExpired,
    NoLongerPending,
)
from tasknest.domain.expiry import ExpiryPolicy, utcnow
from tasknest.domain.services.invitation_service import InvitationService


@pytest.fixture
def invitations(store) -> InvitationService:
    return InvitationService(store)


async def _create(invitations, email="carol@example.com", workspace_id="ws-1", **kwargs):
    return await invitations.create(email=email, workspace_id=workspace_id, inviter_id="bob", **kwargs)


async def _force_expired(store, invitation):
    invitation.expires_at = utcnow() - timedelta(seconds=1)
    store.state.invitations[invitation.id].expires_at = invitation.expires_at


@pytest.mark.asyncio
async def test_create_pending_invitation(invitations):
    invitation = await _create(
        invitations,
        email="Carol@Example.com",
        role=InvitationRole.MANAGER,
        metadata=InvitationMetadata(inviter_name="Bob", workspace_name="Team"),
    )

    assert invitation.email == "carol@example.com"
    assert invitation.status == InvitationStatus.PENDING
    assert invitation.role == InvitationRole.MANAGER
    assert len(invitation.token) == 64
    assert invitation.metadata.inviter_name == "Bob"
    assert timedelta(hours=71) < invitation.expires_at - utcnow() <= timedelta(hours=72)


@pytest.mark.asyncio
async def test_create_honours_policy(store):
    invitation = await InvitationService(store, ExpiryPolicy(invitation_expiry_hours=1)).create(
        email="c@example.com", workspace_id="ws-1", inviter_id="bob"
    )

    assert invitation.expires_at - utcnow() <= timedelta(hours=1)


@pytest.mark.asyncio
async def test_duplicate_pending_invitation_conflicts(invitations):
    await _create(invitations)

    with pytest.raises(Conflict):
        await _create(invitations, email="CAROL@example.com")


@pytest.mark.asyncio
async def test_same_email_other_workspace_is_allowed(invitations):
    await _create(invitations)

    other = await _create(invitations, workspace_id="ws-2")

    assert other.workspace_id == "ws-2"


@pytest.mark.asyncio
async def test_reinvite_after_expiry_is_allowed(invitations, store):
    first = await _create(invitations)
    await _force_expired(store, first)

    second = await _create(invitations)

    assert second.token != first.token


@pytest.mark.asyncio
async def test_reinvite_after_decline_is_allowed(invitations):
    first = await _create(invitations)
    await invitations.decline(first)

    second = await _create(invitations)

    assert second.is_pending


@pytest.mark.asyncio
async def test_find_by_token_hides_state(invitations, store):
    live = await _create(invitations)
    declined = await _create(invitations, workspace_id="ws-2")
    await invitations.decline(declined)
    expired = await _create(invitations, workspace_id="ws-3")
    await _force_expired(store, expired)

    assert (await invitations.find_by_token(live.token)).id == live.id
    for token in ("unknown", declined.token, expired.token):
        with pytest.raises(InvalidOrExpiredInvitation):
            await invitations.find_by_token(token)


@pytest.mark.asyncio
async def test_accept(invitations, store):
    invitation = await _create(invitations)

    await invitations.accept(invitation, "carol-id")

    stored = await store.invitations.get_by_id(invitation.id)
    assert stored.status == InvitationStatus.ACCEPTED
    assert stored.accepted_by == "carol-id"
    assert stored.accepted_at is not None


@pytest.mark.asyncio
async def test_accepted_invitation_is_terminal(invitations):
    invitation = await _create(invitations)
    await invitations.accept(invitation, "carol-id")

    with pytest.raises(NoLongerPending):
        await invitations.accept(invitation, "carol-id")
    with pytest.raises(NoLongerPending):
        await invitations.decline(invitation)


@pytest.mark.asyncio
async def test_accept_expired_moves_to_expired(invitations, store):
    invitation = await _create(invitations)
    await _force_expired(store, invitation)

    with pytest.raises(InvitationExpired):
        await invitations.accept(invitation, "carol-id")

    stored = await store.invitations.get_by_id(invitation.id)
    assert stored.status == InvitationStatus.EXPIRED
    assert stored.accepted_by is None
    with pytest.raises(NoLongerPending):
        await invitations.accept(stored, "carol-id")


@pytest.mark.asyncio
async def test_decline_expired_moves_to_expired(invitations, store):
    invitation = await _create(invitations)
    await _force_expired(store, invitation)

    with pytest.raises(InvitationExpired):
        await invitations.decline(invitation)

    assert (await store.invitations.get_by_id(invitation.id)).status == InvitationStatus.EXPIRED


@pytest.mark.asyncio
async def test_expire_overdue_and_stats(invitations, store):
    live = await _create(invitations)
    overdue = await _create(invitations, email="dave@example.com")
    await _force_expired(store, overdue)
    declined = await _create(invitations, email="erin@example.com")
    await invitations.decline(declined)

    assert await invitations.expire_overdue() == 1
    assert (await store.invitations.get_by_id(live.id)).is_pending

    stats = await invitations.stats("ws-1")
    assert stats == {"pending": 1, "accepted": 0, "declined": 1, "expired": 1}


@pytest.mark.asyncio
async def test_expire_overdue_at_given_instant(invitations, store):
    invitation = await _create(invitations)

    assert await invitations.expire_overdue(utcnow() + timedelta(hours=73)) == 1
    assert (await store.invitations.get_by_id(invitation.id)).status == InvitationStatus.EXPIRED
