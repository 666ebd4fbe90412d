"""Invitation state machine.

    pending -> accepted
            -> declined
            -> expired   (lazily on access, or by the periodic sweep)

Every state except pending is terminal. Authorization (who may invite,
who may accept) is the caller's job; these methods only enforce state
transitions and stage them in the caller's unit of work.
"""

from datetime import datetime, timezone

from tasknest.core.logging import get_logger
from tasknest.domain.entities import (
    Invitation,
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
from tasknest.domain.store import LifecycleStore
from tasknest.infrastructure.services.token_service import token_service

logger = get_logger(__name__)


class InvitationService:
    """Creates invitations and moves them between states."""

    def __init__(self, store: LifecycleStore, policy: ExpiryPolicy | None = None) -> None:
        self.store = store
        self.policy = policy or ExpiryPolicy()

    async def create(
        self,
        email: str,
        workspace_id: str,
        inviter_id: str,
        role: InvitationRole = InvitationRole.MEMBER,
        metadata: InvitationMetadata | None = None,
    ) -> Invitation:
        """Create a pending invitation.

        Raises:
            Conflict: A pending, unexpired invitation already exists for
                (email, workspace).
        """
        email = email.strip().lower()
        existing = await self.store.invitations.find_pending(email, workspace_id, utcnow())
        if existing is not None:
            raise Conflict("An active invitation already exists for this email")

        invitation = Invitation(
            email=email,
            workspace_id=workspace_id,
            invited_by=inviter_id,
            role=role,
            token=token_service.generate_token(32),
            expires_at=self.policy.invitation_expiry(),
            metadata=metadata or InvitationMetadata(),
        )
        await self.store.invitations.create(invitation)
        logger.info(
            "Invitation created",
            invitation_id=invitation.id,
            email=email,
            workspace_id=workspace_id,
            role=invitation.role.value,
        )
        return invitation

    async def find_by_token(self, token: str) -> Invitation:
        """Return a pending, unexpired invitation.

        Unknown, resolved and expired tokens all raise the same error so an
        anonymous token holder learns nothing about the invitation's state.
        """
        invitation = await self.store.invitations.get_by_token(token)
        if invitation is None or not invitation.is_pending or invitation.is_expired:
            raise InvalidOrExpiredInvitation()
        return invitation

    async def accept(self, invitation: Invitation, user_id: str) -> Invitation:
        """Mark an invitation accepted by ``user_id``.

        An expired invitation is moved to EXPIRED before InvitationExpired is
        raised; the caller should commit so the transition sticks.

        Raises:
            NoLongerPending: The invitation was already resolved.
            InvitationExpired: The invitation is past its expiry.
        """
        if not invitation.is_pending:
            raise NoLongerPending()
        if invitation.is_expired:
            await self._expire(invitation)
            raise InvitationExpired()

        now = datetime.now(timezone.utc)
        invitation.status = InvitationStatus.ACCEPTED
        invitation.accepted_by = user_id
        invitation.accepted_at = now
        invitation.updated_at = now
        await self.store.invitations.update(invitation)
        logger.info("Invitation accepted", invitation_id=invitation.id, user_id=user_id)
        return invitation

    async def decline(self, invitation: Invitation) -> Invitation:
        """Mark an invitation declined.

        Raises:
            NoLongerPending: The invitation was already resolved.
            InvitationExpired: The invitation is past its expiry.
        """
        if not invitation.is_pending:
            raise NoLongerPending()
        if invitation.is_expired:
            await self._expire(invitation)
            raise InvitationExpired()

        invitation.status = InvitationStatus.DECLINED
        invitation.updated_at = datetime.now(timezone.utc)
        await self.store.invitations.update(invitation)
        logger.info("Invitation declined", invitation_id=invitation.id)
        return invitation

    async def expire_overdue(self, now: datetime | None = None) -> int:
        """Flip every pending invitation past its expiry to EXPIRED."""
        return await self.store.invitations.expire_overdue(now or utcnow())

    async def stats(self, workspace_id: str) -> dict[str, int]:
        """Invitation counts per status, with every status present."""
        counts = await self.store.invitations.count_by_status(workspace_id)
        return {status.value: counts.get(status, 0) for status in InvitationStatus}

    async def _expire(self, invitation: Invitation) -> None:
        invitation.status = InvitationStatus.EXPIRED
        invitation.updated_at = datetime.now(timezone.utc)
        await self.store.invitations.update(invitation)
        logger.info("Invitation expired on access", invitation_id=invitation.id)
