"""Invitation send/accept/decline flows.

Wraps the invitation state machine with the checks it leaves to its caller:
who may invite, whose invitation it is, and delivering the email. Each
public method is one unit of work on the store.
"""

from dataclasses import dataclass

from tasknest.core.logging import get_logger
from tasknest.domain.entities import (
    Invitation,
    InvitationMetadata,
    InvitationRole,
    InvitationView,
    Workspace,
    WorkspaceRole,
)
from tasknest.domain.exceptions import (
    AlreadyMember,
    DeliveryFailed,
    InvalidOrExpiredInvitation,
    InvitationExpired,
    LifecycleError,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from tasknest.domain.expiry import ExpiryPolicy
from tasknest.domain.services.invitation_service import InvitationService
from tasknest.domain.services.membership_service import MembershipService
from tasknest.domain.store import LifecycleStore
from tasknest.infrastructure.services.email_service import EmailService

logger = get_logger(__name__)


@dataclass
class AcceptedInvitation:
    invitation: Invitation
    workspace: Workspace


@dataclass
class WorkspaceInvitations:
    invitations: list[Invitation]
    stats: dict[str, int]


class InvitationWorkflow:
    """Authorization, delivery and commit around the invitation state machine."""

    def __init__(
        self,
        store: LifecycleStore,
        email_service: EmailService,
        policy: ExpiryPolicy | None = None,
    ) -> None:
        self.store = store
        self.email_service = email_service
        self.invitations = InvitationService(store, policy)
        self.membership = MembershipService(store)

    async def send(
        self,
        inviter_id: str,
        email: str,
        workspace_id: str,
        role: InvitationRole = InvitationRole.MEMBER,
        personal_message: str | None = None,
    ) -> Invitation:
        """Invite ``email`` to a workspace and email them the link.

        Raises:
            NotFound: The workspace or inviter does not exist.
            Unauthorized: The inviter is not an admin or manager of the workspace.
            ValidationFailed: The inviter invited themselves.
            AlreadyMember: The invitee already belongs to the workspace.
            Conflict: A pending invitation already exists for the email.
            DeliveryFailed: The email could not be sent; the invitation was discarded.
        """
        email = email.strip().lower()
        workspace = await self._get_workspace(workspace_id)
        inviter = await self.store.accounts.get_by_id(inviter_id)
        if inviter is None:
            raise NotFound("User not found")

        if not workspace.has_member(inviter_id):
            raise Unauthorized("You are not a member of this workspace")
        if not workspace.can_invite(inviter_id):
            raise Unauthorized("You do not have permission to invite members to this workspace")
        if email == inviter.email:
            raise ValidationFailed("You cannot invite yourself")

        invitee = await self.store.accounts.get_by_email(email)
        if invitee is not None and workspace.has_member(invitee.id):
            raise AlreadyMember()

        invitation = await self.invitations.create(
            email=email,
            workspace_id=workspace.id,
            inviter_id=inviter.id,
            role=role,
            metadata=InvitationMetadata(
                inviter_name=inviter.name,
                workspace_name=workspace.name,
                personal_message=personal_message,
            ),
        )

        result = await self.email_service.send_invitation(
            email,
            inviter_name=inviter.name,
            workspace_name=workspace.name,
            token=invitation.token,
            personal_message=personal_message,
        )
        if not result.delivered:
            await self.store.rollback()
            raise DeliveryFailed("Failed to send invitation email")

        await self.store.commit()
        return invitation

    async def details(self, token: str) -> InvitationView:
        """Public view of a live invitation.

        Raises:
            InvalidOrExpiredInvitation: Unknown, resolved or expired token.
        """
        await self.invitations.find_by_token(token)
        view = await self.store.invitations.get_view_by_token(token)
        if view is None:
            raise InvalidOrExpiredInvitation()
        return view

    async def accept(self, token: str, user_id: str) -> AcceptedInvitation:
        """Accept an invitation and join its workspace.

        The invitation transition and both sides of the membership are
        committed together. Accepting an expired invitation commits the
        EXPIRED status before raising.

        Raises:
            InvalidOrExpiredInvitation: Unknown token.
            Unauthorized: The invitation is for a different email.
            ValidationFailed: The account's email is not verified.
            NoLongerPending: Already accepted, declined or expired.
            InvitationExpired: Past its expiry.
            AlreadyMember: The user already belongs to the workspace.
        """
        invitation = await self._get_invitation(token)
        account = await self.store.accounts.get_by_id(user_id)
        if account is None:
            raise NotFound("User not found")
        self._check_invitee(invitation, account.email)
        if not account.email_verified:
            raise ValidationFailed("Please verify your email address before accepting invitations")

        workspace = await self._get_workspace(invitation.workspace_id)
        try:
            await self.invitations.accept(invitation, account.id)
            await self.membership.add_member(
                workspace, account.id, WorkspaceRole(invitation.role.value)
            )
        except InvitationExpired:
            await self.store.commit()
            raise
        except LifecycleError:
            await self.store.rollback()
            raise

        await self.store.commit()
        return AcceptedInvitation(invitation=invitation, workspace=workspace)

    async def decline(self, token: str, user_id: str) -> Invitation:
        """Decline an invitation addressed to the caller.

        Raises:
            InvalidOrExpiredInvitation: Unknown token.
            Unauthorized: The invitation is for a different email.
            NoLongerPending: Already accepted, declined or expired.
            InvitationExpired: Past its expiry.
        """
        invitation = await self._get_invitation(token)
        account = await self.store.accounts.get_by_id(user_id)
        if account is None:
            raise NotFound("User not found")
        self._check_invitee(invitation, account.email)

        try:
            await self.invitations.decline(invitation)
        except InvitationExpired:
            await self.store.commit()
            raise

        await self.store.commit()
        return invitation

    async def list_for_workspace(self, workspace_id: str, user_id: str) -> WorkspaceInvitations:
        """All invitations of a workspace, newest first, with per-status counts.

        Raises:
            NotFound: The workspace does not exist.
            Unauthorized: The caller is not an admin or manager of the workspace.
        """
        workspace = await self._get_workspace(workspace_id)
        if not workspace.can_invite(user_id):
            raise Unauthorized("You do not have permission to view invitations for this workspace")

        invitations = await self.store.invitations.list_for_workspace(workspace.id)
        stats = await self.invitations.stats(workspace.id)
        return WorkspaceInvitations(invitations=invitations, stats=stats)

    async def _get_invitation(self, token: str) -> Invitation:
        invitation = await self.store.invitations.get_by_token(token)
        if invitation is None:
            raise InvalidOrExpiredInvitation()
        return invitation

    async def _get_workspace(self, workspace_id: str) -> Workspace:
        workspace = await self.store.workspaces.get_by_id(workspace_id)
        if workspace is None:
            raise NotFound("Workspace not found")
        return workspace

    @staticmethod
    def _check_invitee(invitation: Invitation, email: str) -> None:
        if invitation.email != email.strip().lower():
            logger.warning("Invitation presented by wrong account", invitation_id=invitation.id)
            raise Unauthorized("This invitation is not for your email address")
