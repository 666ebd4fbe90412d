"""Workspace management for signed-in users."""

from tasknest.core.logging import get_logger
from tasknest.domain.entities import (
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
    WorkspaceUpdate,
)
from tasknest.domain.exceptions import LifecycleError, NotFound, Unauthorized, ValidationFailed
from tasknest.domain.services.membership_service import MembershipService
from tasknest.domain.store import LifecycleStore

logger = get_logger(__name__)


class WorkspaceService:
    """Create, read and update workspaces and manage their members."""

    def __init__(self, store: LifecycleStore) -> None:
        self.store = store
        self.membership = MembershipService(store)

    async def create_workspace(
        self,
        owner_id: str,
        name: str,
        description: str = "",
        color: str | None = None,
        icon: str | None = None,
    ) -> Workspace:
        """Create a workspace owned by ``owner_id``, who joins it as admin."""
        try:
            workspace = Workspace(name=name.strip(), owner_id=owner_id, description=description)
        except ValueError as e:
            raise ValidationFailed(str(e)) from e
        if color:
            workspace.color = color
        if icon:
            workspace.icon = icon
        workspace.members.append(WorkspaceMember(user_id=owner_id, role=WorkspaceRole.ADMIN))

        await self.store.workspaces.create(workspace)
        await self.store.accounts.add_workspace(owner_id, workspace.id)
        await self.store.commit()

        logger.info("Workspace created", workspace_id=workspace.id, owner_id=owner_id)
        return workspace

    async def list_for_account(self, account_id: str) -> list[Workspace]:
        return await self.store.workspaces.list_for_member(account_id)

    async def get(self, workspace_id: str, user_id: str) -> Workspace:
        """Return a workspace the caller belongs to.

        Raises:
            NotFound: The workspace does not exist.
            Unauthorized: The caller is not a member.
        """
        workspace = await self.store.workspaces.get_by_id(workspace_id)
        if workspace is None:
            raise NotFound("Workspace not found")
        if not workspace.has_member(user_id):
            raise Unauthorized("You are not a member of this workspace")
        return workspace

    async def update(self, workspace_id: str, user_id: str, update: WorkspaceUpdate) -> Workspace:
        workspace = await self.get(workspace_id, user_id)
        if not workspace.can_manage_members(user_id):
            raise Unauthorized("Only workspace admins can update the workspace")
        try:
            update.apply(workspace)
        except ValueError as e:
            raise ValidationFailed(str(e)) from e

        await self.store.workspaces.update(workspace)
        await self.store.commit()
        logger.info("Workspace updated", workspace_id=workspace_id, user_id=user_id)
        return workspace

    async def delete(self, workspace_id: str, user_id: str) -> None:
        """Delete a workspace with its memberships and invitations.

        Raises:
            NotFound: The workspace does not exist.
            Unauthorized: The caller is not the owner.
        """
        workspace = await self.store.workspaces.get_by_id(workspace_id)
        if workspace is None:
            raise NotFound("Workspace not found")
        if workspace.owner_id != user_id:
            raise Unauthorized("Only the workspace owner can delete the workspace")

        try:
            await self.store.workspaces.delete(workspace_id)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise
        logger.info("Workspace deleted", workspace_id=workspace_id, owner_id=user_id)

    async def add_member_by_email(
        self,
        workspace_id: str,
        actor_id: str,
        email: str,
        role: WorkspaceRole = WorkspaceRole.MEMBER,
    ) -> WorkspaceMember:
        """Add an existing account to the workspace directly, without an invitation.

        Raises:
            Unauthorized: The actor is not an admin of the workspace.
            NotFound: No account uses ``email``.
            AlreadyMember: The account already belongs to the workspace.
        """
        workspace = await self.get(workspace_id, actor_id)
        if not workspace.can_manage_members(actor_id):
            raise Unauthorized("Only workspace admins can add members")

        account = await self.store.accounts.get_by_email(email)
        if account is None:
            raise NotFound("User not found")

        try:
            member = await self.membership.add_member(workspace, account.id, role)
        except LifecycleError:
            await self.store.rollback()
            raise
        await self.store.commit()
        return member

    async def remove_member(self, workspace_id: str, actor_id: str, user_id: str) -> None:
        """Remove a member. Admins may remove anyone but the owner; members may leave.

        Raises:
            Unauthorized: The actor is neither an admin nor the member themself.
            CannotRemoveOwner: ``user_id`` owns the workspace.
            NotFound: ``user_id`` is not a member.
        """
        workspace = await self.get(workspace_id, actor_id)
        if actor_id != user_id and not workspace.can_manage_members(actor_id):
            raise Unauthorized("Only workspace admins can remove members")

        try:
            await self.membership.remove_member(workspace, user_id)
        except LifecycleError:
            await self.store.rollback()
            raise
        await self.store.commit()
