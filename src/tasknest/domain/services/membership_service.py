"""Membership grant: keeps workspace members and account links in sync.

Both sides of the relation (``workspace.members`` and
``account.workspace_ids``) are written in the caller's unit of work so they
are committed or rolled back together. Each side uses the store's atomic
add-if-absent primitive rather than read-modify-write.
"""

from tasknest.core.logging import get_logger
from tasknest.domain.entities import Workspace, WorkspaceMember, WorkspaceRole
from tasknest.domain.exceptions import AlreadyMember, CannotRemoveOwner, NotFound
from tasknest.domain.store import LifecycleStore

logger = get_logger(__name__)


class MembershipService:
    """Adds and removes workspace members."""

    def __init__(self, store: LifecycleStore) -> None:
        self.store = store

    async def add_member(
        self,
        workspace: Workspace,
        user_id: str,
        role: WorkspaceRole = WorkspaceRole.MEMBER,
    ) -> WorkspaceMember:
        """Add ``user_id`` to ``workspace``.

        Raises:
            AlreadyMember: The user is already in the member list.
        """
        if workspace.get_member(user_id) is not None:
            raise AlreadyMember()

        member = WorkspaceMember(user_id=user_id, role=role)
        if not await self.store.workspaces.add_member(workspace.id, member):
            raise AlreadyMember()
        await self.store.accounts.add_workspace(user_id, workspace.id)

        workspace.members.append(member)
        logger.info(
            "Workspace member added",
            workspace_id=workspace.id,
            user_id=user_id,
            role=member.role.value,
        )
        return member

    async def remove_member(self, workspace: Workspace, user_id: str) -> None:
        """Remove ``user_id`` from ``workspace``.

        Raises:
            CannotRemoveOwner: ``user_id`` owns the workspace.
            NotFound: The user is not a member.
        """
        if user_id == workspace.owner_id:
            raise CannotRemoveOwner()

        if not await self.store.workspaces.remove_member(workspace.id, user_id):
            raise NotFound("User is not a member of this workspace")
        await self.store.accounts.remove_workspace(user_id, workspace.id)

        workspace.members = [m for m in workspace.members if m.user_id != user_id]
        logger.info("Workspace member removed", workspace_id=workspace.id, user_id=user_id)
