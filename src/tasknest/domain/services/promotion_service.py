"""Promotion of a verified pending registration into a permanent account."""

from dataclasses import dataclass
from datetime import datetime, timezone

from tasknest.core.logging import get_logger
from tasknest.domain.entities import (
    Account,
    AccountPreferences,
    AccountStatus,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
)
from tasknest.domain.exceptions import Conflict, RegistrationNotFound
from tasknest.domain.store import LifecycleStore

logger = get_logger(__name__)

DEFAULT_WORKSPACE_DESCRIPTION = "Your personal workspace"


@dataclass
class PromotionResult:
    account: Account
    workspace: Workspace


class PromotionService:
    """Turns a pending registration into an account with a default workspace.

    All writes are staged in the caller's unit of work. The caller commits
    once (together with consuming the verification code) or rolls back, so
    a half-promoted account is never visible.
    """

    def __init__(self, store: LifecycleStore) -> None:
        self.store = store

    async def promote(self, email: str) -> PromotionResult:
        """Promote the pending registration for ``email``.

        Raises:
            RegistrationNotFound: No unexpired pending registration exists.
            Conflict: An account already exists for the email.
        """
        email = email.strip().lower()
        pending = await self.store.pending_registrations.get_by_email(email)
        if pending is None or pending.is_expired:
            raise RegistrationNotFound()
        if await self.store.accounts.get_by_email(email) is not None:
            raise Conflict("An account with this email already exists")

        now = datetime.now(timezone.utc)
        # The pending hash is copied verbatim; hashing it again would lock the user out.
        account = Account(
            email=pending.email,
            password_hash=pending.password_hash,
            name=pending.name,
            avatar=pending.avatar,
            preferences=AccountPreferences(
                theme=pending.preferences.theme,
                timezone=pending.preferences.timezone,
            ),
            status=AccountStatus.ACTIVE,
            email_verified=True,
            email_verified_at=now,
        )
        await self.store.accounts.create(account)

        workspace = Workspace(
            name=f"{account.name}'s Workspace",
            description=DEFAULT_WORKSPACE_DESCRIPTION,
            owner_id=account.id,
            members=[WorkspaceMember(user_id=account.id, role=WorkspaceRole.ADMIN, joined_at=now)],
        )
        await self.store.workspaces.create(workspace)
        await self.store.accounts.add_workspace(account.id, workspace.id)
        account.workspace_ids.append(workspace.id)

        await self.store.pending_registrations.delete_by_email(email)

        logger.info(
            "Pending registration promoted",
            account_id=account.id,
            workspace_id=workspace.id,
            email=email,
        )
        return PromotionResult(account=account, workspace=workspace)
