"""Storage interface for the lifecycle components.

Services depend only on these abstract repositories and on the
``LifecycleStore`` unit of work that groups them. The SQLAlchemy and
in-memory implementations live under ``tasknest.infrastructure.persistence``
and are selected by dependency injection.

Repository writes are staged in the current unit of work; nothing is durable
until ``LifecycleStore.commit`` is awaited.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from tasknest.domain.entities import (
    Account,
    CodePurpose,
    Invitation,
    InvitationStatus,
    InvitationView,
    OneTimeCode,
    PendingRegistration,
    Workspace,
    WorkspaceMember,
)


class AccountRepository(ABC):
    @abstractmethod
    async def create(self, account: Account) -> Account: ...

    @abstractmethod
    async def get_by_id(self, account_id: str) -> Account | None: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Account | None: ...

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Persist profile, credential and status fields (not workspace links)."""

    @abstractmethod
    async def add_workspace(self, account_id: str, workspace_id: str) -> bool:
        """Append a workspace reference if absent. Returns False if already linked."""

    @abstractmethod
    async def remove_workspace(self, account_id: str, workspace_id: str) -> bool: ...

    @abstractmethod
    async def search(self, query: str, limit: int) -> list[Account]:
        """Active accounts whose name or email contains ``query``, ignoring case."""


class PendingRegistrationRepository(ABC):
    @abstractmethod
    async def create(self, registration: PendingRegistration) -> PendingRegistration: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> PendingRegistration | None: ...

    @abstractmethod
    async def delete_by_email(self, email: str) -> int: ...

    @abstractmethod
    async def delete_expired(self, now: datetime) -> list[str]:
        """Delete expired registrations and return their emails."""


class OneTimeCodeRepository(ABC):
    @abstractmethod
    async def create(self, code: OneTimeCode) -> OneTimeCode: ...

    @abstractmethod
    async def find(self, email: str, code: str, purpose: CodePurpose) -> OneTimeCode | None:
        """Return the record matching the exact (email, code, purpose) triple."""

    @abstractmethod
    async def find_unused(self, email: str, purpose: CodePurpose) -> OneTimeCode | None: ...

    @abstractmethod
    async def delete_for(self, email: str, purpose: CodePurpose) -> int: ...

    @abstractmethod
    async def mark_used(self, code_id: str) -> bool:
        """Atomically flip an unused code to used. False if it was already used."""

    @abstractmethod
    async def increment_attempts(self, email: str, purpose: CodePurpose, cap: int) -> bool:
        """Atomically bump the attempt counter of the unused code, never past ``cap``."""

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int: ...

    @abstractmethod
    async def delete_for_emails(self, emails: list[str], purpose: CodePurpose) -> int: ...


class InvitationRepository(ABC):
    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation: ...

    @abstractmethod
    async def get_by_id(self, invitation_id: str) -> Invitation | None: ...

    @abstractmethod
    async def get_by_token(self, token: str) -> Invitation | None: ...

    @abstractmethod
    async def get_view_by_token(self, token: str) -> InvitationView | None:
        """Resolve an invitation with its workspace and inviter in one lookup."""

    @abstractmethod
    async def find_pending(self, email: str, workspace_id: str, now: datetime) -> Invitation | None:
        """Return the pending, unexpired invitation for (email, workspace) if any."""

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation: ...

    @abstractmethod
    async def delete(self, invitation_id: str) -> bool: ...

    @abstractmethod
    async def list_for_workspace(self, workspace_id: str) -> list[Invitation]: ...

    @abstractmethod
    async def count_by_status(self, workspace_id: str) -> dict[InvitationStatus, int]: ...

    @abstractmethod
    async def expire_overdue(self, now: datetime) -> int:
        """Flip pending invitations past their expiry to expired."""


class WorkspaceRepository(ABC):
    @abstractmethod
    async def create(self, workspace: Workspace) -> Workspace:
        """Insert the workspace together with its initial member list."""

    @abstractmethod
    async def get_by_id(self, workspace_id: str) -> Workspace | None: ...

    @abstractmethod
    async def list_for_member(self, user_id: str) -> list[Workspace]: ...

    @abstractmethod
    async def update(self, workspace: Workspace) -> Workspace:
        """Persist name, description, appearance and settings (not members)."""

    @abstractmethod
    async def add_member(self, workspace_id: str, member: WorkspaceMember) -> bool:
        """Append a member if absent. Returns False if the user is already a member."""

    @abstractmethod
    async def remove_member(self, workspace_id: str, user_id: str) -> bool: ...

    @abstractmethod
    async def delete(self, workspace_id: str) -> bool:
        """Delete the workspace with its members, invitations and account links."""


class LifecycleStore(ABC):
    """Unit of work exposing every repository the lifecycle needs."""

    accounts: AccountRepository
    pending_registrations: PendingRegistrationRepository
    one_time_codes: OneTimeCodeRepository
    invitations: InvitationRepository
    workspaces: WorkspaceRepository

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...
