"""In-memory lifecycle store.

Implements the same repository interfaces as the SQL store on top of plain
dictionaries, for tests and for running the API without a database.

``InMemoryDatabase`` holds committed state shared by every store created from
it. Each ``InMemoryLifecycleStore`` works on a private copy that becomes
visible to other stores on ``commit`` and is discarded on ``rollback``.

A commit merges only the records this store created, changed or deleted
since it last synchronised, so stores committing unrelated records never
undo each other. Two stores writing the same record follow last-writer-wins.
Cross-record uniqueness (one account per email) is checked against the
store's own snapshot only.
"""

from copy import deepcopy
from dataclasses import dataclass, field, fields
from datetime import datetime

from tasknest.domain import store as ports
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


@dataclass
class _State:
    accounts: dict[str, Account] = field(default_factory=dict)
    pending_registrations: dict[str, PendingRegistration] = field(default_factory=dict)
    one_time_codes: dict[str, OneTimeCode] = field(default_factory=dict)
    invitations: dict[str, Invitation] = field(default_factory=dict)
    workspaces: dict[str, Workspace] = field(default_factory=dict)


class InMemoryDatabase:
    """Committed state shared between in-memory stores."""

    def __init__(self) -> None:
        self.state = _State()

    def store(self) -> "InMemoryLifecycleStore":
        return InMemoryLifecycleStore(self)


class _Repository:
    def __init__(self, owner: "InMemoryLifecycleStore") -> None:
        self._owner = owner

    @property
    def _state(self) -> _State:
        return self._owner.state


class InMemoryAccountRepository(_Repository, ports.AccountRepository):
    async def create(self, account: Account) -> Account:
        if any(a.email == account.email for a in self._state.accounts.values()):
            raise ValueError(f"Account with email {account.email} already exists")
        self._state.accounts[account.id] = deepcopy(account)
        return account

    async def get_by_id(self, account_id: str) -> Account | None:
        return deepcopy(self._state.accounts.get(account_id))

    async def get_by_email(self, email: str) -> Account | None:
        email = email.strip().lower()
        for account in self._state.accounts.values():
            if account.email == email:
                return deepcopy(account)
        return None

    async def update(self, account: Account) -> Account:
        stored = self._state.accounts.get(account.id)
        if stored is None:
            raise ValueError(f"Account {account.id} does not exist")
        updated = deepcopy(account)
        updated.workspace_ids = stored.workspace_ids
        self._state.accounts[account.id] = updated
        return account

    async def add_workspace(self, account_id: str, workspace_id: str) -> bool:
        account = self._state.accounts.get(account_id)
        if account is None or workspace_id in account.workspace_ids:
            return False
        account.workspace_ids.append(workspace_id)
        return True

    async def remove_workspace(self, account_id: str, workspace_id: str) -> bool:
        account = self._state.accounts.get(account_id)
        if account is None or workspace_id not in account.workspace_ids:
            return False
        account.workspace_ids.remove(workspace_id)
        return True

    async def search(self, query: str, limit: int) -> list[Account]:
        matches = [
            deepcopy(account)
            for account in self._state.accounts.values()
            if account.is_active and account.matches(query)
        ]
        return sorted(matches, key=lambda account: account.name.lower())[:limit]


class InMemoryPendingRegistrationRepository(_Repository, ports.PendingRegistrationRepository):
    async def create(self, registration: PendingRegistration) -> PendingRegistration:
        if registration.email in self._state.pending_registrations:
            raise ValueError(f"Pending registration for {registration.email} already exists")
        self._state.pending_registrations[registration.email] = deepcopy(registration)
        return registration

    async def get_by_email(self, email: str) -> PendingRegistration | None:
        return deepcopy(self._state.pending_registrations.get(email.strip().lower()))

    async def delete_by_email(self, email: str) -> int:
        return 1 if self._state.pending_registrations.pop(email.strip().lower(), None) else 0

    async def delete_expired(self, now: datetime) -> list[str]:
        expired = [
            email
            for email, registration in self._state.pending_registrations.items()
            if registration.expires_at < now
        ]
        for email in expired:
            del self._state.pending_registrations[email]
        return expired


class InMemoryOneTimeCodeRepository(_Repository, ports.OneTimeCodeRepository):
    def _matching(self, email: str, purpose: CodePurpose) -> list[OneTimeCode]:
        return [
            code
            for code in self._state.one_time_codes.values()
            if code.email == email and code.purpose == purpose
        ]

    async def create(self, code: OneTimeCode) -> OneTimeCode:
        self._state.one_time_codes[code.id] = deepcopy(code)
        return code

    async def find(self, email: str, code: str, purpose: CodePurpose) -> OneTimeCode | None:
        matches = [record for record in self._matching(email, purpose) if record.code == code]
        if not matches:
            return None
        return deepcopy(max(matches, key=lambda record: record.created_at))

    async def find_unused(self, email: str, purpose: CodePurpose) -> OneTimeCode | None:
        unused = [record for record in self._matching(email, purpose) if not record.is_used]
        if not unused:
            return None
        return deepcopy(max(unused, key=lambda record: record.created_at))

    async def delete_for(self, email: str, purpose: CodePurpose) -> int:
        doomed = self._matching(email, purpose)
        for record in doomed:
            del self._state.one_time_codes[record.id]
        return len(doomed)

    async def mark_used(self, code_id: str) -> bool:
        record = self._state.one_time_codes.get(code_id)
        if record is None or record.is_used:
            return False
        record.is_used = True
        return True

    async def increment_attempts(self, email: str, purpose: CodePurpose, cap: int) -> bool:
        incremented = False
        for record in self._matching(email, purpose):
            if not record.is_used and record.attempts < cap:
                record.attempts += 1
                incremented = True
        return incremented

    async def delete_expired(self, now: datetime) -> int:
        expired = [
            code_id
            for code_id, record in self._state.one_time_codes.items()
            if record.expires_at < now
        ]
        for code_id in expired:
            del self._state.one_time_codes[code_id]
        return len(expired)

    async def delete_for_emails(self, emails: list[str], purpose: CodePurpose) -> int:
        return sum([await self.delete_for(email, purpose) for email in emails])


class InMemoryInvitationRepository(_Repository, ports.InvitationRepository):
    async def create(self, invitation: Invitation) -> Invitation:
        if any(i.token == invitation.token for i in self._state.invitations.values()):
            raise ValueError("Invitation token already exists")
        self._state.invitations[invitation.id] = deepcopy(invitation)
        return invitation

    async def get_by_id(self, invitation_id: str) -> Invitation | None:
        return deepcopy(self._state.invitations.get(invitation_id))

    async def get_by_token(self, token: str) -> Invitation | None:
        for invitation in self._state.invitations.values():
            if invitation.token == token:
                return deepcopy(invitation)
        return None

    async def get_view_by_token(self, token: str) -> InvitationView | None:
        invitation = await self.get_by_token(token)
        if invitation is None:
            return None
        workspace = self._state.workspaces.get(invitation.workspace_id)
        inviter = self._state.accounts.get(invitation.invited_by)
        if workspace is None or inviter is None:
            return None
        return InvitationView(
            invitation=invitation,
            workspace_name=workspace.name,
            workspace_description=workspace.description,
            inviter_name=inviter.name,
            inviter_email=inviter.email,
        )

    async def find_pending(self, email: str, workspace_id: str, now: datetime) -> Invitation | None:
        for invitation in self._state.invitations.values():
            if (
                invitation.email == email
                and invitation.workspace_id == workspace_id
                and invitation.status == InvitationStatus.PENDING
                and invitation.expires_at > now
            ):
                return deepcopy(invitation)
        return None

    async def update(self, invitation: Invitation) -> Invitation:
        if invitation.id not in self._state.invitations:
            raise ValueError(f"Invitation {invitation.id} does not exist")
        self._state.invitations[invitation.id] = deepcopy(invitation)
        return invitation

    async def delete(self, invitation_id: str) -> bool:
        return self._state.invitations.pop(invitation_id, None) is not None

    async def list_for_workspace(self, workspace_id: str) -> list[Invitation]:
        invitations = [
            deepcopy(invitation)
            for invitation in self._state.invitations.values()
            if invitation.workspace_id == workspace_id
        ]
        return sorted(invitations, key=lambda invitation: invitation.created_at, reverse=True)

    async def count_by_status(self, workspace_id: str) -> dict[InvitationStatus, int]:
        counts: dict[InvitationStatus, int] = {}
        for invitation in self._state.invitations.values():
            if invitation.workspace_id == workspace_id:
                counts[invitation.status] = counts.get(invitation.status, 0) + 1
        return counts

    async def expire_overdue(self, now: datetime) -> int:
        expired = 0
        for invitation in self._state.invitations.values():
            if invitation.status == InvitationStatus.PENDING and invitation.expires_at < now:
                invitation.status = InvitationStatus.EXPIRED
                invitation.updated_at = now
                expired += 1
        return expired


class InMemoryWorkspaceRepository(_Repository, ports.WorkspaceRepository):
    async def create(self, workspace: Workspace) -> Workspace:
        self._state.workspaces[workspace.id] = deepcopy(workspace)
        return workspace

    async def get_by_id(self, workspace_id: str) -> Workspace | None:
        return deepcopy(self._state.workspaces.get(workspace_id))

    async def list_for_member(self, user_id: str) -> list[Workspace]:
        return [
            deepcopy(workspace)
            for workspace in self._state.workspaces.values()
            if workspace.get_member(user_id) is not None
        ]

    async def update(self, workspace: Workspace) -> Workspace:
        stored = self._state.workspaces.get(workspace.id)
        if stored is None:
            raise ValueError(f"Workspace {workspace.id} does not exist")
        updated = deepcopy(workspace)
        updated.members = stored.members
        self._state.workspaces[workspace.id] = updated
        return workspace

    async def add_member(self, workspace_id: str, member: WorkspaceMember) -> bool:
        workspace = self._state.workspaces.get(workspace_id)
        if workspace is None or workspace.get_member(member.user_id) is not None:
            return False
        workspace.members.append(deepcopy(member))
        return True

    async def remove_member(self, workspace_id: str, user_id: str) -> bool:
        workspace = self._state.workspaces.get(workspace_id)
        if workspace is None or workspace.get_member(user_id) is None:
            return False
        workspace.members = [m for m in workspace.members if m.user_id != user_id]
        return True

    async def delete(self, workspace_id: str) -> bool:
        if self._state.workspaces.pop(workspace_id, None) is None:
            return False
        for account in self._state.accounts.values():
            if workspace_id in account.workspace_ids:
                account.workspace_ids.remove(workspace_id)
        doomed = [
            invitation_id
            for invitation_id, invitation in self._state.invitations.items()
            if invitation.workspace_id == workspace_id
        ]
        for invitation_id in doomed:
            del self._state.invitations[invitation_id]
        return True


class InMemoryLifecycleStore(ports.LifecycleStore):
    """Lifecycle store over an ``InMemoryDatabase``."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self.database = database or InMemoryDatabase()
        self._synchronise()
        self.accounts = InMemoryAccountRepository(self)
        self.pending_registrations = InMemoryPendingRegistrationRepository(self)
        self.one_time_codes = InMemoryOneTimeCodeRepository(self)
        self.invitations = InMemoryInvitationRepository(self)
        self.workspaces = InMemoryWorkspaceRepository(self)

    def _synchronise(self) -> None:
        self.state = deepcopy(self.database.state)
        self._base = deepcopy(self.state)

    async def commit(self) -> None:
        committed = self.database.state
        for collection in fields(_State):
            base = getattr(self._base, collection.name)
            mine = getattr(self.state, collection.name)
            target = getattr(committed, collection.name)
            for key in base.keys() - mine.keys():
                target.pop(key, None)
            for key, record in mine.items():
                if base.get(key) != record:
                    target[key] = deepcopy(record)
        self._synchronise()

    async def rollback(self) -> None:
        self._synchronise()
