"""SQLAlchemy-backed lifecycle store.

One store wraps one ``AsyncSession``; the session's transaction is the unit
of work shared by every repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from tasknest.domain.store import LifecycleStore
from tasknest.infrastructure.persistence.repositories import (
    AccountRepository,
    InvitationRepository,
    OneTimeCodeRepository,
    PendingRegistrationRepository,
    WorkspaceRepository,
)


class SqlAlchemyLifecycleStore(LifecycleStore):
    """Lifecycle store over a single SQLAlchemy async session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.accounts = AccountRepository(session)
        self.pending_registrations = PendingRegistrationRepository(session)
        self.one_time_codes = OneTimeCodeRepository(session)
        self.invitations = InvitationRepository(session)
        self.workspaces = WorkspaceRepository(session)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
