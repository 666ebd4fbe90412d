"""Persistence repositories for database operations."""

from tasknest.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from tasknest.infrastructure.persistence.repositories.invitation_repository import (
    InvitationRepository,
)
from tasknest.infrastructure.persistence.repositories.one_time_code_repository import (
    OneTimeCodeRepository,
)
from tasknest.infrastructure.persistence.repositories.pending_registration_repository import (
    PendingRegistrationRepository,
)
from tasknest.infrastructure.persistence.repositories.workspace_repository import (
    WorkspaceRepository,
)

__all__ = [
    "AccountRepository",
    "InvitationRepository",
    "OneTimeCodeRepository",
    "PendingRegistrationRepository",
    "WorkspaceRepository",
]
