"""Domain entities for TaskNest.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from tasknest.domain.entities.account import (
    Account,
    AccountPreferences,
    AccountProfileUpdate,
    AccountStatus,
)
from tasknest.domain.entities.invitation import (
    Invitation,
    InvitationMetadata,
    InvitationRole,
    InvitationStatus,
    InvitationView,
)
from tasknest.domain.entities.one_time_code import MAX_ATTEMPTS, CodePurpose, OneTimeCode
from tasknest.domain.entities.pending_registration import PendingRegistration
from tasknest.domain.entities.workspace import (
    LabelOption,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
    WorkspaceSettings,
    WorkspaceUpdate,
)

__all__ = [
    "Account",
    "AccountPreferences",
    "AccountProfileUpdate",
    "AccountStatus",
    "CodePurpose",
    "Invitation",
    "InvitationMetadata",
    "InvitationRole",
    "InvitationStatus",
    "InvitationView",
    "LabelOption",
    "MAX_ATTEMPTS",
    "OneTimeCode",
    "PendingRegistration",
    "Workspace",
    "WorkspaceMember",
    "WorkspaceRole",
    "WorkspaceSettings",
    "WorkspaceUpdate",
]
