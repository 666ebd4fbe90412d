"""SQLAlchemy models for the TaskNest lifecycle tables.

All models inherit from the Base class defined in database.py and are
automatically created on application startup outside production.
"""

from tasknest.infrastructure.persistence.models.account import AccountModel, AccountWorkspaceModel
from tasknest.infrastructure.persistence.models.invitation import InvitationModel
from tasknest.infrastructure.persistence.models.one_time_code import OneTimeCodeModel
from tasknest.infrastructure.persistence.models.pending_registration import PendingRegistrationModel
from tasknest.infrastructure.persistence.models.workspace import WorkspaceMemberModel, WorkspaceModel

__all__ = [
    "AccountModel",
    "AccountWorkspaceModel",
    "InvitationModel",
    "OneTimeCodeModel",
    "PendingRegistrationModel",
    "WorkspaceMemberModel",
    "WorkspaceModel",
]
