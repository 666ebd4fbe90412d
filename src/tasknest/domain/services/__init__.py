"""Domain services for TaskNest.

The state machines (OTP, invitation, membership, promotion) stage writes in
a ``LifecycleStore``; the orchestration services built on them own the
commit and rollback of each flow.
"""

from tasknest.domain.services.account_service import AccountService, LoginResult
from tasknest.domain.services.cleanup_service import CleanupService, SweepResult
from tasknest.domain.services.invitation_service import InvitationService
from tasknest.domain.services.invitation_workflow import (
    AcceptedInvitation,
    InvitationWorkflow,
    WorkspaceInvitations,
)
from tasknest.domain.services.membership_service import MembershipService
from tasknest.domain.services.otp_service import OTPService
from tasknest.domain.services.password_policy import (
    PasswordPolicy,
    PasswordPolicyViolation,
    default_password_policy,
    enforce_password_policy,
)
from tasknest.domain.services.password_reset_service import PasswordResetService
from tasknest.domain.services.promotion_service import PromotionResult, PromotionService
from tasknest.domain.services.registration_service import (
    RegistrationService,
    VerificationResult,
)
from tasknest.domain.services.workspace_service import WorkspaceService

__all__ = [
    "AcceptedInvitation",
    "AccountService",
    "CleanupService",
    "InvitationService",
    "InvitationWorkflow",
    "LoginResult",
    "MembershipService",
    "OTPService",
    "PasswordPolicy",
    "PasswordPolicyViolation",
    "PasswordResetService",
    "PromotionResult",
    "PromotionService",
    "RegistrationService",
    "SweepResult",
    "VerificationResult",
    "WorkspaceInvitations",
    "WorkspaceService",
    "default_password_policy",
    "enforce_password_policy",
]
