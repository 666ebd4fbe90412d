"""API Schemas for request/response validation."""

from tasknest.infrastructure.api.schemas.auth_schemas import (
    AuthData,
    ForgotPasswordRequest,
    LoginRequest,
    PendingRegistrationData,
    RegisterRequest,
    ResendOTPRequest,
    ResetPasswordRequest,
    UserResponse,
    VerifyEmailRequest,
)
from tasknest.infrastructure.api.schemas.common_schemas import (
    ApiModel,
    ApiResponse,
    ErrorDetail,
    StrictApiModel,
)
from tasknest.infrastructure.api.schemas.invitation_schemas import (
    InvitationAcceptedData,
    InvitationAcceptRequest,
    InvitationDetailsData,
    InvitationListData,
    InvitationResponse,
    InvitationSendRequest,
    InvitationSentData,
)
from tasknest.infrastructure.api.schemas.users_schemas import (
    PasswordChangeRequest,
    ProfileUpdateRequest,
    UserSummaryResponse,
)
from tasknest.infrastructure.api.schemas.workspace_schemas import (
    MemberAddRequest,
    MemberResponse,
    WorkspaceCreateRequest,
    WorkspaceResponse,
    WorkspaceUpdateRequest,
)

__all__ = [
    "ApiModel",
    "ApiResponse",
    "AuthData",
    "ErrorDetail",
    "ForgotPasswordRequest",
    "InvitationAcceptRequest",
    "InvitationAcceptedData",
    "InvitationDetailsData",
    "InvitationListData",
    "InvitationResponse",
    "InvitationSendRequest",
    "InvitationSentData",
    "LoginRequest",
    "MemberAddRequest",
    "MemberResponse",
    "PasswordChangeRequest",
    "PendingRegistrationData",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "ResendOTPRequest",
    "ResetPasswordRequest",
    "StrictApiModel",
    "UserResponse",
    "UserSummaryResponse",
    "VerifyEmailRequest",
    "WorkspaceCreateRequest",
    "WorkspaceResponse",
    "WorkspaceUpdateRequest",
]
