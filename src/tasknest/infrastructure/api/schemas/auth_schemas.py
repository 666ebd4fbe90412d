"""Pydantic schemas for authentication endpoints."""

from datetime import datetime

from pydantic import EmailStr, Field

from tasknest.domain.entities import Account, AccountStatus, Workspace
from tasknest.infrastructure.api.schemas.common_schemas import ApiModel
from tasknest.infrastructure.api.schemas.workspace_schemas import WorkspaceResponse


class RegisterRequest(ApiModel):
    """Request body for registration."""

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class VerifyEmailRequest(ApiModel):
    email: EmailStr = Field(..., description="Email the code was sent to")
    otp: str = Field(..., min_length=4, max_length=10, pattern=r"^\d+$", description="Verification code")


class ResendOTPRequest(ApiModel):
    email: EmailStr


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(ApiModel):
    email: EmailStr


class ResetPasswordRequest(ApiModel):
    email: EmailStr
    otp: str = Field(..., min_length=4, max_length=10, pattern=r"^\d+$")
    password: str = Field(..., min_length=1, description="New password")


class PreferencesResponse(ApiModel):
    theme: str
    timezone: str


class UserResponse(ApiModel):
    """User information in auth and profile responses."""

    id: str = Field(..., description="Account ID")
    name: str
    email: str
    avatar: str
    preferences: PreferencesResponse
    status: AccountStatus
    email_verified: bool
    email_verified_at: datetime | None = None
    workspaces: list[str] = Field(default_factory=list, description="Workspace IDs")
    created_at: datetime

    @classmethod
    def from_entity(cls, account: Account) -> "UserResponse":
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            avatar=account.avatar,
            preferences=PreferencesResponse.model_validate(account.preferences),
            status=account.status,
            email_verified=account.email_verified,
            email_verified_at=account.email_verified_at,
            workspaces=list(account.workspace_ids),
            created_at=account.created_at,
        )


class PendingRegistrationData(ApiModel):
    email: str
    expires_at: datetime


class AuthData(ApiModel):
    """Payload returned after email verification and login."""

    user: UserResponse
    workspace: WorkspaceResponse | None = None
    token: str = Field(..., description="JWT access token")
    expires_in: int = Field(..., description="Access token lifetime in seconds")

    @classmethod
    def build(
        cls,
        account: Account,
        token: str,
        expires_in: int,
        workspace: Workspace | None = None,
    ) -> "AuthData":
        return cls(
            user=UserResponse.from_entity(account),
            workspace=WorkspaceResponse.from_entity(workspace) if workspace else None,
            token=token,
            expires_in=expires_in,
        )
