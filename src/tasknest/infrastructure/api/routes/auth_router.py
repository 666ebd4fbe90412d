"""Authentication API routes.

Provides endpoints for registration, email verification, login and
password reset.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from tasknest.core.logging import get_logger
from tasknest.domain.services import (
    AccountService,
    PasswordResetService,
    RegistrationService,
)
from tasknest.infrastructure.api.dependencies import (
    get_account_service,
    get_password_reset_service,
    get_registration_service,
)
from tasknest.infrastructure.api.schemas import (
    ApiResponse,
    AuthData,
    ForgotPasswordRequest,
    LoginRequest,
    PendingRegistrationData,
    RegisterRequest,
    ResendOTPRequest,
    ResetPasswordRequest,
    VerifyEmailRequest,
)

logger = get_logger(__name__)

router = APIRouter()

Registrations = Annotated[RegistrationService, Depends(get_registration_service)]


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[PendingRegistrationData],
    response_model_exclude_none=True,
    responses={
        400: {"description": "Password does not meet the policy"},
        409: {"description": "An account already uses this email"},
        502: {"description": "Verification email could not be sent"},
    },
)
async def register(request: RegisterRequest, service: Registrations) -> ApiResponse[PendingRegistrationData]:
    """Start a registration.

    Flow:
    1. Validate password strength
    2. Reject emails that already have an account
    3. Replace any earlier pending registration for the email
    4. Issue a verification code and email it
    5. Commit only if the email was handed to the provider
    """
    pending = await service.register(request.name, request.email, request.password)
    return ApiResponse[PendingRegistrationData](
        message="Registration successful. Please check your email for the verification code",
        data=PendingRegistrationData(email=pending.email, expires_at=pending.expires_at),
    )


@router.post(
    "/verify-email",
    response_model=ApiResponse[AuthData],
    response_model_exclude_none=True,
    responses={
        400: {"description": "Wrong, used or expired code"},
        404: {"description": "No pending registration"},
        429: {"description": "Too many failed attempts"},
    },
)
async def verify_email(request: VerifyEmailRequest, service: Registrations) -> ApiResponse[AuthData]:
    """Verify the emailed code and activate the account.

    Flow:
    1. Consume the code (a wrong code counts as a failed attempt)
    2. Promote the pending registration into an account
    3. Create the account's default workspace
    4. Return the account, workspace and an access token
    """
    result = await service.verify_email(request.email, request.otp)
    return ApiResponse[AuthData](
        message="Email verified successfully",
        data=AuthData.build(
            result.account,
            token=result.token,
            expires_in=result.expires_in,
            workspace=result.workspace,
        ),
    )


@router.post(
    "/resend-otp",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def resend_otp(request: ResendOTPRequest, service: Registrations) -> ApiResponse[None]:
    """Send a fresh verification code, invalidating the previous one."""
    await service.resend_code(request.email)
    return ApiResponse[None](message="A new verification code has been sent to your email")


@router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    response_model_exclude_none=True,
    responses={401: {"description": "Invalid credentials"}},
)
async def login(
    request: LoginRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> ApiResponse[AuthData]:
    """Authenticate with email and password.

    Unknown emails and wrong passwords return the same 401 response.
    """
    result = await service.login(request.email, request.password)
    return ApiResponse[AuthData](
        message="Login successful",
        data=AuthData.build(result.account, token=result.token, expires_in=result.expires_in),
    )


@router.post(
    "/forgot-password",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
) -> ApiResponse[None]:
    """Email a password reset code.

    Always returns the same message whether or not the account exists.
    """
    await service.request_reset(request.email)
    return ApiResponse[None](
        message="If an account exists for this email, a password reset code has been sent"
    )


@router.post(
    "/reset-password",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def reset_password(
    request: ResetPasswordRequest,
    service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
) -> ApiResponse[None]:
    """Set a new password using an emailed reset code."""
    await service.reset_password(request.email, request.otp, request.password)
    logger.info("Password reset via API", email=request.email)
    return ApiResponse[None](message="Password has been reset successfully")
