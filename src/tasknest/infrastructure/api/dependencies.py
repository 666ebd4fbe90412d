"""FastAPI dependencies for authentication, storage and services.

The lifecycle store is chosen here and nowhere else: production requests get
a SQLAlchemy store over the request's session, tests override
``get_lifecycle_store`` with an in-memory one.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tasknest.core.config import get_settings
from tasknest.core.logging import get_logger
from tasknest.domain.expiry import ExpiryPolicy
from tasknest.domain.services import (
    AccountService,
    InvitationWorkflow,
    PasswordResetService,
    RegistrationService,
    WorkspaceService,
)
from tasknest.domain.store import LifecycleStore
from tasknest.infrastructure.auth import (
    InvalidTokenError,
    TokenExpiredError,
    jwt_service,
)
from tasknest.infrastructure.persistence.database import get_db_session
from tasknest.infrastructure.persistence.sql_store import SqlAlchemyLifecycleStore
from tasknest.infrastructure.services.email_service import EmailService
from tasknest.infrastructure.services.email_service import (
    get_email_service as default_email_service,
)

logger = get_logger(__name__)


@dataclass
class CurrentUser:
    """Represents the current authenticated user context.

    Extracted from a valid JWT access token.
    """

    user_id: str
    email: str


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Extract and validate the current user from the Authorization header.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt_service.validate_access_token(parts[1])
        return CurrentUser(user_id=payload["user_id"], email=payload["email"])
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except KeyError as e:
        logger.warning("Authentication failed: missing claim in token", missing_claim=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


# Type alias for dependency injection
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]


async def get_lifecycle_store(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> LifecycleStore:
    return SqlAlchemyLifecycleStore(session)


def get_email_service() -> EmailService:
    return default_email_service()


def get_expiry_policy() -> ExpiryPolicy:
    return ExpiryPolicy.from_settings(get_settings())


Store = Annotated[LifecycleStore, Depends(get_lifecycle_store)]
Emails = Annotated[EmailService, Depends(get_email_service)]
Policy = Annotated[ExpiryPolicy, Depends(get_expiry_policy)]


def get_registration_service(store: Store, emails: Emails, policy: Policy) -> RegistrationService:
    return RegistrationService(store, emails, policy, get_settings().otp_length)


def get_password_reset_service(store: Store, emails: Emails, policy: Policy) -> PasswordResetService:
    return PasswordResetService(store, emails, policy, get_settings().otp_length)


def get_invitation_workflow(store: Store, emails: Emails, policy: Policy) -> InvitationWorkflow:
    return InvitationWorkflow(store, emails, policy)


def get_account_service(store: Store) -> AccountService:
    return AccountService(store)


def get_workspace_service(store: Store) -> WorkspaceService:
    return WorkspaceService(store)
