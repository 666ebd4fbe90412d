"""Service for password reset logic.

Reset codes are one-time codes with purpose ``password_reset``; they share
the expiry, attempt cap and single-use rules of verification codes.
"""

from tasknest.core.logging import get_logger
from tasknest.domain.entities import CodePurpose
from tasknest.domain.exceptions import CodeNotFound, DeliveryFailed, LifecycleError
from tasknest.domain.expiry import ExpiryPolicy
from tasknest.domain.services.otp_service import OTPService
from tasknest.domain.services.password_policy import enforce_password_policy
from tasknest.domain.store import LifecycleStore
from tasknest.infrastructure.auth import hash_password
from tasknest.infrastructure.services.email_service import EmailService

logger = get_logger(__name__)


class PasswordResetService:
    """Service for handling password reset business logic."""

    def __init__(
        self,
        store: LifecycleStore,
        email_service: EmailService,
        policy: ExpiryPolicy | None = None,
        code_length: int = 6,
    ) -> None:
        self.store = store
        self.email_service = email_service
        self.otp = OTPService(store, policy, code_length)

    async def request_reset(self, email: str) -> None:
        """Email a reset code to an active account.

        Unknown or inactive emails return silently so the endpoint cannot be
        used to probe which addresses have accounts.

        Raises:
            DeliveryFailed: The code could not be sent; nothing was stored.
        """
        email = email.strip().lower()
        account = await self.store.accounts.get_by_email(email)
        if account is None or not account.is_active:
            logger.info("Password reset requested for unknown account", email=email)
            return

        code = await self.otp.issue(email, CodePurpose.PASSWORD_RESET)
        result = await self.email_service.send_password_reset_code(email, code, account.name)
        if not result.delivered:
            await self.store.rollback()
            raise DeliveryFailed("Failed to send password reset email. Please try again")

        await self.store.commit()
        logger.info("Password reset code sent", account_id=account.id)

    async def reset_password(self, email: str, code: str, new_password: str) -> None:
        """Consume a reset code and store the new password hash.

        Raises:
            ValidationFailed: The new password does not meet the policy.
            CodeNotFound, AlreadyUsed, CodeExpired, TooManyAttempts: see OTPService.verify.
        """
        email = email.strip().lower()
        enforce_password_policy(new_password)

        try:
            await self.otp.verify(email, code, CodePurpose.PASSWORD_RESET)
            account = await self.store.accounts.get_by_email(email)
            if account is None:
                # A code without an account can only outlive a deleted account.
                raise CodeNotFound()
            account.password_hash = hash_password(new_password)
            await self.store.accounts.update(account)
            await self.store.commit()
        except CodeNotFound:
            await self.store.rollback()
            await self.otp.register_failed_attempt(email, CodePurpose.PASSWORD_RESET)
            await self.store.commit()
            raise
        except LifecycleError:
            await self.store.rollback()
            raise

        logger.info("Password reset completed", account_id=account.id)
