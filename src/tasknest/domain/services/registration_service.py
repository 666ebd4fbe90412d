"""Registration and email verification.

Owns the unit of work for the sign-up flow: a pending registration and its
verification code are only committed once the code has been handed to the
email provider, and promotion is committed together with consuming the code.
"""

from dataclasses import dataclass

from tasknest.core.logging import get_logger
from tasknest.domain.entities import (
    Account,
    AccountPreferences,
    CodePurpose,
    PendingRegistration,
    Workspace,
)
from tasknest.domain.exceptions import (
    CodeNotFound,
    Conflict,
    DeliveryFailed,
    LifecycleError,
    RegistrationNotFound,
)
from tasknest.domain.expiry import ExpiryPolicy
from tasknest.domain.services.otp_service import OTPService
from tasknest.domain.services.password_policy import enforce_password_policy
from tasknest.domain.services.promotion_service import PromotionService
from tasknest.domain.store import LifecycleStore
from tasknest.infrastructure.auth import hash_password, jwt_service
from tasknest.infrastructure.services.email_service import EmailService

logger = get_logger(__name__)


@dataclass
class VerificationResult:
    account: Account
    workspace: Workspace
    token: str
    expires_in: int


class RegistrationService:
    """Sign-up, email verification and code resend."""

    def __init__(
        self,
        store: LifecycleStore,
        email_service: EmailService,
        policy: ExpiryPolicy | None = None,
        code_length: int = 6,
    ) -> None:
        self.store = store
        self.email_service = email_service
        self.policy = policy or ExpiryPolicy()
        self.otp = OTPService(store, self.policy, code_length)
        self.promotion = PromotionService(store)

    async def register(self, name: str, email: str, password: str) -> PendingRegistration:
        """Create (or replace) a pending registration and email its code.

        Raises:
            ValidationFailed: The password does not meet the policy.
            Conflict: A verified account already uses the email.
            DeliveryFailed: The code could not be sent; nothing was stored.
        """
        email = email.strip().lower()
        enforce_password_policy(password)

        if await self.store.accounts.get_by_email(email) is not None:
            raise Conflict("User already exists with this email")

        await self.store.pending_registrations.delete_by_email(email)
        pending = PendingRegistration(
            email=email,
            password_hash=hash_password(password),
            name=name.strip(),
            expires_at=self.policy.pending_registration_expiry(),
            preferences=AccountPreferences(),
        )
        await self.store.pending_registrations.create(pending)
        code = await self.otp.issue(email, CodePurpose.EMAIL_VERIFICATION)

        await self._deliver_code(pending, code)
        logger.info("Registration pending verification", email=email)
        return pending

    async def resend_code(self, email: str) -> None:
        """Issue a fresh verification code for a pending registration.

        Raises:
            RegistrationNotFound: No unexpired pending registration exists.
            DeliveryFailed: The code could not be sent; the old code is kept.
        """
        email = email.strip().lower()
        pending = await self.store.pending_registrations.get_by_email(email)
        if pending is None or pending.is_expired:
            raise RegistrationNotFound()

        code = await self.otp.issue(email, CodePurpose.EMAIL_VERIFICATION)
        await self._deliver_code(pending, code)
        logger.info("Verification code resent", email=email)

    async def verify_email(self, email: str, code: str) -> VerificationResult:
        """Consume the verification code and promote the pending registration.

        A wrong code counts as a failed attempt against the active code for
        the email; the counter survives the rollback of the verification.

        Raises:
            CodeNotFound, AlreadyUsed, CodeExpired, TooManyAttempts: see OTPService.verify.
            RegistrationNotFound: The pending registration is gone.
            Conflict: An account already exists for the email.
        """
        email = email.strip().lower()
        try:
            await self.otp.verify(email, code, CodePurpose.EMAIL_VERIFICATION)
            promoted = await self.promotion.promote(email)
            await self.store.commit()
        except CodeNotFound:
            await self.store.rollback()
            await self.otp.register_failed_attempt(email, CodePurpose.EMAIL_VERIFICATION)
            await self.store.commit()
            logger.info("Email verification failed: wrong code", email=email)
            raise
        except LifecycleError as e:
            await self.store.rollback()
            logger.info("Email verification failed", email=email, reason=type(e).__name__)
            raise
        except Exception:
            await self.store.rollback()
            raise

        account = promoted.account
        await self.email_service.send_welcome(account.email, account.name)

        token = jwt_service.create_access_token(user_id=account.id, email=account.email)
        logger.info("Email verified", account_id=account.id, email=email)
        return VerificationResult(
            account=account,
            workspace=promoted.workspace,
            token=token,
            expires_in=jwt_service.get_expires_in(),
        )

    async def _deliver_code(self, pending: PendingRegistration, code: str) -> None:
        result = await self.email_service.send_verification_code(pending.email, code, pending.name)
        if not result.delivered:
            await self.store.rollback()
            raise DeliveryFailed("Failed to send verification email. Please try again")
        await self.store.commit()
