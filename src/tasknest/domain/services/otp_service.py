"""One-time code state machine.

A code for (email, purpose) moves through these states:

    no-code -> active -> used
                      -> expired   (time passes)
                      -> locked    (MAX_ATTEMPTS failed verifications)

The methods here only stage writes in the caller's unit of work; the
calling service decides when to commit or roll back.
"""

from tasknest.core.logging import get_logger
from tasknest.domain.entities import MAX_ATTEMPTS, CodePurpose, OneTimeCode
from tasknest.domain.exceptions import (
    AlreadyUsed,
    CodeExpired,
    CodeNotFound,
    TooManyAttempts,
)
from tasknest.domain.expiry import ExpiryPolicy
from tasknest.domain.store import LifecycleStore
from tasknest.infrastructure.services.token_service import token_service

logger = get_logger(__name__)


class OTPService:
    """Issues, verifies and rate-limits one-time codes."""

    def __init__(
        self,
        store: LifecycleStore,
        policy: ExpiryPolicy | None = None,
        code_length: int = 6,
    ) -> None:
        self.store = store
        self.policy = policy or ExpiryPolicy()
        self.code_length = code_length

    async def issue(self, email: str, purpose: CodePurpose) -> str:
        """Replace any code for (email, purpose) with a fresh one.

        Two concurrent calls for the same pair race on delete-then-insert;
        the last writer wins and earlier codes stop verifying. This is a
        best-effort guarantee, not a lock.

        Returns:
            The plaintext code, for the caller to deliver.
        """
        email = email.strip().lower()
        await self.store.one_time_codes.delete_for(email, purpose)

        code = token_service.generate_numeric_code(self.code_length)
        await self.store.one_time_codes.create(
            OneTimeCode(
                email=email,
                purpose=purpose,
                code=code,
                expires_at=self.policy.otp_expiry(),
            )
        )
        logger.info("One-time code issued", email=email, purpose=purpose.value)
        return code

    async def verify(self, email: str, code: str, purpose: CodePurpose) -> OneTimeCode:
        """Consume a code.

        Raises:
            CodeNotFound: No record matches (email, code, purpose).
            AlreadyUsed: The code was already consumed.
            CodeExpired: The code is past its expiry.
            TooManyAttempts: The code is locked after repeated failures.
        """
        email = email.strip().lower()
        record = await self.store.one_time_codes.find(email, code, purpose)
        if record is None:
            raise CodeNotFound()
        if record.is_used:
            raise AlreadyUsed()
        if record.is_expired:
            raise CodeExpired()
        if record.attempts >= MAX_ATTEMPTS:
            raise TooManyAttempts()

        # A concurrent verify may have consumed it between read and write.
        if not await self.store.one_time_codes.mark_used(record.id):
            raise AlreadyUsed()

        record.is_used = True
        logger.info("One-time code verified", email=email, purpose=purpose.value)
        return record

    async def register_failed_attempt(self, email: str, purpose: CodePurpose) -> bool:
        """Count a failed verification against the unused code for (email, purpose).

        Attempts for a pair with no unused code are dropped.

        Returns:
            True if a counter was incremented.
        """
        email = email.strip().lower()
        incremented = await self.store.one_time_codes.increment_attempts(
            email, purpose, MAX_ATTEMPTS
        )
        if incremented:
            logger.info("Failed code attempt recorded", email=email, purpose=purpose.value)
        return incremented
