"""One-time code entity.

Numeric codes emailed to users to prove ownership of an address, either to
finish registration or to reset a password.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from tasknest.domain.expiry import is_expired

MAX_ATTEMPTS = 5


class CodePurpose(str, Enum):
    """What a one-time code authorises."""

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"


@dataclass
class OneTimeCode:
    """One-time code entity.

    At most one code exists per (email, purpose); issuing a new one replaces
    the previous code.

    Attributes:
        email: Lower-cased email address the code was sent to.
        purpose: What the code authorises.
        code: Plaintext numeric code.
        expires_at: When the code stops being accepted.
        id: Unique identifier (UUID string).
        attempts: Failed verification attempts, capped at MAX_ATTEMPTS.
        is_used: Whether the code has been consumed.
        created_at: When the code was issued.
    """

    email: str
    purpose: CodePurpose
    code: str
    expires_at: datetime
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    attempts: int = 0
    is_used: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.code.isdigit():
            raise ValueError("Code must be numeric")
        self.email = self.email.strip().lower()
        self.purpose = CodePurpose(self.purpose)

    @property
    def is_expired(self) -> bool:
        return is_expired(self.expires_at)

    @property
    def is_locked(self) -> bool:
        return self.attempts >= MAX_ATTEMPTS

    @property
    def is_active(self) -> bool:
        return not self.is_used and not self.is_expired and not self.is_locked
