"""Pending registration entity.

A pending registration holds a sign-up that has not yet proven ownership of
its email address. It is promoted to an Account once the emailed code is
verified, or removed once it expires.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from tasknest.domain.entities.account import DEFAULT_AVATAR, AccountPreferences
from tasknest.domain.expiry import is_expired


@dataclass
class PendingRegistration:
    """Unverified registration keyed by email.

    Attributes:
        email: Lower-cased email address. At most one record per email.
        password_hash: Argon2 hash computed at registration time.
        name: Display name.
        expires_at: Hard expiry (24 hours after registration).
        id: Unique identifier (UUID string).
        avatar: Avatar URL copied to the account on promotion.
        preferences: Preferences copied to the account on promotion.
        created_at: Timestamp when the registration was created.
    """

    email: str
    password_hash: str
    name: str
    expires_at: datetime
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    avatar: str = DEFAULT_AVATAR
    preferences: AccountPreferences = field(default_factory=AccountPreferences)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.email:
            raise ValueError("Email is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")
        self.email = self.email.strip().lower()

    @property
    def is_expired(self) -> bool:
        return is_expired(self.expires_at)
