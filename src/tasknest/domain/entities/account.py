"""Account entity for verified, permanent users.

Accounts are only ever created by promoting a verified pending registration.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

DEFAULT_AVATAR = "/images/default-avatar.png"


class AccountStatus(str, Enum):
    """Lifecycle status of an account."""

    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class AccountPreferences:
    """Per-account UI preferences."""

    theme: str = "light"
    timezone: str = "UTC"


@dataclass
class Account:
    """Account entity representing a permanent user.

    Attributes:
        id: Unique identifier (UUID string).
        email: Lower-cased, unique email address.
        password_hash: Argon2 hash of the user's password.
        name: Display name.
        avatar: Avatar URL.
        preferences: UI preferences.
        status: Account status.
        email_verified: Whether the email address has been verified.
        email_verified_at: When the email address was verified.
        workspace_ids: Ordered references to the workspaces the account belongs to.
        created_at: Timestamp when the account was created.
        updated_at: Timestamp when the account was last updated.
    """

    email: str
    password_hash: str
    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    avatar: str = DEFAULT_AVATAR
    preferences: AccountPreferences = field(default_factory=AccountPreferences)
    status: AccountStatus = AccountStatus.PENDING
    email_verified: bool = False
    email_verified_at: datetime | None = None
    workspace_ids: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate account data after initialization."""
        if not self.email:
            raise ValueError("Email is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")
        if not self.name:
            raise ValueError("Name is required")
        self.email = self.email.strip().lower()

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    def matches(self, query: str) -> bool:
        """Whether ``query`` occurs in the name or email, ignoring case."""
        query = query.strip().lower()
        return query in self.name.lower() or query in self.email


@dataclass
class AccountProfileUpdate:
    """Fields a user may change on their own profile.

    Unset fields (None) are left untouched.
    """

    name: str | None = None
    avatar: str | None = None
    theme: str | None = None
    timezone: str | None = None

    def apply(self, account: Account) -> Account:
        if self.name is not None:
            account.name = self.name
        if self.avatar is not None:
            account.avatar = self.avatar
        if self.theme is not None:
            account.preferences.theme = self.theme
        if self.timezone is not None:
            account.preferences.timezone = self.timezone
        account.updated_at = datetime.now(timezone.utc)
        return account
