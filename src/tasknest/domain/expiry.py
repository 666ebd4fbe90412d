"""Expiry policy for time-limited lifecycle records.

One-time codes, pending registrations and invitations all carry an absolute
``expires_at`` timestamp. This module computes those timestamps and decides
whether a record is still live.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from tasknest.core.config import (
    DEFAULT_INVITATION_EXPIRY_HOURS,
    DEFAULT_OTP_EXPIRY_MINUTES,
)

PENDING_REGISTRATION_TTL = timedelta(hours=24)


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on the way back)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compute_expiry(delta: timedelta, now: datetime | None = None) -> datetime:
    """Return ``now + delta``."""
    return (now or utcnow()) + delta


def is_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    """A record is expired once the current time is strictly past its expiry."""
    return (now or utcnow()) > as_utc(expires_at)


@dataclass(frozen=True)
class ExpiryPolicy:
    """Configured lifetimes for each kind of lifecycle record.

    Attributes:
        otp_expiry_minutes: Lifetime of a one-time code.
        invitation_expiry_hours: Lifetime of a workspace invitation.
    """

    otp_expiry_minutes: int = DEFAULT_OTP_EXPIRY_MINUTES
    invitation_expiry_hours: int = DEFAULT_INVITATION_EXPIRY_HOURS

    @classmethod
    def from_settings(cls, settings) -> "ExpiryPolicy":
        return cls(
            otp_expiry_minutes=settings.otp_expiry_minutes,
            invitation_expiry_hours=settings.invitation_expiry_hours,
        )

    def otp_expiry(self, now: datetime | None = None) -> datetime:
        return compute_expiry(timedelta(minutes=self.otp_expiry_minutes), now)

    def invitation_expiry(self, now: datetime | None = None) -> datetime:
        return compute_expiry(timedelta(hours=self.invitation_expiry_hours), now)

    def pending_registration_expiry(self, now: datetime | None = None) -> datetime:
        return compute_expiry(PENDING_REGISTRATION_TTL, now)
