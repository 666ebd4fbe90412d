"""Typed errors raised by the verification and invitation lifecycle.

Services raise these; the API layer maps each class to an HTTP status.
Every error carries a user-facing ``message`` that never includes store
internals.
"""


class LifecycleError(Exception):
    """Base class for all lifecycle errors."""

    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(LifecycleError):
    default_message = "Not found"


class CodeNotFound(NotFound):
    """No code matches the exact (email, code, purpose) triple."""

    default_message = "Invalid OTP"


class RegistrationNotFound(NotFound):
    default_message = "Registration not found or expired. Please register again"


class InvalidOrExpiredInvitation(NotFound):
    """Single error for unknown, resolved or expired invitation tokens."""

    default_message = "Invalid or expired invitation"


class Conflict(LifecycleError):
    default_message = "Resource already exists"


class Expired(LifecycleError):
    default_message = "Expired"


class CodeExpired(Expired):
    default_message = "OTP has expired"


class InvitationExpired(Expired):
    default_message = "Invitation has expired"


class AlreadyUsed(LifecycleError):
    default_message = "OTP has already been used"


class TooManyAttempts(LifecycleError):
    default_message = "Too many failed attempts. Please request a new OTP"


class NoLongerPending(LifecycleError):
    default_message = "Invitation is no longer pending"


class AlreadyMember(LifecycleError):
    default_message = "User is already a member of this workspace"


class CannotRemoveOwner(LifecycleError):
    default_message = "Cannot remove workspace owner"


class Unauthorized(LifecycleError):
    """The caller lacks the role or ownership required for the operation."""

    default_message = "You do not have permission to perform this action"


class InvalidCredentials(LifecycleError):
    default_message = "Invalid email or password"


class ValidationFailed(LifecycleError):
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, errors: list[dict[str, str]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class DeliveryFailed(LifecycleError):
    """Email delivery failed; the token record that needed it was rolled back."""

    default_message = "Failed to send email. Please try again"
