"""Password strength policy applied at registration, reset and change."""

import re
from dataclasses import dataclass

from tasknest.domain.exceptions import ValidationFailed


@dataclass(frozen=True)
class PasswordPolicyViolation:
    """A single rule the password failed.

    Attributes:
        field: The field name (always 'password').
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class PasswordPolicy:
    """Minimum length plus at least one letter and one digit."""

    def __init__(self, min_length: int = 8, max_length: int = 128) -> None:
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, password: str) -> list[PasswordPolicyViolation]:
        """Return every rule the password breaks; empty if it is acceptable."""
        violations: list[PasswordPolicyViolation] = []

        if len(password) < self.min_length:
            violations.append(
                PasswordPolicyViolation(
                    field="password",
                    message=f"Password must be at least {self.min_length} characters",
                    code="password_too_short",
                )
            )
        if len(password) > self.max_length:
            violations.append(
                PasswordPolicyViolation(
                    field="password",
                    message=f"Password must be at most {self.max_length} characters",
                    code="password_too_long",
                )
            )
        if not re.search(r"[A-Za-z]", password):
            violations.append(
                PasswordPolicyViolation(
                    field="password",
                    message="Password must contain at least one letter",
                    code="password_no_letter",
                )
            )
        if not re.search(r"\d", password):
            violations.append(
                PasswordPolicyViolation(
                    field="password",
                    message="Password must contain at least one digit",
                    code="password_no_digit",
                )
            )
        return violations


default_password_policy = PasswordPolicy()


def enforce_password_policy(password: str, policy: PasswordPolicy | None = None) -> None:
    """Raise ValidationFailed listing every violated rule."""
    violations = (policy or default_password_policy).validate(password)
    if violations:
        raise ValidationFailed(
            violations[0].message,
            errors=[{"field": v.field, "message": v.message, "code": v.code} for v in violations],
        )
