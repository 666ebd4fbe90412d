"""Argon2id password hashes for accounts and pending registrations.

A pending registration stores the hash produced here and promotion copies it
unchanged, so only ``hash_password`` ever sees a plaintext password.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_hasher = PasswordHasher()

# Verified against when the email is unknown so login timing does not reveal it.
DUMMY_PASSWORD_HASH = _hasher.hash("tasknest-timing-equalizer")


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a stored hash; malformed hashes never match.

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> verify_password("SecureP@ss123!", hashed)
        True
        >>> verify_password("wrong", hashed)
        False
    """
    try:
        _hasher.verify(hashed, password)
        return True
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash was produced with outdated parameters."""
    return _hasher.check_needs_rehash(hashed)
