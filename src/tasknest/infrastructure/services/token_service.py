"""Token generation service.

Provides cryptographically secure random values for invitation tokens and
one-time verification codes.
"""

import secrets
import string


class TokenService:
    """Service for generating secure random tokens."""

    @staticmethod
    def generate_token(length: int = 32) -> str:
        """Generate a cryptographically secure random token.

        Args:
            length: Number of bytes for the token. Default is 32 bytes (64 hex chars).

        Returns:
            Hexadecimal token string.
        """
        return secrets.token_hex(length)

    @staticmethod
    def generate_numeric_code(length: int = 6) -> str:
        """Generate a numeric one-time code.

        Each digit is drawn independently and uniformly, so leading zeros
        are allowed and the result always has exactly ``length`` characters.

        Args:
            length: Number of digits. Default is 6.

        Returns:
            Decimal string of ``length`` digits.
        """
        if length < 1:
            raise ValueError("Code length must be positive")
        return "".join(secrets.choice(string.digits) for _ in range(length))


# Default token service instance
token_service = TokenService()
