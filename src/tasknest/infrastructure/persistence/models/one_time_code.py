"""SQLAlchemy model for the one_time_codes table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from tasknest.infrastructure.persistence.database import Base


class OneTimeCodeModel(Base):
    """Numeric codes emailed for verification and password reset.

    Attributes:
        id: Primary key (UUID string).
        email: Lower-cased email address the code was sent to.
        purpose: email_verification or password_reset.
        code: Plaintext numeric code.
        attempts: Failed verification attempts.
        is_used: Whether the code has been consumed.
        expires_at: When the code stops being accepted.
        created_at: When the code was issued.
    """

    __tablename__ = "one_time_codes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Code ID (UUID)")
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    purpose: Mapped[str] = mapped_column(
        String(32), nullable=False, comment="email_verification or password_reset"
    )
    code: Mapped[str] = mapped_column(String(10), nullable=False)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True, comment="Code expiry"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("ix_one_time_codes_email_purpose", "email", "purpose"),)

    def __repr__(self) -> str:
        return f"<OneTimeCode(id={self.id}, email={self.email}, purpose={self.purpose})>"
