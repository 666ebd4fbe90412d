"""SQLAlchemy model for the pending_registrations table."""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from tasknest.infrastructure.persistence.database import Base


class PendingRegistrationModel(Base):
    """Unverified sign-ups. One row per email, removed on promotion or expiry."""

    __tablename__ = "pending_registrations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Registration ID (UUID)")
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, comment="Lower-cased email address"
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, comment="Argon2 hash")
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    avatar: Mapped[str] = mapped_column(String(500), nullable=False)
    theme: Mapped[str] = mapped_column(String(20), nullable=False, default="light")
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        comment="Registration is discarded after this time",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<PendingRegistration(id={self.id}, email={self.email})>"
