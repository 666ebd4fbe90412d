"""SQLAlchemy models for the accounts and account_workspaces tables."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from tasknest.infrastructure.persistence.database import Base


class AccountModel(Base):
    """SQLAlchemy model for the accounts table.

    Attributes:
        id: Primary key (UUID string).
        email: Unique, lower-cased email address.
        password_hash: Argon2 password hash.
        name: Display name.
        avatar: Avatar URL.
        theme: Preferred UI theme.
        timezone: Preferred timezone.
        status: pending, active or inactive.
        email_verified: Whether the email address is verified.
        email_verified_at: When the email address was verified.
        created_at: Timestamp when the account was created.
        updated_at: Timestamp when the account was last updated.
    """

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Account ID (UUID)")
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True, comment="Lower-cased email address"
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, comment="Argon2 hash")
    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="Display name")
    avatar: Mapped[str] = mapped_column(String(500), nullable=False, comment="Avatar URL")
    theme: Mapped[str] = mapped_column(String(20), nullable=False, default="light")
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", comment="pending, active or inactive"
    )
    email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    email_verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email={self.email}, status={self.status})>"


class AccountWorkspaceModel(Base):
    """Ordered back-reference from an account to the workspaces it belongs to.

    The composite primary key makes "link if absent" a single atomic insert.
    """

    __tablename__ = "account_workspaces"

    account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True
    )
    workspace_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("workspaces.id", ondelete="CASCADE"), primary_key=True
    )
    linked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, comment="Orders the account's workspace list"
    )

    def __repr__(self) -> str:
        return f"<AccountWorkspace(account_id={self.account_id}, workspace_id={self.workspace_id})>"
