"""SQLAlchemy model for the invitations table.

Invitations allow workspace admins and managers to invite people by email.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tasknest.infrastructure.persistence.database import Base


class InvitationModel(Base):
    """SQLAlchemy model for the invitations table.

    Attributes:
        id: Primary key (UUID string).
        email: Lower-cased email address of the invitee.
        workspace_id: Foreign key to workspaces table.
        invited_by: Foreign key to accounts table.
        role: Role granted on acceptance.
        token: Secure random token for accepting the invitation.
        status: pending, accepted, declined or expired.
        expires_at: Timestamp when the invitation expires.
        accepted_by: Account that accepted the invitation.
        accepted_at: Timestamp when the invitation was accepted.
        inviter_name: Inviter display name at send time.
        workspace_name: Workspace name at send time.
        personal_message: Optional note from the inviter.
        created_at: Timestamp when the invitation was created.
        updated_at: Timestamp of the last status change.
    """

    __tablename__ = "invitations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Invitation ID (UUID)")
    email: Mapped[str] = mapped_column(String(255), nullable=False, comment="Invitee email")
    workspace_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
        comment="Workspace the invitee will join",
    )
    invited_by: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        comment="Account that sent the invitation",
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="member")
    token: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True, comment="Opaque invitation token"
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True, comment="Invitation expiry"
    )
    accepted_by: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True
    )
    accepted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    inviter_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    workspace_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    personal_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("ix_invitations_email_workspace_status", "email", "workspace_id", "status"),
        Index("ix_invitations_workspace_id", "workspace_id"),
    )

    def __repr__(self) -> str:
        return f"<Invitation(id={self.id}, email={self.email}, status={self.status})>"
