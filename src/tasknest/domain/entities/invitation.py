"""Invitation entity for workspace onboarding.

Invitations allow workspace admins and managers to invite people by email.
The invitation carries an opaque token that the invitee presents to accept
or decline it before it expires.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from tasknest.domain.expiry import is_expired


class InvitationStatus(str, Enum):
    """Status of an invitation. Everything except PENDING is terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class InvitationRole(str, Enum):
    """Workspace role granted when the invitation is accepted."""

    MEMBER = "member"
    MANAGER = "manager"
    ADMIN = "admin"


@dataclass
class InvitationMetadata:
    """Display data captured when the invitation was sent."""

    inviter_name: str | None = None
    workspace_name: str | None = None
    personal_message: str | None = None


@dataclass
class Invitation:
    """Invitation entity for inviting a person to a workspace.

    Attributes:
        email: Lower-cased email address of the invitee.
        workspace_id: Workspace the invitee will join.
        invited_by: Account ID of the inviter.
        token: Opaque, unique token for accepting or declining.
        expires_at: Timestamp when the invitation expires.
        role: Role granted on acceptance.
        status: Current status.
        id: Unique identifier (UUID string).
        accepted_by: Account ID of the user who accepted (nullable).
        accepted_at: Timestamp when the invitation was accepted (nullable).
        metadata: Inviter and workspace names plus an optional personal message.
        created_at: Timestamp when the invitation was created.
        updated_at: Timestamp of the last status change.
    """

    email: str
    workspace_id: str
    invited_by: str
    token: str
    expires_at: datetime
    role: InvitationRole = InvitationRole.MEMBER
    status: InvitationStatus = InvitationStatus.PENDING
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    accepted_by: str | None = None
    accepted_at: datetime | None = None
    metadata: InvitationMetadata = field(default_factory=InvitationMetadata)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate invitation data after initialization."""
        if not self.email:
            raise ValueError("Email is required")
        if not self.workspace_id:
            raise ValueError("Workspace ID is required")
        if not self.token:
            raise ValueError("Token is required")
        if not self.invited_by:
            raise ValueError("Invited by user ID is required")
        self.email = self.email.strip().lower()
        self.role = InvitationRole(self.role)
        self.status = InvitationStatus(self.status)

    @property
    def is_expired(self) -> bool:
        """Check if the invitation has expired."""
        return is_expired(self.expires_at)

    @property
    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING


@dataclass
class InvitationView:
    """Invitation resolved together with its workspace and inviter.

    Returned by a single composed lookup so callers never walk the
    invitation -> workspace -> inviter chain themselves.
    """

    invitation: Invitation
    workspace_name: str
    workspace_description: str
    inviter_name: str
    inviter_email: str
