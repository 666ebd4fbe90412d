"""Pydantic schemas for invitation API endpoints."""

from datetime import datetime

from pydantic import EmailStr, Field

from tasknest.domain.entities import (
    Invitation,
    InvitationRole,
    InvitationStatus,
    InvitationView,
    Workspace,
)
from tasknest.infrastructure.api.schemas.common_schemas import ApiModel


class InvitationSendRequest(ApiModel):
    """Request schema for sending an invitation."""

    email: EmailStr = Field(..., description="Email address of the person to invite")
    workspace_id: str = Field(..., min_length=1, description="Workspace to invite them to")
    role: InvitationRole = Field(InvitationRole.MEMBER, description="Role granted on acceptance")
    personal_message: str | None = Field(None, max_length=500)


class InvitationAcceptRequest(ApiModel):
    """Optional body for accepting an invitation.

    ``userId``, when given, must be the authenticated user.
    """

    user_id: str | None = None


class InvitationMetadataResponse(ApiModel):
    inviter_name: str | None = None
    workspace_name: str | None = None
    personal_message: str | None = None


class InvitationResponse(ApiModel):
    """Invitation details for inviters. Never includes the token."""

    id: str
    email: str
    workspace_id: str
    invited_by: str
    role: InvitationRole
    status: InvitationStatus
    expires_at: datetime
    accepted_by: str | None = None
    accepted_at: datetime | None = None
    metadata: InvitationMetadataResponse
    created_at: datetime

    @classmethod
    def from_entity(cls, invitation: Invitation) -> "InvitationResponse":
        return cls.model_validate(invitation)


class InvitationSummary(ApiModel):
    role: InvitationRole
    expires_at: datetime


class InvitationWorkspaceSummary(ApiModel):
    id: str | None = None
    name: str
    description: str | None = None
    role: InvitationRole | None = None


class InviterSummary(ApiModel):
    name: str


class InvitationDetailsData(ApiModel):
    """Public view of an invitation, shown to the unauthenticated token holder."""

    invitation: InvitationSummary
    workspace: InvitationWorkspaceSummary
    inviter: InviterSummary

    @classmethod
    def from_view(cls, view: InvitationView) -> "InvitationDetailsData":
        return cls(
            invitation=InvitationSummary(
                role=view.invitation.role,
                expires_at=view.invitation.expires_at,
            ),
            workspace=InvitationWorkspaceSummary(
                name=view.workspace_name,
                description=view.workspace_description,
            ),
            inviter=InviterSummary(name=view.inviter_name),
        )


class InvitationSentData(ApiModel):
    invitation: InvitationResponse


class InvitationAcceptedData(ApiModel):
    workspace: InvitationWorkspaceSummary

    @classmethod
    def build(cls, workspace: Workspace, role: InvitationRole) -> "InvitationAcceptedData":
        return cls(
            workspace=InvitationWorkspaceSummary(
                id=workspace.id,
                name=workspace.name,
                description=workspace.description,
                role=role,
            )
        )


class InvitationListData(ApiModel):
    invitations: list[InvitationResponse]
    stats: dict[str, int]
