"""Pydantic schemas for workspace endpoints."""

from datetime import datetime

from pydantic import EmailStr, Field

from tasknest.domain.entities import Workspace, WorkspaceRole, WorkspaceUpdate
from tasknest.infrastructure.api.schemas.common_schemas import ApiModel, StrictApiModel

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class WorkspaceCreateRequest(StrictApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=500)
    color: str | None = Field(None, pattern=HEX_COLOR)
    icon: str | None = Field(None, max_length=50)


class WorkspaceUpdateRequest(StrictApiModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    color: str | None = Field(None, pattern=HEX_COLOR)
    icon: str | None = Field(None, max_length=50)

    def to_update(self) -> WorkspaceUpdate:
        return WorkspaceUpdate(
            name=self.name,
            description=self.description,
            color=self.color,
            icon=self.icon,
        )


class MemberAddRequest(StrictApiModel):
    email: EmailStr
    role: WorkspaceRole = WorkspaceRole.MEMBER


class LabelOptionResponse(ApiModel):
    name: str
    color: str
    order: int


class WorkspaceSettingsResponse(ApiModel):
    task_statuses: list[LabelOptionResponse]
    task_priorities: list[LabelOptionResponse]


class MemberResponse(ApiModel):
    user_id: str
    role: WorkspaceRole
    joined_at: datetime


class WorkspaceResponse(ApiModel):
    id: str
    name: str
    description: str
    owner_id: str
    color: str
    icon: str
    members: list[MemberResponse]
    settings: WorkspaceSettingsResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, workspace: Workspace) -> "WorkspaceResponse":
        return cls.model_validate(workspace)
