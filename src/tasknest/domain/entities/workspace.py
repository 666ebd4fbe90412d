"""Workspace entity and its membership list."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

DEFAULT_WORKSPACE_COLOR = "#4F46E5"
DEFAULT_WORKSPACE_ICON = "briefcase"


class WorkspaceRole(str, Enum):
    """Role of a member inside a workspace."""

    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"
    GUEST = "guest"


# Roles allowed to invite people and see a workspace's invitations.
INVITER_ROLES = frozenset({WorkspaceRole.ADMIN, WorkspaceRole.MANAGER})


@dataclass
class WorkspaceMember:
    """A single entry of a workspace's member list."""

    user_id: str
    role: WorkspaceRole = WorkspaceRole.MEMBER
    joined_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.role = WorkspaceRole(self.role)


@dataclass
class LabelOption:
    """A named, coloured option in a task taxonomy (status or priority)."""

    name: str
    color: str
    order: int


def default_task_statuses() -> list[LabelOption]:
    return [
        LabelOption("To Do", "#6B7280", 0),
        LabelOption("In Progress", "#3B82F6", 1),
        LabelOption("Review", "#F59E0B", 2),
        LabelOption("Done", "#10B981", 3),
    ]


def default_task_priorities() -> list[LabelOption]:
    return [
        LabelOption("Low", "#6B7280", 0),
        LabelOption("Medium", "#3B82F6", 1),
        LabelOption("High", "#EF4444", 2),
        LabelOption("Urgent", "#DC2626", 3),
    ]


@dataclass
class WorkspaceSettings:
    task_statuses: list[LabelOption] = field(default_factory=default_task_statuses)
    task_priorities: list[LabelOption] = field(default_factory=default_task_priorities)


@dataclass
class Workspace:
    """Workspace entity.

    The owner is always treated as an admin, whether or not an explicit
    member entry exists, and can never be removed from the member list.

    Attributes:
        name: Display name.
        owner_id: Account ID of the owner.
        id: Unique identifier (UUID string).
        description: Free-form description.
        members: Ordered member list.
        color: Accent colour.
        icon: Icon name.
        settings: Task status and priority taxonomies.
        created_at: Timestamp when the workspace was created.
        updated_at: Timestamp when the workspace was last updated.
    """

    name: str
    owner_id: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    description: str = ""
    members: list[WorkspaceMember] = field(default_factory=list)
    color: str = DEFAULT_WORKSPACE_COLOR
    icon: str = DEFAULT_WORKSPACE_ICON
    settings: WorkspaceSettings = field(default_factory=WorkspaceSettings)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Workspace name is required")
        if not self.owner_id:
            raise ValueError("Owner ID is required")

    def get_member(self, user_id: str) -> WorkspaceMember | None:
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None

    def has_member(self, user_id: str) -> bool:
        return user_id == self.owner_id or self.get_member(user_id) is not None

    def role_of(self, user_id: str) -> WorkspaceRole | None:
        """Effective role of a user; the owner is always an admin."""
        if user_id == self.owner_id:
            return WorkspaceRole.ADMIN
        member = self.get_member(user_id)
        return member.role if member else None

    def can_invite(self, user_id: str) -> bool:
        return self.role_of(user_id) in INVITER_ROLES

    def can_manage_members(self, user_id: str) -> bool:
        return self.role_of(user_id) == WorkspaceRole.ADMIN


@dataclass
class WorkspaceUpdate:
    """Fields an admin may change on a workspace. Unset fields are kept."""

    name: str | None = None
    description: str | None = None
    color: str | None = None
    icon: str | None = None

    def apply(self, workspace: Workspace) -> Workspace:
        if self.name is not None:
            if not self.name.strip():
                raise ValueError("Workspace name is required")
            workspace.name = self.name
        if self.description is not None:
            workspace.description = self.description
        if self.color is not None:
            workspace.color = self.color
        if self.icon is not None:
            workspace.icon = self.icon
        workspace.updated_at = datetime.now(timezone.utc)
        return workspace
