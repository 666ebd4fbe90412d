"""Repository for workspace and membership operations."""

from dataclasses import asdict
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasknest.domain import store as ports
from tasknest.domain.entities import (
    LabelOption,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
    WorkspaceSettings,
)
from tasknest.domain.expiry import as_utc
from tasknest.infrastructure.persistence.models import (
    AccountWorkspaceModel,
    InvitationModel,
    WorkspaceMemberModel,
    WorkspaceModel,
)
from tasknest.infrastructure.persistence.upsert import insert_if_absent


def settings_to_json(settings: WorkspaceSettings) -> dict:
    return asdict(settings)


def settings_from_json(data: dict | None) -> WorkspaceSettings:
    if not data:
        return WorkspaceSettings()
    return WorkspaceSettings(
        task_statuses=[LabelOption(**option) for option in data.get("task_statuses", [])],
        task_priorities=[LabelOption(**option) for option in data.get("task_priorities", [])],
    )


class WorkspaceRepository(ports.WorkspaceRepository):
    """Repository for workspace database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _to_model(self, entity: Workspace) -> WorkspaceModel:
        return WorkspaceModel(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            owner_id=entity.owner_id,
            color=entity.color,
            icon=entity.icon,
            settings=settings_to_json(entity.settings),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _to_entity(self, model: WorkspaceModel, members: list[WorkspaceMember]) -> Workspace:
        return Workspace(
            id=model.id,
            name=model.name,
            description=model.description,
            owner_id=model.owner_id,
            members=members,
            color=model.color,
            icon=model.icon,
            settings=settings_from_json(model.settings),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    async def _members(self, workspace_id: str) -> list[WorkspaceMember]:
        result = await self._session.execute(
            select(WorkspaceMemberModel)
            .where(WorkspaceMemberModel.workspace_id == workspace_id)
            .order_by(WorkspaceMemberModel.joined_at)
            .execution_options(populate_existing=True)
        )
        return [
            WorkspaceMember(
                user_id=row.user_id,
                role=WorkspaceRole(row.role),
                joined_at=as_utc(row.joined_at),
            )
            for row in result.scalars().all()
        ]

    async def create(self, workspace: Workspace) -> Workspace:
        self._session.add(self._to_model(workspace))
        await self._session.flush()
        for member in workspace.members:
            await self.add_member(workspace.id, member)
        return workspace

    async def get_by_id(self, workspace_id: str) -> Workspace | None:
        model = await self._session.get(WorkspaceModel, workspace_id, populate_existing=True)
        if model is None:
            return None
        return self._to_entity(model, await self._members(model.id))

    async def list_for_member(self, user_id: str) -> list[Workspace]:
        result = await self._session.execute(
            select(WorkspaceModel)
            .join(WorkspaceMemberModel, WorkspaceMemberModel.workspace_id == WorkspaceModel.id)
            .where(WorkspaceMemberModel.user_id == user_id)
            .order_by(WorkspaceMemberModel.joined_at)
            .execution_options(populate_existing=True)
        )
        return [
            self._to_entity(model, await self._members(model.id))
            for model in result.scalars().all()
        ]

    async def update(self, workspace: Workspace) -> Workspace:
        model = await self._session.get(WorkspaceModel, workspace.id)
        if model is None:
            raise ValueError(f"Workspace {workspace.id} does not exist")
        model.name = workspace.name
        model.description = workspace.description
        model.color = workspace.color
        model.icon = workspace.icon
        model.settings = settings_to_json(workspace.settings)
        model.updated_at = datetime.now(timezone.utc)
        await self._session.flush()
        return workspace

    async def add_member(self, workspace_id: str, member: WorkspaceMember) -> bool:
        return await insert_if_absent(
            self._session,
            WorkspaceMemberModel,
            {
                "workspace_id": workspace_id,
                "user_id": member.user_id,
                "role": member.role.value,
                "joined_at": member.joined_at,
            },
        )

    async def remove_member(self, workspace_id: str, user_id: str) -> bool:
        result = await self._session.execute(
            delete(WorkspaceMemberModel).where(
                WorkspaceMemberModel.workspace_id == workspace_id,
                WorkspaceMemberModel.user_id == user_id,
            )
        )
        return result.rowcount > 0

    async def delete(self, workspace_id: str) -> bool:
        # Child rows go first; SQLite only honours ON DELETE CASCADE with foreign keys enabled.
        for model in (WorkspaceMemberModel, AccountWorkspaceModel, InvitationModel):
            await self._session.execute(delete(model).where(model.workspace_id == workspace_id))
        result = await self._session.execute(
            delete(WorkspaceModel).where(WorkspaceModel.id == workspace_id)
        )
        return result.rowcount > 0
