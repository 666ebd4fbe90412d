"""Repository for invitation operations.

Provides database operations for creating, retrieving, resolving and
expiring workspace invitations.
"""

from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tasknest.domain import store as ports
from tasknest.domain.entities import (
    Invitation,
    InvitationMetadata,
    InvitationRole,
    InvitationStatus,
    InvitationView,
)
from tasknest.domain.expiry import as_utc
from tasknest.infrastructure.persistence.models import (
    AccountModel,
    InvitationModel,
    WorkspaceModel,
)


class InvitationRepository(ports.InvitationRepository):
    """Repository for invitation database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _to_model(self, entity: Invitation) -> InvitationModel:
        return InvitationModel(
            id=entity.id,
            email=entity.email,
            workspace_id=entity.workspace_id,
            invited_by=entity.invited_by,
            role=entity.role.value,
            token=entity.token,
            status=entity.status.value,
            expires_at=entity.expires_at,
            accepted_by=entity.accepted_by,
            accepted_at=entity.accepted_at,
            inviter_name=entity.metadata.inviter_name,
            workspace_name=entity.metadata.workspace_name,
            personal_message=entity.metadata.personal_message,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _to_entity(self, model: InvitationModel) -> Invitation:
        return Invitation(
            id=model.id,
            email=model.email,
            workspace_id=model.workspace_id,
            invited_by=model.invited_by,
            role=InvitationRole(model.role),
            token=model.token,
            status=InvitationStatus(model.status),
            expires_at=as_utc(model.expires_at),
            accepted_by=model.accepted_by,
            accepted_at=as_utc(model.accepted_at) if model.accepted_at else None,
            metadata=InvitationMetadata(
                inviter_name=model.inviter_name,
                workspace_name=model.workspace_name,
                personal_message=model.personal_message,
            ),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    async def create(self, invitation: Invitation) -> Invitation:
        self._session.add(self._to_model(invitation))
        await self._session.flush()
        return invitation

    async def get_by_id(self, invitation_id: str) -> Invitation | None:
        model = await self._session.get(InvitationModel, invitation_id, populate_existing=True)
        return self._to_entity(model) if model else None

    async def get_by_token(self, token: str) -> Invitation | None:
        result = await self._session.execute(
            select(InvitationModel)
            .where(InvitationModel.token == token)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_view_by_token(self, token: str) -> InvitationView | None:
        stmt = (
            select(
                InvitationModel,
                WorkspaceModel.name,
                WorkspaceModel.description,
                AccountModel.name,
                AccountModel.email,
            )
            .join(WorkspaceModel, WorkspaceModel.id == InvitationModel.workspace_id)
            .join(AccountModel, AccountModel.id == InvitationModel.invited_by)
            .where(InvitationModel.token == token)
            .execution_options(populate_existing=True)
        )
        row = (await self._session.execute(stmt)).one_or_none()
        if row is None:
            return None
        model, workspace_name, workspace_description, inviter_name, inviter_email = row
        return InvitationView(
            invitation=self._to_entity(model),
            workspace_name=workspace_name,
            workspace_description=workspace_description,
            inviter_name=inviter_name,
            inviter_email=inviter_email,
        )

    async def find_pending(self, email: str, workspace_id: str, now: datetime) -> Invitation | None:
        result = await self._session.execute(
            select(InvitationModel)
            .where(
                InvitationModel.email == email,
                InvitationModel.workspace_id == workspace_id,
                InvitationModel.status == InvitationStatus.PENDING.value,
                InvitationModel.expires_at > now,
            )
            .limit(1)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def update(self, invitation: Invitation) -> Invitation:
        model = await self._session.get(InvitationModel, invitation.id)
        if model is None:
            raise ValueError(f"Invitation {invitation.id} does not exist")
        model.status = invitation.status.value
        model.accepted_by = invitation.accepted_by
        model.accepted_at = invitation.accepted_at
        model.updated_at = invitation.updated_at
        await self._session.flush()
        return invitation

    async def delete(self, invitation_id: str) -> bool:
        result = await self._session.execute(
            delete(InvitationModel).where(InvitationModel.id == invitation_id)
        )
        return result.rowcount > 0

    async def list_for_workspace(self, workspace_id: str) -> list[Invitation]:
        result = await self._session.execute(
            select(InvitationModel)
            .where(InvitationModel.workspace_id == workspace_id)
            .order_by(InvitationModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def count_by_status(self, workspace_id: str) -> dict[InvitationStatus, int]:
        result = await self._session.execute(
            select(InvitationModel.status, func.count())
            .where(InvitationModel.workspace_id == workspace_id)
            .group_by(InvitationModel.status)
        )
        return {InvitationStatus(status): count for status, count in result.all()}

    async def expire_overdue(self, now: datetime) -> int:
        result = await self._session.execute(
            update(InvitationModel)
            .where(
                InvitationModel.status == InvitationStatus.PENDING.value,
                InvitationModel.expires_at < now,
            )
            .values(status=InvitationStatus.EXPIRED.value, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
