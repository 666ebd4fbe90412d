"""Repository for pending registration operations."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasknest.domain import store as ports
from tasknest.domain.entities import AccountPreferences, PendingRegistration
from tasknest.domain.expiry import as_utc
from tasknest.infrastructure.persistence.models import PendingRegistrationModel


class PendingRegistrationRepository(ports.PendingRegistrationRepository):
    """Repository for pending registration database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _to_model(self, entity: PendingRegistration) -> PendingRegistrationModel:
        return PendingRegistrationModel(
            id=entity.id,
            email=entity.email,
            password_hash=entity.password_hash,
            name=entity.name,
            avatar=entity.avatar,
            theme=entity.preferences.theme,
            timezone=entity.preferences.timezone,
            expires_at=entity.expires_at,
            created_at=entity.created_at,
        )

    def _to_entity(self, model: PendingRegistrationModel) -> PendingRegistration:
        return PendingRegistration(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            name=model.name,
            avatar=model.avatar,
            preferences=AccountPreferences(theme=model.theme, timezone=model.timezone),
            expires_at=as_utc(model.expires_at),
            created_at=as_utc(model.created_at),
        )

    async def create(self, registration: PendingRegistration) -> PendingRegistration:
        self._session.add(self._to_model(registration))
        await self._session.flush()
        return registration

    async def get_by_email(self, email: str) -> PendingRegistration | None:
        result = await self._session.execute(
            select(PendingRegistrationModel).where(
                PendingRegistrationModel.email == email.strip().lower()
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def delete_by_email(self, email: str) -> int:
        result = await self._session.execute(
            delete(PendingRegistrationModel).where(
                PendingRegistrationModel.email == email.strip().lower()
            )
        )
        return result.rowcount

    async def delete_expired(self, now: datetime) -> list[str]:
        result = await self._session.execute(
            delete(PendingRegistrationModel)
            .where(PendingRegistrationModel.expires_at < now)
            .returning(PendingRegistrationModel.email)
            .execution_options(synchronize_session=False)
        )
        return list(result.scalars().all())
