"""Repository for one-time code operations.

Attempt counting and consumption are single conditional UPDATE statements so
concurrent requests cannot double-spend a code or lose an increment.
"""

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tasknest.domain import store as ports
from tasknest.domain.entities import CodePurpose, OneTimeCode
from tasknest.domain.expiry import as_utc
from tasknest.infrastructure.persistence.models import OneTimeCodeModel


class OneTimeCodeRepository(ports.OneTimeCodeRepository):
    """Repository for one-time code database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _to_model(self, entity: OneTimeCode) -> OneTimeCodeModel:
        return OneTimeCodeModel(
            id=entity.id,
            email=entity.email,
            purpose=entity.purpose.value,
            code=entity.code,
            attempts=entity.attempts,
            is_used=entity.is_used,
            expires_at=entity.expires_at,
            created_at=entity.created_at,
        )

    def _to_entity(self, model: OneTimeCodeModel) -> OneTimeCode:
        return OneTimeCode(
            id=model.id,
            email=model.email,
            purpose=CodePurpose(model.purpose),
            code=model.code,
            attempts=model.attempts,
            is_used=model.is_used,
            expires_at=as_utc(model.expires_at),
            created_at=as_utc(model.created_at),
        )

    async def create(self, code: OneTimeCode) -> OneTimeCode:
        self._session.add(self._to_model(code))
        await self._session.flush()
        return code

    async def find(self, email: str, code: str, purpose: CodePurpose) -> OneTimeCode | None:
        result = await self._session.execute(
            select(OneTimeCodeModel)
            .where(
                OneTimeCodeModel.email == email,
                OneTimeCodeModel.code == code,
                OneTimeCodeModel.purpose == purpose.value,
            )
            .order_by(OneTimeCodeModel.created_at.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_unused(self, email: str, purpose: CodePurpose) -> OneTimeCode | None:
        result = await self._session.execute(
            select(OneTimeCodeModel)
            .where(
                OneTimeCodeModel.email == email,
                OneTimeCodeModel.purpose == purpose.value,
                OneTimeCodeModel.is_used.is_(False),
            )
            .order_by(OneTimeCodeModel.created_at.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def delete_for(self, email: str, purpose: CodePurpose) -> int:
        result = await self._session.execute(
            delete(OneTimeCodeModel).where(
                OneTimeCodeModel.email == email,
                OneTimeCodeModel.purpose == purpose.value,
            )
        )
        return result.rowcount

    async def mark_used(self, code_id: str) -> bool:
        result = await self._session.execute(
            update(OneTimeCodeModel)
            .where(OneTimeCodeModel.id == code_id, OneTimeCodeModel.is_used.is_(False))
            .values(is_used=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def increment_attempts(self, email: str, purpose: CodePurpose, cap: int) -> bool:
        result = await self._session.execute(
            update(OneTimeCodeModel)
            .where(
                OneTimeCodeModel.email == email,
                OneTimeCodeModel.purpose == purpose.value,
                OneTimeCodeModel.is_used.is_(False),
                OneTimeCodeModel.attempts < cap,
            )
            .values(attempts=OneTimeCodeModel.attempts + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def delete_expired(self, now: datetime) -> int:
        result = await self._session.execute(
            delete(OneTimeCodeModel)
            .where(OneTimeCodeModel.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_for_emails(self, emails: list[str], purpose: CodePurpose) -> int:
        if not emails:
            return 0
        result = await self._session.execute(
            delete(OneTimeCodeModel).where(
                OneTimeCodeModel.email.in_(emails),
                OneTimeCodeModel.purpose == purpose.value,
            )
        )
        return result.rowcount
