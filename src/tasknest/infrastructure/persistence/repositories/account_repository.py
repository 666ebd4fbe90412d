"""Repository for account operations."""

from datetime import datetime, timezone

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasknest.domain import store as ports
from tasknest.domain.entities import Account, AccountPreferences, AccountStatus
from tasknest.domain.expiry import as_utc
from tasknest.infrastructure.persistence.models import AccountModel, AccountWorkspaceModel
from tasknest.infrastructure.persistence.upsert import insert_if_absent


class AccountRepository(ports.AccountRepository):
    """Repository for account database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _to_model(self, entity: Account) -> AccountModel:
        return AccountModel(
            id=entity.id,
            email=entity.email,
            password_hash=entity.password_hash,
            name=entity.name,
            avatar=entity.avatar,
            theme=entity.preferences.theme,
            timezone=entity.preferences.timezone,
            status=entity.status.value,
            email_verified=entity.email_verified,
            email_verified_at=entity.email_verified_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _to_entity(self, model: AccountModel, workspace_ids: list[str]) -> Account:
        return Account(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            name=model.name,
            avatar=model.avatar,
            preferences=AccountPreferences(theme=model.theme, timezone=model.timezone),
            status=AccountStatus(model.status),
            email_verified=model.email_verified,
            email_verified_at=as_utc(model.email_verified_at) if model.email_verified_at else None,
            workspace_ids=workspace_ids,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    async def _workspace_ids(self, account_id: str) -> list[str]:
        result = await self._session.execute(
            select(AccountWorkspaceModel.workspace_id)
            .where(AccountWorkspaceModel.account_id == account_id)
            .order_by(AccountWorkspaceModel.linked_at)
        )
        return list(result.scalars().all())

    async def create(self, account: Account) -> Account:
        self._session.add(self._to_model(account))
        await self._session.flush()
        for workspace_id in account.workspace_ids:
            await self.add_workspace(account.id, workspace_id)
        return account

    async def get_by_id(self, account_id: str) -> Account | None:
        model = await self._session.get(AccountModel, account_id, populate_existing=True)
        if model is None:
            return None
        return self._to_entity(model, await self._workspace_ids(model.id))

    async def get_by_email(self, email: str) -> Account | None:
        result = await self._session.execute(
            select(AccountModel).where(AccountModel.email == email.strip().lower())
        )
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_entity(model, await self._workspace_ids(model.id))

    async def update(self, account: Account) -> Account:
        model = await self._session.get(AccountModel, account.id)
        if model is None:
            raise ValueError(f"Account {account.id} does not exist")
        model.password_hash = account.password_hash
        model.name = account.name
        model.avatar = account.avatar
        model.theme = account.preferences.theme
        model.timezone = account.preferences.timezone
        model.status = account.status.value
        model.email_verified = account.email_verified
        model.email_verified_at = account.email_verified_at
        model.updated_at = datetime.now(timezone.utc)
        await self._session.flush()
        return account

    async def add_workspace(self, account_id: str, workspace_id: str) -> bool:
        return await insert_if_absent(
            self._session,
            AccountWorkspaceModel,
            {
                "account_id": account_id,
                "workspace_id": workspace_id,
                "linked_at": datetime.now(timezone.utc),
            },
        )

    async def remove_workspace(self, account_id: str, workspace_id: str) -> bool:
        result = await self._session.execute(
            delete(AccountWorkspaceModel).where(
                AccountWorkspaceModel.account_id == account_id,
                AccountWorkspaceModel.workspace_id == workspace_id,
            )
        )
        return result.rowcount > 0

    async def search(self, query: str, limit: int) -> list[Account]:
        query = query.strip()
        result = await self._session.execute(
            select(AccountModel)
            .where(
                AccountModel.status == AccountStatus.ACTIVE.value,
                or_(
                    AccountModel.name.icontains(query, autoescape=True),
                    AccountModel.email.icontains(query, autoescape=True),
                ),
            )
            .order_by(func.lower(AccountModel.name))
            .limit(limit)
        )
        return [
            self._to_entity(model, await self._workspace_ids(model.id))
            for model in result.scalars().all()
        ]
