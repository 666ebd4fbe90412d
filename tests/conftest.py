"""Pytest configuration for all tests."""

import re
from typing import AsyncGenerator, Callable, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import tasknest.infrastructure.persistence.models  # noqa: F401
from tasknest.core.config import Settings
from tasknest.domain.entities import Account, AccountStatus
from tasknest.infrastructure.auth import hash_password, jwt_service
from tasknest.infrastructure.persistence.database import Base
from tasknest.infrastructure.persistence.memory_store import (
    InMemoryDatabase,
    InMemoryLifecycleStore,
)
from tasknest.infrastructure.persistence.sql_store import SqlAlchemyLifecycleStore
from tasknest.infrastructure.services.email import ConsoleProvider, EmailProvider
from tasknest.infrastructure.services.email_service import EmailService

CODE_PATTERN = re.compile(r"code is: (\d+)")
INVITE_LINK_PATTERN = re.compile(r"/invite/([0-9a-f]+)")

TEST_PASSWORD = "Sup3rSecret"


class RejectingProvider(EmailProvider):
    """Provider whose every send is refused."""

    def __init__(self) -> None:
        self.attempts = 0

    async def send_email(self, to, subject, html_body, text_body, from_email, from_name, reply_to=None) -> bool:
        self.attempts += 1
        return False

    async def test_connection(self) -> tuple[bool, str | None]:
        return False, "rejecting"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        environment="testing",
        rate_limit_enabled=False,
        cleanup_enabled=False,
        log_format="console",
    )


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def store(memory_db: InMemoryDatabase) -> InMemoryLifecycleStore:
    return memory_db.store()


@pytest.fixture
def console_provider() -> ConsoleProvider:
    return ConsoleProvider()


@pytest.fixture
def email_service(console_provider: ConsoleProvider, test_settings: Settings) -> EmailService:
    return EmailService(console_provider, settings=test_settings)


@pytest.fixture
def failing_email_service(test_settings: Settings) -> EmailService:
    return EmailService(RejectingProvider(), settings=test_settings)


@pytest.fixture
def latest_code(console_provider: ConsoleProvider) -> Callable[[str], str]:
    """Return a function reading the newest code emailed to an address."""

    def _latest_code(email: str) -> str:
        for message in reversed(console_provider.outbox):
            if message["to"] == email:
                match = CODE_PATTERN.search(message["text_body"])
                if match:
                    return match.group(1)
        raise AssertionError(f"No code was emailed to {email}")

    return _latest_code


@pytest.fixture
def latest_invite_token(console_provider: ConsoleProvider) -> Callable[[str], str]:
    """Return a function reading the newest invitation token emailed to an address."""

    def _latest_invite_token(email: str) -> str:
        for message in reversed(console_provider.outbox):
            if message["to"] == email:
                match = INVITE_LINK_PATTERN.search(message["text_body"])
                if match:
                    return match.group(1)
        raise AssertionError(f"No invitation was emailed to {email}")

    return _latest_invite_token


@pytest.fixture
def make_account(memory_db: InMemoryDatabase):
    """Create a verified, active account directly in the in-memory database."""

    async def _make_account(email: str, name: str = "Test User", password: str = TEST_PASSWORD) -> Account:
        store = memory_db.store()
        account = Account(
            email=email,
            password_hash=hash_password(password),
            name=name,
            status=AccountStatus.ACTIVE,
            email_verified=True,
        )
        await store.accounts.create(account)
        await store.commit()
        return account

    return _make_account


@pytest.fixture
def auth_headers() -> Callable[[Account], dict[str, str]]:
    """Return a function building a bearer header for an account."""

    def _auth_headers(account: Account) -> dict[str, str]:
        token = jwt_service.create_access_token(user_id=account.id, email=account.email)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def sql_store(db_session: AsyncSession) -> SqlAlchemyLifecycleStore:
    return SqlAlchemyLifecycleStore(db_session)


@pytest.fixture
def app(
    memory_db: InMemoryDatabase,
    email_service: EmailService,
    test_settings: Settings,
) -> Generator[FastAPI, None, None]:
    """Application wired to the in-memory store and console email."""
    from tasknest.infrastructure.api.app import create_app
    from tasknest.infrastructure.api.dependencies import get_email_service, get_lifecycle_store

    application = create_app(test_settings)
    application.dependency_overrides[get_lifecycle_store] = memory_db.store
    application.dependency_overrides[get_email_service] = lambda: email_service
    yield application
    application.dependency_overrides = {}


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client for the application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
