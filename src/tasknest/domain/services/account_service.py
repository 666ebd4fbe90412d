"""Login and self-service account management."""

from dataclasses import dataclass

from tasknest.core.logging import get_logger
from tasknest.domain.entities import Account, AccountProfileUpdate
from tasknest.domain.exceptions import InvalidCredentials, NotFound, Unauthorized
from tasknest.domain.services.password_policy import enforce_password_policy
from tasknest.domain.store import LifecycleStore
from tasknest.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    jwt_service,
    needs_rehash,
    verify_password,
)

logger = get_logger(__name__)

SEARCH_LIMIT = 10


@dataclass
class LoginResult:
    account: Account
    token: str
    expires_in: int


class AccountService:
    """Service for account authentication and profile updates."""

    def __init__(self, store: LifecycleStore) -> None:
        self.store = store

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate with email and password.

        Unknown emails are verified against a dummy hash so the response
        time does not reveal whether an account exists.

        Raises:
            InvalidCredentials: Unknown email or wrong password.
            Unauthorized: The account is not active.
        """
        email = email.strip().lower()
        account = await self.store.accounts.get_by_email(email)

        if account is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Login failed: unknown email", email=email)
            raise InvalidCredentials()

        if not verify_password(password, account.password_hash):
            logger.info("Login failed: wrong password", account_id=account.id)
            raise InvalidCredentials()

        if not account.is_active or not account.email_verified:
            raise Unauthorized("Account is not active")

        if needs_rehash(account.password_hash):
            account.password_hash = hash_password(password)
            await self.store.accounts.update(account)
            await self.store.commit()

        token = jwt_service.create_access_token(user_id=account.id, email=account.email)
        logger.info("Login successful", account_id=account.id)
        return LoginResult(account=account, token=token, expires_in=jwt_service.get_expires_in())

    async def get_profile(self, account_id: str) -> Account:
        account = await self.store.accounts.get_by_id(account_id)
        if account is None:
            raise NotFound("User not found")
        return account

    async def search(
        self, caller_id: str, query: str, workspace_id: str | None = None
    ) -> list[Account]:
        """Find users whose name or email contains ``query``.

        With ``workspace_id`` only that workspace's members are searched and
        the caller must belong to it. Otherwise active accounts are searched,
        at most ``SEARCH_LIMIT`` of them.

        Raises:
            NotFound: The workspace does not exist.
            Unauthorized: The caller is not a member of the workspace.
        """
        if workspace_id is None:
            return await self.store.accounts.search(query, SEARCH_LIMIT)

        workspace = await self.store.workspaces.get_by_id(workspace_id)
        if workspace is None:
            raise NotFound("Workspace not found")
        if not workspace.has_member(caller_id):
            raise Unauthorized("Access denied")

        matches = []
        for member in workspace.members:
            account = await self.store.accounts.get_by_id(member.user_id)
            if account is not None and account.matches(query):
                matches.append(account)
        return matches

    async def update_profile(self, account_id: str, update: AccountProfileUpdate) -> Account:
        account = await self.get_profile(account_id)
        update.apply(account)
        await self.store.accounts.update(account)
        await self.store.commit()
        logger.info("Profile updated", account_id=account_id)
        return account

    async def change_password(self, account_id: str, current_password: str, new_password: str) -> None:
        """Replace the password after re-checking the current one.

        Raises:
            InvalidCredentials: The current password is wrong.
            ValidationFailed: The new password does not meet the policy.
        """
        account = await self.get_profile(account_id)
        if not verify_password(current_password, account.password_hash):
            raise InvalidCredentials("Current password is incorrect")
        enforce_password_policy(new_password)

        account.password_hash = hash_password(new_password)
        await self.store.accounts.update(account)
        await self.store.commit()
        logger.info("Password changed", account_id=account_id)
