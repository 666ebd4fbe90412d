"""Pydantic schemas for user profiles and lookups."""

from typing import Literal

from pydantic import Field

from tasknest.domain.entities import Account, AccountProfileUpdate, AccountStatus
from tasknest.infrastructure.api.schemas.common_schemas import ApiModel, StrictApiModel


class ProfileUpdateRequest(StrictApiModel):
    """Partial profile update; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=100)
    avatar: str | None = Field(None, max_length=500)
    theme: Literal["light", "dark"] | None = None
    timezone: str | None = Field(None, min_length=1, max_length=64)

    def to_update(self) -> AccountProfileUpdate:
        return AccountProfileUpdate(
            name=self.name,
            avatar=self.avatar,
            theme=self.theme,
            timezone=self.timezone,
        )


class PasswordChangeRequest(ApiModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class UserSummaryResponse(ApiModel):
    """Public view of another user, as returned by lookups and search."""

    id: str
    name: str
    email: str
    avatar: str
    status: AccountStatus

    @classmethod
    def from_entity(cls, account: Account) -> "UserSummaryResponse":
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            avatar=account.avatar,
            status=account.status,
        )
