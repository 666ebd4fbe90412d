"""Routes for the signed-in user's own account and for looking up other users."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tasknest.domain.services import AccountService
from tasknest.infrastructure.api.dependencies import AuthenticatedUser, get_account_service
from tasknest.infrastructure.api.schemas import (
    ApiResponse,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    UserResponse,
    UserSummaryResponse,
)

router = APIRouter()

Accounts = Annotated[AccountService, Depends(get_account_service)]


@router.get("/me", response_model=ApiResponse[UserResponse], response_model_exclude_none=True)
async def get_me(current_user: AuthenticatedUser, service: Accounts) -> ApiResponse[UserResponse]:
    account = await service.get_profile(current_user.user_id)
    return ApiResponse[UserResponse](data=UserResponse.from_entity(account))


@router.patch("/me", response_model=ApiResponse[UserResponse], response_model_exclude_none=True)
async def update_me(
    request: ProfileUpdateRequest,
    current_user: AuthenticatedUser,
    service: Accounts,
) -> ApiResponse[UserResponse]:
    account = await service.update_profile(current_user.user_id, request.to_update())
    return ApiResponse[UserResponse](
        message="Profile updated successfully",
        data=UserResponse.from_entity(account),
    )


@router.put("/me/password", response_model=ApiResponse[None], response_model_exclude_none=True)
async def change_password(
    request: PasswordChangeRequest,
    current_user: AuthenticatedUser,
    service: Accounts,
) -> ApiResponse[None]:
    await service.change_password(
        current_user.user_id, request.current_password, request.new_password
    )
    return ApiResponse[None](message="Password changed successfully")


@router.get(
    "/search/{query}",
    response_model=ApiResponse[list[UserSummaryResponse]],
    response_model_exclude_none=True,
)
async def search_users(
    query: str,
    current_user: AuthenticatedUser,
    service: Accounts,
    workspace_id: Annotated[str | None, Query(alias="workspaceId")] = None,
) -> ApiResponse[list[UserSummaryResponse]]:
    accounts = await service.search(current_user.user_id, query, workspace_id)
    return ApiResponse[list[UserSummaryResponse]](
        data=[UserSummaryResponse.from_entity(account) for account in accounts]
    )


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserSummaryResponse],
    response_model_exclude_none=True,
)
async def get_user(
    user_id: str, current_user: AuthenticatedUser, service: Accounts
) -> ApiResponse[UserSummaryResponse]:
    account = await service.get_profile(user_id)
    return ApiResponse[UserSummaryResponse](data=UserSummaryResponse.from_entity(account))
