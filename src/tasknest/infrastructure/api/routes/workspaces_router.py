"""Workspace API routes.

Workspaces are created automatically on email verification; these routes
let members create more, read and update them, and manage members directly.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from tasknest.domain.services import WorkspaceService
from tasknest.infrastructure.api.dependencies import AuthenticatedUser, get_workspace_service
from tasknest.infrastructure.api.schemas import (
    ApiResponse,
    MemberAddRequest,
    MemberResponse,
    WorkspaceCreateRequest,
    WorkspaceResponse,
    WorkspaceUpdateRequest,
)

router = APIRouter()

Workspaces = Annotated[WorkspaceService, Depends(get_workspace_service)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[WorkspaceResponse],
    response_model_exclude_none=True,
)
async def create_workspace(
    request: WorkspaceCreateRequest,
    current_user: AuthenticatedUser,
    service: Workspaces,
) -> ApiResponse[WorkspaceResponse]:
    workspace = await service.create_workspace(
        owner_id=current_user.user_id,
        name=request.name,
        description=request.description,
        color=request.color,
        icon=request.icon,
    )
    return ApiResponse[WorkspaceResponse](
        message="Workspace created successfully",
        data=WorkspaceResponse.from_entity(workspace),
    )


@router.get("", response_model=ApiResponse[list[WorkspaceResponse]], response_model_exclude_none=True)
async def list_workspaces(
    current_user: AuthenticatedUser,
    service: Workspaces,
) -> ApiResponse[list[WorkspaceResponse]]:
    workspaces = await service.list_for_account(current_user.user_id)
    return ApiResponse[list[WorkspaceResponse]](
        data=[WorkspaceResponse.from_entity(w) for w in workspaces]
    )


@router.get(
    "/{workspace_id}",
    response_model=ApiResponse[WorkspaceResponse],
    response_model_exclude_none=True,
)
async def get_workspace(
    workspace_id: str,
    current_user: AuthenticatedUser,
    service: Workspaces,
) -> ApiResponse[WorkspaceResponse]:
    workspace = await service.get(workspace_id, current_user.user_id)
    return ApiResponse[WorkspaceResponse](data=WorkspaceResponse.from_entity(workspace))


@router.patch(
    "/{workspace_id}",
    response_model=ApiResponse[WorkspaceResponse],
    response_model_exclude_none=True,
)
async def update_workspace(
    workspace_id: str,
    request: WorkspaceUpdateRequest,
    current_user: AuthenticatedUser,
    service: Workspaces,
) -> ApiResponse[WorkspaceResponse]:
    """Update name, description, color or icon (admins only)."""
    workspace = await service.update(workspace_id, current_user.user_id, request.to_update())
    return ApiResponse[WorkspaceResponse](
        message="Workspace updated successfully",
        data=WorkspaceResponse.from_entity(workspace),
    )


@router.delete(
    "/{workspace_id}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def delete_workspace(
    workspace_id: str,
    current_user: AuthenticatedUser,
    service: Workspaces,
) -> ApiResponse[None]:
    """Delete the workspace with its memberships and invitations (owner only)."""
    await service.delete(workspace_id, current_user.user_id)
    return ApiResponse[None](message="Workspace deleted successfully")


@router.post(
    "/{workspace_id}/members",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[MemberResponse],
    response_model_exclude_none=True,
)
async def add_member(
    workspace_id: str,
    request: MemberAddRequest,
    current_user: AuthenticatedUser,
    service: Workspaces,
) -> ApiResponse[MemberResponse]:
    """Add an existing user to the workspace without an invitation (admins only)."""
    member = await service.add_member_by_email(
        workspace_id, current_user.user_id, request.email, request.role
    )
    return ApiResponse[MemberResponse](
        message="Member added successfully",
        data=MemberResponse.model_validate(member),
    )


@router.delete(
    "/{workspace_id}/members/{user_id}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def remove_member(
    workspace_id: str,
    user_id: str,
    current_user: AuthenticatedUser,
    service: Workspaces,
) -> ApiResponse[None]:
    """Remove a member. Admins may remove others; any member may leave."""
    await service.remove_member(workspace_id, current_user.user_id, user_id)
    return ApiResponse[None](message="Member removed successfully")
