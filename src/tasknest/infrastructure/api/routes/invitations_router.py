"""Invitation API routes.

Provides endpoints for sending, inspecting, accepting, declining and
listing workspace invitations.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, status

from tasknest.core.logging import get_logger
from tasknest.domain.exceptions import Unauthorized
from tasknest.domain.services import InvitationWorkflow
from tasknest.infrastructure.api.dependencies import (
    AuthenticatedUser,
    get_invitation_workflow,
)
from tasknest.infrastructure.api.schemas import (
    ApiResponse,
    InvitationAcceptedData,
    InvitationAcceptRequest,
    InvitationDetailsData,
    InvitationListData,
    InvitationResponse,
    InvitationSendRequest,
    InvitationSentData,
)

logger = get_logger(__name__)

router = APIRouter()

Workflow = Annotated[InvitationWorkflow, Depends(get_invitation_workflow)]


@router.post(
    "/send",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[InvitationSentData],
    response_model_exclude_none=True,
    responses={
        403: {"description": "Caller is not an admin or manager of the workspace"},
        404: {"description": "Workspace not found"},
        409: {"description": "Pending invitation already exists or user is already a member"},
        502: {"description": "Invitation email could not be sent"},
    },
)
async def send_invitation(
    request: InvitationSendRequest,
    current_user: AuthenticatedUser,
    workflow: Workflow,
) -> ApiResponse[InvitationSentData]:
    """Invite someone to a workspace by email.

    Flow:
    1. Check the caller is an admin or manager of the workspace
    2. Reject self-invites and existing members
    3. Reject if a pending invitation already exists
    4. Create the invitation with a secure token
    5. Send the invitation email; discard the invitation if sending fails
    """
    invitation = await workflow.send(
        inviter_id=current_user.user_id,
        email=request.email,
        workspace_id=request.workspace_id,
        role=request.role,
        personal_message=request.personal_message,
    )
    logger.info(
        "Invitation sent",
        invitation_id=invitation.id,
        workspace_id=invitation.workspace_id,
        invited_by=current_user.user_id,
    )
    return ApiResponse[InvitationSentData](
        message="Invitation sent successfully",
        data=InvitationSentData(invitation=InvitationResponse.from_entity(invitation)),
    )


@router.get(
    "/workspace/{workspace_id}",
    response_model=ApiResponse[InvitationListData],
    response_model_exclude_none=True,
)
async def list_workspace_invitations(
    workspace_id: str,
    current_user: AuthenticatedUser,
    workflow: Workflow,
) -> ApiResponse[InvitationListData]:
    """List a workspace's invitations with per-status counts (admins and managers)."""
    result = await workflow.list_for_workspace(workspace_id, current_user.user_id)
    return ApiResponse[InvitationListData](
        data=InvitationListData(
            invitations=[InvitationResponse.from_entity(i) for i in result.invitations],
            stats=result.stats,
        )
    )


@router.get(
    "/{token}",
    response_model=ApiResponse[InvitationDetailsData],
    response_model_exclude_none=True,
    responses={404: {"description": "Invalid or expired invitation"}},
)
async def get_invitation_details(token: str, workflow: Workflow) -> ApiResponse[InvitationDetailsData]:
    """Public details of a pending invitation.

    Only the workspace, inviter name, role and expiry are returned.
    """
    view = await workflow.details(token)
    return ApiResponse[InvitationDetailsData](data=InvitationDetailsData.from_view(view))


@router.post(
    "/accept/{token}",
    response_model=ApiResponse[InvitationAcceptedData],
    response_model_exclude_none=True,
    responses={
        400: {"description": "Invitation expired or no longer pending"},
        403: {"description": "Invitation is for a different email"},
        404: {"description": "Invalid or expired invitation"},
    },
)
async def accept_invitation(
    token: str,
    current_user: AuthenticatedUser,
    workflow: Workflow,
    request: Annotated[InvitationAcceptRequest | None, Body()] = None,
) -> ApiResponse[InvitationAcceptedData]:
    """Accept an invitation and join its workspace.

    Flow:
    1. Look up the invitation by token
    2. Check the invitation email matches the caller's account
    3. Mark the invitation accepted
    4. Add the caller to the workspace member list and link the workspace
    5. Commit all of it together
    """
    if request is not None and request.user_id and request.user_id != current_user.user_id:
        raise Unauthorized("You can only accept invitations for yourself")

    accepted = await workflow.accept(token, current_user.user_id)
    logger.info(
        "Invitation accepted",
        invitation_id=accepted.invitation.id,
        user_id=current_user.user_id,
    )
    return ApiResponse[InvitationAcceptedData](
        message="Invitation accepted successfully",
        data=InvitationAcceptedData.build(accepted.workspace, accepted.invitation.role),
    )


@router.post(
    "/decline/{token}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def decline_invitation(
    token: str,
    current_user: AuthenticatedUser,
    workflow: Workflow,
) -> ApiResponse[None]:
    """Decline an invitation addressed to the caller."""
    invitation = await workflow.decline(token, current_user.user_id)
    logger.info("Invitation declined", invitation_id=invitation.id, user_id=current_user.user_id)
    return ApiResponse[None](message="Invitation declined successfully")
