"""Administrative user management routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from onboard.adapter.error import ProviderError
from onboard.application.usecase.invite import (
    CreateInvitesUseCase,
    DeleteInviteUseCase,
    GetInvitesUseCase,
)
from onboard.application.usecase.invite.create_invites import (
    CreateInvitesRequest,
    CreateInvitesResponse,
)
from onboard.application.usecase.invite.delete_invite import DeleteInviteRequest
from onboard.application.usecase.invite.get_invites import (
    GetInvitesRequest,
    GetInvitesResponse,
)
from onboard.domain.error import NotFoundError, ValidationError
from onboard.interface.api.dependencies import require_admin_key

router = APIRouter(
    prefix="/admin/users",
    tags=["admin"],
    route_class=DishkaRoute,
    dependencies=[Depends(require_admin_key)],
)


@router.get("", response_model=GetInvitesResponse)
async def list_users(
    get_invites_use_case: FromDishka[GetInvitesUseCase],
    page: int = Query(default=0, ge=0),
    per_page: int = Query(default=50, ge=1, le=100),
    pending_only: bool = Query(default=False),
) -> GetInvitesResponse:
    """List users of the invitation connection.

    Args:
        get_invites_use_case: Get invites use case from DI
        page: Zero-based page index
        per_page: Page size
        pending_only: Only users that have not activated yet

    Raises:
        HTTPException: 502 if the identity provider fails
    """
    try:
        return await get_invites_use_case.execute(
            GetInvitesRequest(page=page, per_page=per_page, pending_only=pending_only)
        )
    except ProviderError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post(
    "/invite",
    response_model=CreateInvitesResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_users(
    request: CreateInvitesRequest,
    create_invites_use_case: FromDishka[CreateInvitesUseCase],
) -> CreateInvitesResponse:
    """Invite a batch of people.

    Every entry with an email gets a pending account and an activation
    email. Entries that fail are listed in ``failed`` and do not stop the
    rest of the batch.

    Example:
        POST /admin/users/invite
        {
            "invitees": [
                {"given_name": "Ada", "family_name": "Lovelace", "email": "ada@example.com"}
            ]
        }

    Raises:
        HTTPException: 422 if the batch is too large
    """
    try:
        return await create_invites_use_case.execute(request)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors
        )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    delete_invite_use_case: FromDishka[DeleteInviteUseCase],
) -> Response:
    """Delete a user from the identity provider.

    Raises:
        HTTPException: 404 if the user does not exist, 502 on provider errors
    """
    try:
        await delete_invite_use_case.execute(DeleteInviteRequest(user_id=user_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ProviderError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
