"""Get invited users use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from onboard.domain.service import UserService


class InvitedUserItem(BaseModel):
    """Invited user in response."""

    user_id: str
    email: str
    given_name: str | None
    family_name: str | None
    activation_pending: bool | None
    created_at: datetime | None
    last_login: datetime | None


class GetInvitesRequest(BaseModel):
    """Get invited users request."""

    page: int = Field(default=0, ge=0)
    per_page: int = Field(default=50, ge=1, le=100)
    pending_only: bool = False


class GetInvitesResponse(BaseModel):
    """Get invited users response."""

    users: list[InvitedUserItem]
    # Matching users across all pages
    total: int


class GetInvitesUseCase:
    """Use case for listing users of the invitation connection."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get invites use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetInvitesRequest) -> GetInvitesResponse:
        """Execute get invites flow.

        Args:
            request: Paging and filter options

        Returns:
            Listed users
        """
        listing = await self.user_service.list_users(
            page=request.page,
            per_page=request.per_page,
            pending_only=request.pending_only,
        )

        items = [
            InvitedUserItem(
                user_id=user.user_id,
                email=user.email,
                given_name=user.given_name,
                family_name=user.family_name,
                activation_pending=user.activation_pending,
                created_at=user.created_at,
                last_login=user.last_login,
            )
            for user in listing.users
        ]
        return GetInvitesResponse(users=items, total=listing.total)
