"""Delete invited user use case."""

from pydantic import BaseModel

from onboard.domain.service import UserService
from onboard.domain.value import UserId


class DeleteInviteRequest(BaseModel):
    """Delete invited user request."""

    user_id: str


class DeleteInviteUseCase:
    """Use case for administratively deleting an invited user."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize delete invite use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: DeleteInviteRequest) -> None:
        """Delete the user.

        Raises:
            UserNotFoundError: If the user does not exist
            ProviderError: If the provider rejects the deletion
        """
        await self.user_service.delete_user(UserId(request.user_id))
