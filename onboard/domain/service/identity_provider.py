"""Identity provider port.

The identity provider owns the user store. Adapters implement this interface
on top of the provider's Management API.
"""

from typing import Any

from onboard.domain.model.user import InvitedUser, UserPage
from onboard.domain.value import UserId, VerificationTicket


class IdentityProviderClient:
    """Generic identity provider management interface.

    All methods raise ProviderError when the provider rejects the call or
    cannot be reached.
    """

    async def create_user(
        self,
        email: str,
        password: str,
        given_name: str,
        family_name: str,
        email_verified: bool,
        app_metadata: dict[str, Any],
    ) -> InvitedUser:
        """Create a user in the configured connection.

        Returns:
            The created user, with the provider-assigned user_id
        """
        raise NotImplementedError

    async def get_user(self, user_id: UserId) -> InvitedUser | None:
        """Fetch a user by ID.

        Returns:
            The user if found, None otherwise
        """
        raise NotImplementedError

    async def list_users(
        self, page: int = 0, per_page: int = 50, pending_only: bool = False
    ) -> UserPage:
        """List users of the configured connection.

        Filtering happens before paging, so pending_only pages are full and
        the total counts only users that have not activated.
        """
        raise NotImplementedError

    async def delete_user(self, user_id: UserId) -> None:
        """Delete a user by ID."""
        raise NotImplementedError

    async def update_password(self, user_id: UserId, password: str) -> None:
        """Overwrite a user's password."""
        raise NotImplementedError

    async def update_app_metadata(
        self, user_id: UserId, app_metadata: dict[str, Any]
    ) -> InvitedUser:
        """Merge attributes into a user's app_metadata.

        Returns:
            The updated user
        """
        raise NotImplementedError

    async def create_email_verification_ticket(
        self, user_id: UserId, result_url: str, ttl_seconds: int
    ) -> VerificationTicket:
        """Create an email verification ticket redirecting to result_url."""
        raise NotImplementedError
