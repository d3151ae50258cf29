"""User domain service."""

import asyncio
import secrets

import logfire

from onboard.adapter.error import ProviderError
from onboard.config import ActivationSettings
from onboard.domain.error import AlreadyActiveError, UserNotFoundError
from onboard.domain.model import InvitedUser, Invitee, UserPage
from onboard.domain.value import UserId

from .base import Service
from .identity_provider import IdentityProviderClient

ACTIVATION_PENDING = "activation_pending"


def generate_placeholder_password() -> str:
    """Random password set at creation and never shown to anyone.

    Mixes character classes so it satisfies provider password policies.
    """
    return (
        secrets.token_urlsafe(24)
        + secrets.choice("ABCDEFGHJKLMNPQRSTUVWXYZ")
        + secrets.choice("abcdefghijkmnopqrstuvwxyz")
        + secrets.choice("23456789")
        + secrets.choice("!@#$%^&*")
    )


class UserService(Service):
    """Domain service for invited user operations.

    Wraps the identity provider so that the activation_pending state machine
    is enforced in one place.
    """

    def __init__(
        self,
        identity_client: IdentityProviderClient,
        activation_settings: ActivationSettings,
    ) -> None:
        """Initialize user service.

        Args:
            identity_client: Identity provider management client
            activation_settings: Activation settings
        """
        self.identity_client = identity_client
        self.activation_settings = activation_settings

    async def create_pending_user(self, invitee: Invitee) -> InvitedUser:
        """Create a user record in pending state.

        email_verified is set up front: the verification ticket sent later is
        only used as a redirect that carries the activation token.

        Args:
            invitee: Person to invite

        Returns:
            Created user

        Raises:
            ProviderError: If the provider rejects the user (e.g. duplicate email)
        """
        with logfire.span("user_service.create_pending_user", email=invitee.email):
            user = await self.identity_client.create_user(
                email=invitee.email,
                password=generate_placeholder_password(),
                given_name=invitee.given_name,
                family_name=invitee.family_name,
                email_verified=True,
                app_metadata={ACTIVATION_PENDING: True},
            )
            logfire.info(
                "Pending user created", user_id=user.user_id, email=invitee.email
            )
            return user

    async def get_by_id(self, user_id: UserId) -> InvitedUser:
        """Get user by ID.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        with logfire.span("user_service.get_by_id", user_id=user_id):
            user = await self.identity_client.get_user(user_id)
            if user is None:
                logfire.warn("User not found", user_id=user_id)
                raise UserNotFoundError(user_id)
            return user

    async def find_exact_match(self, user_id: UserId, email: str) -> InvitedUser:
        """Get the user an activation token was issued for.

        The record must exist and still carry the email the token was
        issued to.

        Raises:
            UserNotFoundError: If there is no exact match
        """
        with logfire.span("user_service.find_exact_match", user_id=user_id):
            user = await self.identity_client.get_user(user_id)
            if user is None or user.email.lower() != email.lower():
                logfire.warn(
                    "No exact user match for token",
                    user_id=user_id,
                    found=user is not None,
                )
                raise UserNotFoundError(user_id)
            return user

    async def list_users(
        self, page: int = 0, per_page: int = 50, pending_only: bool = False
    ) -> UserPage:
        """List users of the configured connection."""
        with logfire.span(
            "user_service.list_users",
            page=page,
            per_page=per_page,
            pending_only=pending_only,
        ):
            listing = await self.identity_client.list_users(
                page=page, per_page=per_page, pending_only=pending_only
            )
            logfire.info("Users listed", count=len(listing.users), total=listing.total)
            return listing

    async def delete_user(self, user_id: UserId) -> None:
        """Delete a user.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        with logfire.span("user_service.delete_user", user_id=user_id):
            await self.get_by_id(user_id)
            await self.identity_client.delete_user(user_id)
            logfire.info("User deleted", user_id=user_id)

    async def complete_activation(
        self, user: InvitedUser, password: str
    ) -> InvitedUser:
        """Set the user's password and leave the pending state.

        The provider does not accept a password change together with other
        attributes, so this is two writes: the password first, then the
        activation_pending flag. The flag clear is retried with backoff on
        transient errors; if it still fails the user has a working password
        but stays pending until an operator clears the flag.

        Args:
            user: Freshly fetched user record
            password: New password chosen by the user

        Returns:
            Updated user

        Raises:
            AlreadyActiveError: If the user already completed activation
            ProviderError: If either write fails
        """
        with logfire.span("user_service.complete_activation", user_id=user.user_id):
            if user.activation_pending is False:
                logfire.warn("Activation refused, already active", user_id=user.user_id)
                raise AlreadyActiveError(user.user_id)

            await self.identity_client.update_password(user.user_id, password)
            logfire.info("Password updated", user_id=user.user_id)

            attempts = max(1, self.activation_settings.flag_clear_attempts)
            backoff = self.activation_settings.flag_clear_backoff_seconds
            last_error: ProviderError | None = None
            for attempt in range(1, attempts + 1):
                if attempt > 1:
                    await asyncio.sleep(backoff * 2 ** (attempt - 2))
                try:
                    updated = await self.identity_client.update_app_metadata(
                        user.user_id, {ACTIVATION_PENDING: False}
                    )
                except ProviderError as e:
                    last_error = e
                    logfire.warn(
                        "Clearing activation_pending failed",
                        user_id=user.user_id,
                        attempt=attempt,
                        status_code=e.status_code,
                        error=str(e),
                    )
                    if not e.is_transient:
                        break
                    continue
                logfire.info("User activated", user_id=user.user_id, attempt=attempt)
                return updated

            logfire.error(
                "Password set but activation_pending could not be cleared",
                user_id=user.user_id,
                attempts=attempt,
                inconsistent=True,
            )
            raise ProviderError(
                f"Could not clear activation_pending for {user.user_id}: {last_error}",
                status_code=last_error.status_code if last_error else None,
            )
