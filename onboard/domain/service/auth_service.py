"""Authentication domain service."""

import logfire

from onboard.domain.model import AuthenticatedIdentity

from .base import Service


class LoginClient:
    """Interactive login interface of the identity provider."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate authorization code flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str) -> AuthenticatedIdentity:
        """Complete authorization code flow.

        Args:
            code: Authorization code from the login callback

        Returns:
            Authenticated identity, without capabilities
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for provider login."""

    def __init__(self, login_client: LoginClient) -> None:
        """Initialize auth service.

        Args:
            login_client: Provider login client
        """
        self.login_client = login_client

    async def initiate_login(self, state: str) -> str:
        """Initiate login flow.

        Returns:
            Authorization URL to redirect user to
        """
        with logfire.span("auth_service.initiate_login"):
            return await self.login_client.initiate_authorization(state)

    async def complete_login(self, code: str) -> AuthenticatedIdentity:
        """Complete login flow.

        Raises:
            ProviderError: If the code exchange fails
        """
        with logfire.span("auth_service.complete_login"):
            identity = await self.login_client.complete_authorization(code)
            logfire.info("Login completed", user_id=identity.user_id)
            return identity
