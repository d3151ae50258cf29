"""Auth0 interactive login client.

Authorization code flow against the tenant's authorization server. The
state parameter is verified by the callback route before the code is
exchanged here.
"""

from urllib.parse import urlencode

import httpx
import logfire

from onboard.adapter.auth0.reply import reading_reply
from onboard.adapter.error import ProviderError
from onboard.config import AuthSettings, ProviderSettings
from onboard.domain.model import AuthenticatedIdentity
from onboard.domain.service.auth_service import LoginClient
from onboard.domain.value import UserId


class Auth0LoginClient(LoginClient):
    """Base class for Auth0 login clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealAuth0LoginClient(Auth0LoginClient):
    """Auth0 authorization code flow client."""

    def __init__(
        self, provider_settings: ProviderSettings, auth_settings: AuthSettings
    ) -> None:
        """Initialize login client.

        Args:
            provider_settings: Identity provider settings
            auth_settings: Session settings (for the callback URL)
        """
        self.settings = provider_settings
        self.redirect_uri = auth_settings.callback_url

        self.authorize_url = f"{provider_settings.base_url}/authorize"
        self.token_url = f"{provider_settings.base_url}/oauth/token"
        self.user_info_url = f"{provider_settings.base_url}/userinfo"

    async def initiate_authorization(self, state: str) -> str:
        """Build the authorization URL."""
        params = {
            "response_type": "code",
            "client_id": self.settings.login_client_id,
            "redirect_uri": self.redirect_uri,
            "scope": "openid profile email",
            "state": state,
        }
        logfire.info("Auth0 authorization initiated", redirect_uri=self.redirect_uri)
        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str) -> AuthenticatedIdentity:
        """Exchange the code and read the user profile.

        Raises:
            ProviderError: If the exchange or profile request fails
        """
        access_token = await self._exchange_code_for_token(code)
        identity = await self._get_user_info(access_token)

        logfire.info("Auth0 login completed", user_id=identity.user_id)
        return identity

    async def _exchange_code_for_token(self, code: str) -> str:
        data = {
            "grant_type": "authorization_code",
            "client_id": self.settings.login_client_id,
            "client_secret": self.settings.login_client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=self.settings.timeout_seconds,
                )
        except httpx.HTTPError as e:
            logfire.error("Auth0 token exchange HTTP error", error=str(e))
            raise ProviderError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Auth0 token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(
                f"Token exchange failed: {response.status_code}",
                status_code=response.status_code,
            )

        with reading_reply(response, "token exchange"):
            return str(response.json()["access_token"])

    async def _get_user_info(self, access_token: str) -> AuthenticatedIdentity:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=self.settings.timeout_seconds,
                )
        except httpx.HTTPError as e:
            logfire.error("Auth0 userinfo HTTP error", error=str(e))
            raise ProviderError(f"HTTP error fetching user info: {e}")

        if response.status_code != 200:
            logfire.error(
                "Auth0 userinfo request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(
                f"User info request failed: {response.status_code}",
                status_code=response.status_code,
            )

        with reading_reply(response, "userinfo"):
            user_info = response.json()
            return AuthenticatedIdentity(
                user_id=UserId(user_info["sub"]),
                email=user_info.get("email"),
                name=user_info.get("name"),
            )


class MockAuth0LoginClient(Auth0LoginClient):
    """Mock login client for testing.

    Authorization codes are the user IDs to log in as, so tests can log in
    as any user they created through the mock Management API.
    """

    def __init__(self) -> None:
        """Initialize mock client without real configuration."""
        pass

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://mock.auth0.test/authorize?{urlencode({'state': state})}"

    async def complete_authorization(self, code: str) -> AuthenticatedIdentity:
        """Treat the code as the user ID."""
        if code.startswith("invalid"):
            raise ProviderError("Token exchange failed: 403", status_code=403)
        return AuthenticatedIdentity(user_id=UserId(code))
