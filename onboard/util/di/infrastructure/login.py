"""Login infrastructure providers."""

from dishka import Scope, provide

from onboard.adapter.auth0.login import RealAuth0LoginClient
from onboard.config import AuthSettings, ProviderSettings
from onboard.domain.service import LoginClient
from onboard.util.di.base import ProviderBase


class LoginProvider(ProviderBase):
    """Interactive login component base."""

    __mock_component__ = "login"


class ProdLoginProvider(LoginProvider):
    """Production login provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_login_client(
        self, provider_settings: ProviderSettings, auth_settings: AuthSettings
    ) -> LoginClient:
        """Provide Auth0 login client.

        Raises:
            ValueError: If login client credentials are not configured
        """
        if not provider_settings.login_client_id:
            raise ValueError("Login client ID must be configured")
        if not provider_settings.login_client_secret:
            raise ValueError("Login client secret must be configured")

        return RealAuth0LoginClient(
            provider_settings=provider_settings, auth_settings=auth_settings
        )
