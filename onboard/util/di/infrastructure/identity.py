"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from onboard.adapter.auth0.management import RealManagementClient
from onboard.config import ProviderSettings
from onboard.domain.service import IdentityProviderClient
from onboard.util.di.base import ProviderBase


class IdentityProvider(ProviderBase):
    """Identity provider (Management API) component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production identity provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_client(self, settings: ProviderSettings) -> IdentityProviderClient:
        """Provide Auth0 Management API client.

        APP scope: one client per process, so its cached access token is
        reused across requests.

        Raises:
            ValueError: If Management API credentials are not configured
        """
        if not settings.client_id or not settings.client_secret:
            raise ValueError("Management API client credentials must be configured")

        return RealManagementClient(settings=settings)
