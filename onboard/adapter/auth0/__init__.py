"""Auth0 identity provider adapters."""

from onboard.adapter.auth0.login import (
    Auth0LoginClient,
    MockAuth0LoginClient,
    RealAuth0LoginClient,
)
from onboard.adapter.auth0.management import (
    ManagementClient,
    MockManagementClient,
    RealManagementClient,
)

__all__ = [
    "Auth0LoginClient",
    "ManagementClient",
    "MockAuth0LoginClient",
    "MockManagementClient",
    "RealAuth0LoginClient",
    "RealManagementClient",
]
