"""Authenticated identity returned by a completed login."""

from onboard.domain.model.common import DomainModel
from onboard.domain.value import Capability, UserId


class AuthenticatedIdentity(DomainModel):
    """Identity established by the provider's login callback.

    Capabilities are empty until the session gate has inspected the
    identity's activation state.
    """

    user_id: UserId
    email: str | None = None
    name: str | None = None
    activation_pending: bool | None = None
    capabilities: frozenset[Capability] = frozenset()

    def has(self, capability: Capability) -> bool:
        """Check whether a capability was granted."""
        return capability in self.capabilities
