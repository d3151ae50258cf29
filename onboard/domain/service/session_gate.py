"""Session gate domain service."""

import logfire

from onboard.domain.error import NotFoundError
from onboard.domain.model import AuthenticatedIdentity, InvitedUser
from onboard.domain.value import Capability

from .base import Service
from .user_service import UserService


def capabilities_for(user: InvitedUser | None) -> frozenset[Capability]:
    """Capabilities an identity is entitled to.

    Member requires activation_pending to be present and False; a missing
    record or a missing flag grants nothing.
    """
    if user is not None and user.activation_pending is False:
        return frozenset({Capability.MEMBER})
    return frozenset()


class SessionGateService(Service):
    """Post-login hook deciding which capabilities a session carries."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize session gate.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def admit(self, identity: AuthenticatedIdentity) -> AuthenticatedIdentity:
        """Augment a freshly authenticated identity with its capabilities.

        The activation state is re-read from the identity provider, so claims
        presented by the login callback cannot grant Member by themselves.

        Args:
            identity: Identity from the login callback

        Returns:
            Identity with activation state and capabilities filled in
        """
        with logfire.span("session_gate.admit", user_id=identity.user_id):
            try:
                user = await self.user_service.get_by_id(identity.user_id)
            except NotFoundError:
                user = None

            capabilities = capabilities_for(user)
            admitted = identity.model_copy(
                update={
                    "email": identity.email or (user.email if user else None),
                    "activation_pending": user.activation_pending if user else None,
                    "capabilities": capabilities,
                }
            )
            logfire.info(
                "Session gate evaluated",
                user_id=identity.user_id,
                activation_pending=admitted.activation_pending,
                capabilities=sorted(c.value for c in capabilities),
            )
            return admitted
