"""Invitation domain service."""

from urllib.parse import urlencode

import logfire

from onboard.config import ActivationSettings
from onboard.domain.model import InvitedUser
from onboard.domain.value import ActivationToken, VerificationTicket

from .base import Service
from .identity_provider import IdentityProviderClient

TOKEN_QUERY_PARAM = "userToken"


class InvitationService(Service):
    """Domain service issuing the provider ticket behind an activation link."""

    def __init__(
        self,
        identity_client: IdentityProviderClient,
        activation_settings: ActivationSettings,
        activation_url: str,
    ) -> None:
        """Initialize invitation service.

        Args:
            identity_client: Identity provider management client
            activation_settings: Activation settings
            activation_url: Public URL of the activation endpoint
        """
        self.identity_client = identity_client
        self.activation_settings = activation_settings
        self.activation_url = activation_url

    def build_result_url(self, token: ActivationToken) -> str:
        """Activation endpoint URL with the token attached."""
        return f"{self.activation_url}?{urlencode({TOKEN_QUERY_PARAM: token.root})}"

    async def issue_ticket(
        self, user: InvitedUser, token: ActivationToken
    ) -> VerificationTicket:
        """Request a verification ticket that lands on the activation endpoint.

        Raises:
            ProviderError: If the provider refuses the ticket
        """
        with logfire.span("invitation_service.issue_ticket", user_id=user.user_id):
            ticket = await self.identity_client.create_email_verification_ticket(
                user.user_id,
                result_url=self.build_result_url(token),
                ttl_seconds=self.activation_settings.ticket_ttl_seconds,
            )
            logfire.info("Verification ticket issued", user_id=user.user_id)
            return ticket
