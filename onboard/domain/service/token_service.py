"""Token domain service."""

import logfire

from onboard.config import ActivationSettings, AuthSettings
from onboard.domain.model import AuthenticatedIdentity, InvitedUser
from onboard.domain.value import ActivationToken
from onboard.util.jwt import (
    ActivationTokenPayload,
    JWTError,
    SessionTokenPayload,
    create_activation_token,
    create_session_token,
    verify_activation_token,
    verify_session_token,
)

from .base import Service


class TokenService(Service):
    """Domain service for activation and session token operations."""

    def __init__(
        self, activation_settings: ActivationSettings, auth_settings: AuthSettings
    ) -> None:
        """Initialize token service.

        Args:
            activation_settings: Activation token settings
            auth_settings: Session token settings
        """
        self.activation_settings = activation_settings
        self.auth_settings = auth_settings

    def create_activation_token(self, user: InvitedUser) -> ActivationToken:
        """Create activation token for an invited user.

        Args:
            user: Newly created user

        Returns:
            Signed activation token
        """
        with logfire.span("token_service.create_activation_token", user_id=user.user_id):
            token = create_activation_token(
                user.user_id, user.email, self.activation_settings
            )
            logfire.info("Activation token created", user_id=user.user_id)
            return ActivationToken(root=token)

    def verify_activation_token(self, token: ActivationToken) -> ActivationTokenPayload:
        """Verify activation token and extract payload.

        Raises:
            TokenInvalidError: If token is invalid or expired
        """
        with logfire.span(
            "token_service.verify_activation_token", token=token.preview()
        ):
            try:
                payload = verify_activation_token(token.root, self.activation_settings)
            except JWTError as e:
                logfire.warn("Activation token rejected", error=str(e))
                raise
            logfire.info("Activation token verified", user_id=payload.user_id)
            return payload

    def create_session_token(self, identity: AuthenticatedIdentity) -> str:
        """Create session token carrying the identity's capabilities."""
        with logfire.span(
            "token_service.create_session_token", user_id=identity.user_id
        ):
            capabilities = sorted(c.value for c in identity.capabilities)
            token = create_session_token(
                identity.user_id, identity.email, capabilities, self.auth_settings
            )
            logfire.info(
                "Session token created",
                user_id=identity.user_id,
                capabilities=capabilities,
            )
            return token

    def verify_session_token(self, token: str) -> SessionTokenPayload:
        """Verify session token.

        Raises:
            TokenInvalidError: If token is invalid or expired
        """
        return verify_session_token(token, self.auth_settings)

    def get_session(self, token: str | None) -> SessionTokenPayload | None:
        """Decode a session token without raising.

        Returns:
            Payload if token is present and valid, None otherwise
        """
        if not token:
            return None

        try:
            return self.verify_session_token(token)
        except JWTError as e:
            logfire.debug(
                "Session verification failed, treating as unauthenticated",
                error=str(e),
            )
            return None
