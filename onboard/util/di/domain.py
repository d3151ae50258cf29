"""Domain layer DI providers."""

import jinja2
from dishka import Scope, provide

from onboard.config import (
    ActivationSettings,
    AuthSettings,
    EmailSettings,
    Settings,
)
from onboard.domain.service import (
    AuthService,
    EmailSender,
    EmailService,
    IdentityProviderClient,
    InvitationService,
    LoginClient,
    SessionGateService,
    TokenService,
    UserService,
)
from onboard.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped; the clients they wrap are APP-scoped
    so provider access tokens are shared across requests.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, login_client: LoginClient) -> AuthService:
        """Provide authentication domain service."""
        return AuthService(login_client=login_client)

    @provide
    def get_token_service(
        self, activation_settings: ActivationSettings, auth_settings: AuthSettings
    ) -> TokenService:
        """Provide token domain service."""
        return TokenService(
            activation_settings=activation_settings, auth_settings=auth_settings
        )

    @provide
    def get_user_service(
        self,
        identity_client: IdentityProviderClient,
        activation_settings: ActivationSettings,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            identity_client=identity_client, activation_settings=activation_settings
        )

    @provide
    def get_invitation_service(
        self,
        identity_client: IdentityProviderClient,
        settings: Settings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            identity_client=identity_client,
            activation_settings=settings.activation,
            activation_url=settings.activation_url,
        )

    @provide
    def get_email_service(
        self,
        email_sender: EmailSender,
        templates: jinja2.Environment,
        email_settings: EmailSettings,
        activation_settings: ActivationSettings,
    ) -> EmailService:
        """Provide email domain service."""
        return EmailService(
            email_sender=email_sender,
            templates=templates,
            email_settings=email_settings,
            activation_settings=activation_settings,
        )

    @provide
    def get_session_gate(self, user_service: UserService) -> SessionGateService:
        """Provide session gate domain service."""
        return SessionGateService(user_service=user_service)
