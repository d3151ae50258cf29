"""Core DI providers (non-mockable)."""

import jinja2
from dishka import Scope, provide

from onboard.config import (
    ActivationSettings,
    AdminSettings,
    AuthSettings,
    EmailSettings,
    InvitationSettings,
    ProviderSettings,
    Settings,
)
from onboard.util.di.base import ProviderBase
from onboard.util.templates import create_environment


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_provider_settings(self, settings: Settings) -> ProviderSettings:
        """Provide identity provider settings."""
        return settings.provider

    @provide(scope=Scope.APP)
    def provide_activation_settings(self, settings: Settings) -> ActivationSettings:
        """Provide activation settings."""
        return settings.activation

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_email_settings(self, settings: Settings) -> EmailSettings:
        """Provide email settings."""
        return settings.email

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation settings."""
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_admin_settings(self, settings: Settings) -> AdminSettings:
        """Provide admin settings."""
        return settings.admin

    @provide(scope=Scope.APP)
    def provide_templates(self) -> jinja2.Environment:
        """Provide template environment for emails and pages."""
        return create_environment()
