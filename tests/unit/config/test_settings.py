"""Unit tests for application settings."""

import pytest

from onboard.config import (
    ActivationSettings,
    AuthSettings,
    ProviderSettings,
    Settings,
)
from onboard.util.error import ConfigurationError


def _production(**overrides) -> Settings:
    values = {
        "environment": "production",
        "host": "accounts.example.com",
        "activation": ActivationSettings(token_secret="activation-secret"),
        "auth": AuthSettings(session_secret="session-secret"),
        "provider": ProviderSettings(
            domain="example.eu.auth0.com",
            client_secret="m2m-secret",
            login_client_secret="login-secret",
        ),
    }
    values.update(overrides)
    return Settings(**values)


class TestSettings:
    """Tests for Settings."""

    def test_urls_follow_host(self):
        """Public URLs are derived from host and environment."""
        settings = _production()

        assert settings.api.base_url == "https://accounts.example.com"
        assert settings.activation_url == "https://accounts.example.com/account/activate"
        assert settings.auth.callback_url == "https://accounts.example.com/auth/callback"

    def test_development_urls_keep_port(self):
        """Local development uses http and the port."""
        settings = Settings(environment="development", host="localhost", port=8000)

        assert settings.activation_url == "http://localhost:8000/account/activate"

    def test_production_ready(self):
        """Fully configured production settings pass."""
        _production().ensure_production_ready()

    def test_placeholder_secret_is_refused(self):
        """Placeholder secrets are refused outside development."""
        settings = _production(activation=ActivationSettings())

        with pytest.raises(ConfigurationError, match="ACTIVATION__TOKEN_SECRET"):
            settings.ensure_production_ready()

    def test_shared_secret_is_refused(self):
        """Activation and session tokens must not share a secret."""
        settings = _production(auth=AuthSettings(session_secret="activation-secret"))

        with pytest.raises(ConfigurationError, match="must differ"):
            settings.ensure_production_ready()

    def test_development_skips_checks(self):
        """Development runs on placeholders."""
        Settings(environment="development").ensure_production_ready()
