"""Application configuration."""

from pathlib import Path
from typing import Literal
from pydantic import BaseModel, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from onboard.util.error import ConfigurationError

PLACEHOLDER = "CHANGE_ME_IN_PRODUCTION"


class ProviderSettings(BaseModel):
    """Identity provider (Auth0 tenant) configuration."""

    # Tenant domain, e.g. "acme.eu.auth0.com"
    domain: str = "example.auth0.com"

    # Machine-to-machine application used for the Management API
    # Needs read:users, update:users, delete:users, create:users, create:user_tickets
    client_id: str = PLACEHOLDER
    client_secret: str = PLACEHOLDER

    # Regular web application used for interactive login
    login_client_id: str = PLACEHOLDER
    login_client_secret: str = PLACEHOLDER

    # Database connection invited users are created in
    connection: str = "Username-Password-Authentication"

    timeout_seconds: float = 10.0

    @computed_field
    @property
    def base_url(self) -> str:
        """Tenant base URL."""
        return f"https://{self.domain}"

    @computed_field
    @property
    def management_audience(self) -> str:
        """Audience for Management API access tokens."""
        return f"https://{self.domain}/api/v2/"


class ActivationSettings(BaseModel):
    """Activation token and activation form configuration."""

    token_secret: str = PLACEHOLDER  # Must be overridden in production
    token_algorithm: str = "HS256"

    # Activation links stop working after this many hours
    token_expiry_hours: int = 168

    min_password_length: int = 8

    # How many times clearing activation_pending is attempted after the
    # password has already been written
    flag_clear_attempts: int = 3
    # Delay before the second attempt, doubled for each one after
    flag_clear_backoff_seconds: float = 0.5

    # Lifetime of the provider's email verification ticket
    ticket_ttl_seconds: int = 7 * 24 * 60 * 60


class AuthSettings(BaseModel):
    """Session configuration."""

    session_secret: str = PLACEHOLDER  # Must be overridden in production
    session_algorithm: str = "HS256"
    session_expiry_hours: int = 12
    cookie_name: str = "session_token"
    state_cookie_name: str = "login_state"

    # Set by Settings validator from api.base_url
    callback_url: str = "http://localhost:8000/auth/callback"


class EmailSettings(BaseModel):
    """Outbound email (SMTP relay) configuration."""

    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    use_tls: bool = True
    from_address: str = "no-reply@example.com"
    subject: str = "Activate your account"
    # Connect and per-command socket timeout for the relay
    timeout_seconds: float = 30.0


class InvitationSettings(BaseModel):
    """Invitation configuration."""

    max_batch_size: int = 50


class AdminSettings(BaseModel):
    """Administrative surface configuration."""

    # Keys accepted in the X-Admin-Key header
    api_keys: list[str] = []


class APISettings(BaseModel):
    """API configuration."""

    host: str
    port: int
    protocol: Literal["http", "https"]

    @computed_field
    @property
    def base_url(self) -> str:
        """Construct base URL from host.

        In development: http://localhost:8000
        In production: https://{host}
        """
        if self.host == "localhost":
            return f"{self.protocol}://{self.host}:{self.port}"
        else:
            # Production uses standard ports (80/443)
            return f"{self.protocol}://{self.host}"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # If None, sends when a token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, nested sections use "__":

    Development (default):
        HOST=localhost
        PORT=8000
        ENVIRONMENT=development
        -> API: http://localhost:8000
        -> Login callback: http://localhost:8000/auth/callback

    Production:
        HOST=accounts.example.com
        ENVIRONMENT=production
        PROVIDER__DOMAIN=example.eu.auth0.com
        ACTIVATION__TOKEN_SECRET=...
        AUTH__SESSION_SECRET=...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows PROVIDER__DOMAIN syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Git commit SHA (loaded from version.txt file or defaults to "unknown")
    git_sha: str = "unknown"

    host: str = "localhost"
    port: int = 8000

    # Nested settings
    provider: ProviderSettings = ProviderSettings()
    activation: ActivationSettings = ActivationSettings()
    auth: AuthSettings = AuthSettings()
    email: EmailSettings = EmailSettings()
    invitations: InvitationSettings = InvitationSettings()
    admin: AdminSettings = AdminSettings()
    api: APISettings = APISettings(
        host="localhost", port=8000, protocol="http"
    )  # Overwritten in validator
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def initialize_api_settings(self) -> "Settings":
        """Initialize API settings from host and environment."""
        protocol: Literal["http", "https"] = (
            "http" if self.environment in ("test", "development") else "https"
        )

        self.api = APISettings(host=self.host, port=self.port, protocol=protocol)

        self.auth.callback_url = f"{self.api.base_url}/auth/callback"

        self.git_sha = self._load_git_sha()

        return self

    @staticmethod
    def _load_git_sha() -> str:
        """Load git SHA from version file.

        Returns:
            Git SHA if version file exists, otherwise "unknown"
        """
        version_file = Path("/app/version.txt")
        if version_file.exists():
            try:
                return version_file.read_text().strip()
            except OSError:
                return "unknown"
        return "unknown"

    @property
    def activation_url(self) -> str:
        """Public URL of the activation endpoint."""
        return f"{self.api.base_url}/account/activate"

    def ensure_production_ready(self) -> None:
        """Refuse to run a non-local environment on placeholder secrets.

        Raises:
            ConfigurationError: If a secret still has its placeholder value
        """
        if self.environment in ("test", "development"):
            return

        placeholders = {
            "ACTIVATION__TOKEN_SECRET": self.activation.token_secret,
            "AUTH__SESSION_SECRET": self.auth.session_secret,
            "PROVIDER__CLIENT_SECRET": self.provider.client_secret,
            "PROVIDER__LOGIN_CLIENT_SECRET": self.provider.login_client_secret,
        }
        missing = [name for name, value in placeholders.items() if value == PLACEHOLDER]
        if missing:
            raise ConfigurationError(
                f"Set {', '.join(missing)} before running in {self.environment}"
            )
        if self.activation.token_secret == self.auth.session_secret:
            raise ConfigurationError(
                "ACTIVATION__TOKEN_SECRET and AUTH__SESSION_SECRET must differ"
            )
