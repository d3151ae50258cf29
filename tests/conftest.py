"""Test configuration and fixtures."""

import os

import logfire
import pytest

# Settings are read from the environment; pin test values before any
# container resolves them
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ACTIVATION__TOKEN_SECRET", "test-activation-secret-0123456789abcdef")
os.environ.setdefault("AUTH__SESSION_SECRET", "test-session-secret-0123456789abcdef")
os.environ.setdefault("PROVIDER__DOMAIN", "tenant.auth0.test")
os.environ.setdefault("PROVIDER__CLIENT_ID", "test-m2m-client")
os.environ.setdefault("PROVIDER__CLIENT_SECRET", "test-m2m-secret")
os.environ.setdefault("ADMIN__API_KEYS", '["test-admin-key"]')
os.environ.setdefault("ACTIVATION__FLAG_CLEAR_BACKOFF_SECONDS", "0")

# Spans and logs stay in-process during tests
logfire.configure(send_to_logfire=False, console=False)

ADMIN_HEADERS = {"X-Admin-Key": "test-admin-key"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Headers accepted by the admin routes."""
    return dict(ADMIN_HEADERS)
