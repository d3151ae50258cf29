"""Unit tests for the Auth0 login client."""

import httpx
import pytest

from onboard.adapter.auth0.login import RealAuth0LoginClient
from onboard.adapter.error import ProviderError
from onboard.config import AuthSettings, ProviderSettings

SETTINGS = ProviderSettings(
    domain="tenant.auth0.test",
    login_client_id="web-client",
    login_client_secret="web-secret",
)


def _route(monkeypatch, token_reply: httpx.Response, userinfo_reply: httpx.Response):
    """Answer token and userinfo requests with the given responses."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            return token_reply
        return userinfo_reply

    real_client = httpx.AsyncClient
    transport = httpx.MockTransport(handler)
    monkeypatch.setattr(
        httpx, "AsyncClient", lambda **kwargs: real_client(transport=transport, **kwargs)
    )


@pytest.fixture
def login_client() -> RealAuth0LoginClient:
    return RealAuth0LoginClient(SETTINGS, AuthSettings())


class TestRealAuth0LoginClient:
    """Tests for RealAuth0LoginClient."""

    @pytest.mark.asyncio
    async def test_completes_login(self, monkeypatch, login_client):
        """The code is exchanged and the profile becomes an identity."""
        _route(
            monkeypatch,
            httpx.Response(200, json={"access_token": "user-token"}),
            httpx.Response(
                200, json={"sub": "auth0|64f0c0ffee", "email": "ada@example.com"}
            ),
        )

        identity = await login_client.complete_authorization("code-123")

        assert identity.user_id == "auth0|64f0c0ffee"
        assert identity.email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_token_reply_without_access_token(self, monkeypatch, login_client):
        """An exchange reply without a token is a ProviderError."""
        _route(
            monkeypatch,
            httpx.Response(200, json={"error": "unexpected"}),
            httpx.Response(200, json={"sub": "auth0|64f0c0ffee"}),
        )

        with pytest.raises(ProviderError):
            await login_client.complete_authorization("code-123")

    @pytest.mark.asyncio
    async def test_profile_without_subject(self, monkeypatch, login_client):
        """A userinfo reply without sub is a ProviderError."""
        _route(
            monkeypatch,
            httpx.Response(200, json={"access_token": "user-token"}),
            httpx.Response(200, json={"email": "ada@example.com"}),
        )

        with pytest.raises(ProviderError) as exc_info:
            await login_client.complete_authorization("code-123")
        assert exc_info.value.status_code == 200
