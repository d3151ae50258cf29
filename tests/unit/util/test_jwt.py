"""Unit tests for JWT utilities."""

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from onboard.config import ActivationSettings, AuthSettings
from onboard.util.jwt import (
    TokenExpiredError,
    TokenInvalidError,
    create_activation_token,
    create_session_token,
    verify_activation_token,
    verify_session_token,
)

ACTIVATION = ActivationSettings(token_secret="activation-secret-for-tests-0123456789")
AUTH = AuthSettings(session_secret="session-secret-for-tests-0123456789")


class TestActivationToken:
    """Tests for activation token encoding and decoding."""

    def test_round_trip_returns_original_payload(self):
        """Decoding a fresh token with the right secret returns user_id and email."""
        token = create_activation_token("auth0|abc123", "ada@example.com", ACTIVATION)

        payload = verify_activation_token(token, ACTIVATION)

        assert payload.user_id == "auth0|abc123"
        assert payload.email == "ada@example.com"

    def test_expiry_follows_settings(self):
        """exp should be token_expiry_hours after issue."""
        settings = ACTIVATION.model_copy(update={"token_expiry_hours": 2})
        before = datetime.now(timezone.utc).replace(microsecond=0)

        payload = verify_activation_token(
            create_activation_token("auth0|abc123", "ada@example.com", settings),
            settings,
        )

        assert before + timedelta(hours=2) <= payload.exp
        assert payload.exp <= before + timedelta(hours=2, seconds=5)

    def test_wrong_secret_is_invalid(self):
        """A token signed with another secret must be rejected."""
        token = create_activation_token("auth0|abc123", "ada@example.com", ACTIVATION)
        other = ACTIVATION.model_copy(update={"token_secret": "another-secret-0123456789abcdef"})

        with pytest.raises(TokenInvalidError):
            verify_activation_token(token, other)

    def test_tampered_payload_is_invalid(self):
        """Swapping the payload segment breaks the signature."""
        token = create_activation_token("auth0|abc123", "ada@example.com", ACTIVATION)
        forged = create_activation_token("auth0|evil", "eve@example.com", ACTIVATION)
        header, _, signature = token.split(".")
        _, forged_payload, _ = forged.split(".")

        with pytest.raises(TokenInvalidError):
            verify_activation_token(f"{header}.{forged_payload}.{signature}", ACTIVATION)

    @pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
    def test_malformed_token_is_invalid(self, token):
        """Garbage input is reported as invalid, never as a crash."""
        with pytest.raises(TokenInvalidError):
            verify_activation_token(token, ACTIVATION)

    def test_expired_token(self):
        """Expired tokens raise TokenExpiredError, which is a TokenInvalidError."""
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = pyjwt.encode(
            {
                "user_id": "auth0|abc123",
                "email": "ada@example.com",
                "purpose": "activation",
                "iat": past - timedelta(hours=1),
                "exp": past,
            },
            ACTIVATION.token_secret,
            algorithm="HS256",
        )

        with pytest.raises(TokenExpiredError):
            verify_activation_token(token, ACTIVATION)
        assert issubclass(TokenExpiredError, TokenInvalidError)

    def test_token_without_expiry_is_invalid(self):
        """Unbounded tokens are not accepted."""
        token = pyjwt.encode(
            {"user_id": "auth0|abc123", "email": "ada@example.com", "purpose": "activation"},
            ACTIVATION.token_secret,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            verify_activation_token(token, ACTIVATION)


class TestSessionToken:
    """Tests for session token encoding and decoding."""

    def test_round_trip_keeps_capabilities(self):
        """Capabilities survive the round trip."""
        token = create_session_token("auth0|abc123", "ada@example.com", ["Member"], AUTH)

        payload = verify_session_token(token, AUTH)

        assert payload.user_id == "auth0|abc123"
        assert payload.capabilities == ["Member"]

    def test_session_token_is_not_an_activation_token(self):
        """purpose claim keeps the two token kinds apart, even with a shared secret."""
        shared = ACTIVATION.model_copy(update={"token_secret": AUTH.session_secret})
        token = create_session_token("auth0|abc123", "ada@example.com", [], AUTH)

        with pytest.raises(TokenInvalidError):
            verify_activation_token(token, shared)

    def test_activation_token_is_not_a_session_token(self):
        """An activation link cannot be used as a session cookie."""
        shared = AUTH.model_copy(update={"session_secret": ACTIVATION.token_secret})
        token = create_activation_token("auth0|abc123", "ada@example.com", ACTIVATION)

        with pytest.raises(TokenInvalidError):
            verify_session_token(token, shared)
