"""JWT token utilities.

Two kinds of tokens are issued, each signed with its own secret and tagged
with a ``purpose`` claim so one can never be replayed as the other:

- activation tokens carry ``{user_id, email}`` through the activation link
- session tokens carry ``{user_id, email, capabilities}`` in the session cookie
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError

from onboard.config import ActivationSettings, AuthSettings

ACTIVATION_PURPOSE = "activation"
SESSION_PURPOSE = "session"


class ActivationTokenPayload(BaseModel):
    """Activation token payload."""

    user_id: str
    email: str
    exp: datetime


class SessionTokenPayload(BaseModel):
    """Session token payload."""

    user_id: str
    email: str | None = None
    capabilities: list[str] = []
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


class TokenInvalidError(JWTError):
    """Token is malformed, tampered with, or signed with another secret."""

    pass


class TokenExpiredError(TokenInvalidError):
    """Token signature is valid but the token has expired."""

    pass


def _encode(payload: dict, secret: str, algorithm: str) -> str:
    return jwt.encode(payload, secret, algorithm=algorithm)


def _decode(token: str, secret: str, algorithm: str, purpose: str) -> dict:
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "purpose"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except jwt.InvalidTokenError:
        raise TokenInvalidError("Invalid token")

    if payload.get("purpose") != purpose:
        raise TokenInvalidError("Invalid token")
    return payload


def create_activation_token(
    user_id: str, email: str, settings: ActivationSettings
) -> str:
    """Create an activation token for an invited user.

    Args:
        user_id: Identity provider user ID
        email: Invited email address
        settings: Activation settings

    Returns:
        Encoded JWT token
    """
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "email": email,
        "purpose": ACTIVATION_PURPOSE,
        "iat": now,
        "exp": now + timedelta(hours=settings.token_expiry_hours),
    }
    return _encode(payload, settings.token_secret, settings.token_algorithm)


def verify_activation_token(
    token: str, settings: ActivationSettings
) -> ActivationTokenPayload:
    """Verify and decode an activation token.

    Args:
        token: JWT token to verify
        settings: Activation settings

    Returns:
        Token payload if valid

    Raises:
        TokenInvalidError: If token is malformed or its signature is wrong
        TokenExpiredError: If token is expired
    """
    payload = _decode(
        token, settings.token_secret, settings.token_algorithm, ACTIVATION_PURPOSE
    )
    try:
        return ActivationTokenPayload(**payload)
    except ValidationError:
        raise TokenInvalidError("Invalid token")


def create_session_token(
    user_id: str,
    email: str | None,
    capabilities: list[str],
    settings: AuthSettings,
) -> str:
    """Create a session token for an authenticated user.

    Args:
        user_id: Identity provider user ID
        email: User email, if known
        capabilities: Capabilities granted by the session gate
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "email": email,
        "capabilities": capabilities,
        "purpose": SESSION_PURPOSE,
        "iat": now,
        "exp": now + timedelta(hours=settings.session_expiry_hours),
    }
    return _encode(payload, settings.session_secret, settings.session_algorithm)


def verify_session_token(token: str, settings: AuthSettings) -> SessionTokenPayload:
    """Verify and decode a session token.

    Raises:
        TokenInvalidError: If token is invalid
        TokenExpiredError: If token is expired
    """
    payload = _decode(
        token, settings.session_secret, settings.session_algorithm, SESSION_PURPOSE
    )
    try:
        return SessionTokenPayload(**payload)
    except ValidationError:
        raise TokenInvalidError("Invalid token")
