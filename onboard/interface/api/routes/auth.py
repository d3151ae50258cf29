"""Authentication routes."""

import hmac
import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from onboard.adapter.error import ProviderError
from onboard.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from onboard.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from onboard.application.usecase.auth.login import LoginRequest
from onboard.config import Settings
from onboard.domain.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

# Lifetime of the login state cookie
STATE_MAX_AGE_SECONDS = 10 * 60


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


def _cookie_options(settings: Settings) -> dict:
    is_local = settings.environment in ("test", "development")
    return {"httponly": True, "secure": not is_local, "samesite": "lax", "path": "/"}


@router.get("/login")
async def login(
    auth_service: FromDishka[AuthService],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Start a login at the identity provider.

    Returns:
        HTTP 302 redirect to the provider's authorization page, with the
        state value kept in a short-lived cookie for the callback
    """
    state = secrets.token_urlsafe(32)
    authorization_url = await auth_service.initiate_login(state)

    response = RedirectResponse(url=authorization_url, status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        key=settings.auth.state_cookie_name,
        value=state,
        max_age=STATE_MAX_AGE_SECONDS,
        **_cookie_options(settings),
    )
    return response


@router.get("/callback")
async def callback(
    request: Request,
    code: str,
    state: str,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Handle the provider's redirect after sign-in.

    Verifies the state value, completes the login, runs the session gate and
    issues the session cookie. Only activated accounts receive the Member
    capability.

    Example:
        GET /auth/callback?code=abc123&state=xyz789

        Redirects to: /members
        Sets cookie: session_token

    Raises:
        HTTPException: 400 on state mismatch, 401 if the provider rejects
            the code, 502 if the provider cannot be reached
    """
    expected_state = request.cookies.get(settings.auth.state_cookie_name)
    if not expected_state or not hmac.compare_digest(expected_state, state):
        logger.warning("Login callback with missing or mismatched state")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid login state",
        )

    try:
        login_response = await login_use_case.execute(LoginRequest(code=code))
    except ProviderError as e:
        logger.error(f"Login failed at provider: {e}")
        if e.status_code in (400, 401, 403):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail="Login failed"
            )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Identity provider unavailable",
        )

    logger.info(
        f"Login successful for user {login_response.user_id} "
        f"with capabilities {[c.value for c in login_response.capabilities]}"
    )

    redirect_response = RedirectResponse(
        url=str(request.url_for("members_home")),
        status_code=status.HTTP_303_SEE_OTHER,
    )
    redirect_response.set_cookie(
        key=settings.auth.cookie_name,
        value=login_response.token,
        max_age=settings.auth.session_expiry_hours * 60 * 60,
        **_cookie_options(settings),
    )
    redirect_response.delete_cookie(key=settings.auth.state_cookie_name, path="/")
    return redirect_response


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Logout user by clearing the session cookie."""
    response.delete_cookie(key=settings.auth.cookie_name, path="/")
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_current_user(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
) -> GetCurrentUserResponse:
    """Report the current session.

    Safe to call without a session: returns authenticated=false instead of
    raising.

    Examples:
        Authenticated:
        {
            "authenticated": true,
            "user_id": "auth0|...",
            "email": "ada@example.com",
            "capabilities": ["Member"]
        }

        Unauthenticated:
        {
            "authenticated": false,
            "user_id": null,
            "email": null,
            "capabilities": []
        }
    """
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(token=request.cookies.get(settings.auth.cookie_name))
    )
