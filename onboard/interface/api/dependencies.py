"""Request guards shared by routers."""

import hmac

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import Header, HTTPException, Request, status

from onboard.application.usecase.auth import GetCurrentUserUseCase
from onboard.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from onboard.config import AdminSettings, AuthSettings
from onboard.domain.value import Capability
from onboard.interface.error import LoginRequiredError, MissingCapabilityError


@inject
async def require_admin_key(
    admin_settings: FromDishka[AdminSettings],
    x_admin_key: str | None = Header(default=None),
) -> None:
    """Reject requests without a configured X-Admin-Key.

    Raises:
        HTTPException: 401 if the header is missing or unknown
    """
    if not x_admin_key or not any(
        hmac.compare_digest(x_admin_key, key) for key in admin_settings.api_keys
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin key",
        )


def require_capability(capability: Capability):
    """Build a dependency admitting only sessions that carry a capability.

    No session (or an invalid one) raises LoginRequiredError, which the app
    turns into a redirect to the login page. A valid session without the
    capability raises MissingCapabilityError (403).
    """

    @inject
    async def dependency(
        request: Request,
        get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
        auth_settings: FromDishka[AuthSettings],
    ) -> GetCurrentUserResponse:
        session = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=request.cookies.get(auth_settings.cookie_name))
        )
        if not session.authenticated:
            raise LoginRequiredError("Sign in required")
        if capability not in session.capabilities:
            raise MissingCapabilityError(capability.value)
        return session

    return dependency
