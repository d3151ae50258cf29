"""Account activation routes (HTML)."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Form, Query, Request, status
from fastapi.responses import HTMLResponse

from onboard.application.usecase.activation import (
    ActivateAccountUseCase,
    ShowActivationFormUseCase,
)
from onboard.application.usecase.activation.activate_account import (
    ActivateAccountRequest,
)
from onboard.application.usecase.activation.page import (
    ActivationFailure,
    ActivationPage,
    ActivationView,
)
from onboard.application.usecase.activation.show_activation_form import (
    ShowActivationFormRequest,
)
from onboard.config import ActivationSettings
from onboard.interface.api.templates import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account", tags=["activation"], route_class=DishkaRoute)

FAILURE_STATUS = {
    ActivationFailure.TOKEN_INVALID: status.HTTP_400_BAD_REQUEST,
    ActivationFailure.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ActivationFailure.ALREADY_ACTIVE: status.HTTP_409_CONFLICT,
    ActivationFailure.PROVIDER_ERROR: status.HTTP_502_BAD_GATEWAY,
}

TEMPLATE_BY_VIEW = {
    ActivationView.FORM: "pages/activation_form.html",
    ActivationView.ERROR: "pages/activation_error.html",
    ActivationView.SUCCESS: "pages/activation_success.html",
}


def _render(
    request: Request, page: ActivationPage, settings: ActivationSettings
) -> HTMLResponse:
    """Render an activation page with the status code matching its outcome."""
    if page.view == ActivationView.ERROR and page.failure is not None:
        status_code = FAILURE_STATUS[page.failure]
    elif page.view == ActivationView.FORM and page.errors:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        status_code = status.HTTP_200_OK

    return templates.TemplateResponse(
        request,
        TEMPLATE_BY_VIEW[page.view],
        {
            "page": page,
            "action_url": str(request.url_for("activate_account")),
            "login_url": str(request.url_for("login")),
            "min_password_length": settings.min_password_length,
        },
        status_code=status_code,
    )


@router.get("/activate", response_class=HTMLResponse)
async def show_activation_form(
    request: Request,
    show_activation_form_use_case: FromDishka[ShowActivationFormUseCase],
    settings: FromDishka[ActivationSettings],
    user_token: str | None = Query(default=None, alias="userToken"),
) -> HTMLResponse:
    """Render the password form for an activation link.

    The link arrives here through the provider's verification ticket, which
    redirects to this URL with the activation token attached.

    Example:
        GET /account/activate?userToken=eyJhbGciOi...
    """
    page = await show_activation_form_use_case.execute(
        ShowActivationFormRequest(token=user_token)
    )
    if page.view == ActivationView.ERROR:
        logger.info(f"Activation form refused: {page.failure.value}")
    return _render(request, page, settings)


@router.post("/activate", response_class=HTMLResponse)
async def activate_account(
    request: Request,
    activate_account_use_case: FromDishka[ActivateAccountUseCase],
    settings: FromDishka[ActivationSettings],
    user_token: str | None = Form(default=None, alias="userToken"),
    password: str = Form(default=""),
    confirm_password: str = Form(default=""),
) -> HTMLResponse:
    """Apply the chosen password and complete activation.

    The token may come from the form or, for forms posted back to the link
    URL, from the query string.
    """
    token = user_token or request.query_params.get("userToken")
    page = await activate_account_use_case.execute(
        ActivateAccountRequest(
            token=token,
            password=password,
            confirm_password=confirm_password,
        )
    )
    if page.view == ActivationView.ERROR:
        logger.info(f"Activation refused: {page.failure.value}")
    return _render(request, page, settings)
