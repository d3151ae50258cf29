"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from onboard.config import Settings
from onboard.interface.api.routes import activation, admin, auth, health, members
from onboard.interface.error import LoginRequiredError, MissingCapabilityError
from onboard.util.di.container import create_container, setup_di
from onboard.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


async def login_required_handler(
    request: Request, exc: LoginRequiredError
) -> RedirectResponse:
    """Send anonymous visitors of protected pages to the login page."""
    return RedirectResponse(
        url=str(request.url_for("login")), status_code=status.HTTP_303_SEE_OTHER
    )


async def missing_capability_handler(
    request: Request, exc: MissingCapabilityError
) -> JSONResponse:
    """Reject signed-in users that lack a required capability."""
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": str(exc), "capability": exc.capability},
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container, the production one is built when omitted
    """
    if container is None:
        settings = Settings()
        settings.ensure_production_ready()
        container = create_container()

    # Logfire must be configured before instrumentation
    instrument_httpx()

    app_instance = FastAPI(
        title="Onboard API",
        description="Invite-only account provisioning: invitations, activation and member sessions",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    setup_di(app_instance, container)

    app_instance.add_exception_handler(LoginRequiredError, login_required_handler)
    app_instance.add_exception_handler(
        MissingCapabilityError, missing_capability_handler
    )

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(activation.router)
    app_instance.include_router(admin.router)
    app_instance.include_router(members.router)

    return app_instance
