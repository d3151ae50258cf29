"""Member-only pages."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from onboard.application.usecase.auth.get_current_user import GetCurrentUserResponse
from onboard.domain.value import Capability
from onboard.interface.api.dependencies import require_capability
from onboard.interface.api.templates import templates

router = APIRouter(tags=["members"])


@router.get("/members", response_class=HTMLResponse, name="members_home")
async def members_home(
    request: Request,
    session: GetCurrentUserResponse = Depends(require_capability(Capability.MEMBER)),
) -> HTMLResponse:
    """Landing page for activated members."""
    return templates.TemplateResponse(
        request,
        "pages/members.html",
        {
            "user_id": session.user_id,
            "email": session.email,
            "logout_url": str(request.url_for("logout")),
        },
    )
