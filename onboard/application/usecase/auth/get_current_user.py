"""Get current user use case."""

from pydantic import BaseModel

from onboard.domain.service import TokenService
from onboard.domain.value import Capability


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str | None = None  # Session token from cookie


class GetCurrentUserResponse(BaseModel):
    """Session state of the caller."""

    authenticated: bool
    user_id: str | None = None
    email: str | None = None
    capabilities: list[Capability] = []


class GetCurrentUserUseCase:
    """Use case for reading the current session."""

    def __init__(self, token_service: TokenService) -> None:
        """Initialize get current user use case.

        Args:
            token_service: Token domain service
        """
        self.token_service = token_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Describe the session, unauthenticated when the token is missing or invalid."""
        payload = self.token_service.get_session(request.token)
        if payload is None:
            return GetCurrentUserResponse(authenticated=False)

        known = {c.value for c in Capability}
        capabilities = [Capability(c) for c in payload.capabilities if c in known]
        return GetCurrentUserResponse(
            authenticated=True,
            user_id=payload.user_id,
            email=payload.email,
            capabilities=capabilities,
        )
