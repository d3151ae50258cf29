"""Login use case."""

import logfire
from pydantic import BaseModel

from onboard.domain.service import AuthService, SessionGateService, TokenService
from onboard.domain.value import Capability


class LoginRequest(BaseModel):
    """Login request from the provider's callback."""

    code: str  # Authorization code


class LoginResponse(BaseModel):
    """Login response."""

    token: str  # Session token for the cookie
    user_id: str
    email: str | None
    capabilities: list[Capability]


class LoginUseCase:
    """Use case for completing a provider login.

    Steps:
    1. Exchange the code for an identity via the auth service
    2. Run the identity through the session gate
    3. Issue a session token carrying the granted capabilities
    """

    def __init__(
        self,
        auth_service: AuthService,
        session_gate: SessionGateService,
        token_service: TokenService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
            session_gate: Session gate domain service
            token_service: Token domain service
        """
        self.auth_service = auth_service
        self.session_gate = session_gate
        self.token_service = token_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Raises:
            ProviderError: If the provider rejects the code
        """
        with logfire.span("login.execute"):
            identity = await self.auth_service.complete_login(request.code)
            admitted = await self.session_gate.admit(identity)
            token = self.token_service.create_session_token(admitted)

            return LoginResponse(
                token=token,
                user_id=admitted.user_id,
                email=admitted.email,
                capabilities=sorted(admitted.capabilities, key=lambda c: c.value),
            )
