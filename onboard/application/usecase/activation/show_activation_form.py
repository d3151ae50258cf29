"""Show activation form use case."""

import logfire
from pydantic import BaseModel

from onboard.adapter.error import ProviderError
from onboard.application.usecase.base import BaseUseCase
from onboard.domain.error import UserNotFoundError
from onboard.domain.service import TokenService, UserService
from onboard.domain.value import ActivationToken, UserId
from onboard.util.jwt import JWTError

from .page import ActivationFailure, ActivationPage, ActivationView


class ShowActivationFormRequest(BaseModel):
    """Render request from the activation link."""

    token: str | None = None


class ShowActivationFormUseCase(
    BaseUseCase[ShowActivationFormRequest, ActivationPage]
):
    """Use case for the GET side of activation.

    Decides between the password form and an error page; never writes.
    """

    def __init__(self, token_service: TokenService, user_service: UserService) -> None:
        """Initialize use case.

        Args:
            token_service: Token domain service
            user_service: User domain service
        """
        self.token_service = token_service
        self.user_service = user_service

    async def execute(self, request: ShowActivationFormRequest) -> ActivationPage:
        """Render the activation form or an error page.

        Args:
            request: Request carrying the token from the link

        Returns:
            Form page carrying the token, or an error page
        """
        with logfire.span("show_activation_form.execute"):
            if not request.token or not request.token.strip():
                return ActivationPage.error(ActivationFailure.TOKEN_INVALID)

            token = ActivationToken(root=request.token)
            try:
                payload = self.token_service.verify_activation_token(token)
            except JWTError:
                return ActivationPage.error(ActivationFailure.TOKEN_INVALID)

            try:
                user = await self.user_service.find_exact_match(
                    UserId(payload.user_id), payload.email
                )
            except UserNotFoundError:
                return ActivationPage.error(ActivationFailure.USER_NOT_FOUND)
            except ProviderError as e:
                logfire.error(
                    "Activation lookup failed at provider",
                    user_id=payload.user_id,
                    error=str(e),
                )
                return ActivationPage.error(ActivationFailure.PROVIDER_ERROR)

            if user.is_active:
                return ActivationPage.error(ActivationFailure.ALREADY_ACTIVE)

            return ActivationPage(
                view=ActivationView.FORM,
                token=token.root,
                email=user.email,
                name=user.display_name,
            )
