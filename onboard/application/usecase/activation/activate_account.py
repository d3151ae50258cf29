"""Activate account use case."""

import logfire
from pydantic import BaseModel

from onboard.adapter.error import ProviderError
from onboard.application.usecase.base import BaseUseCase
from onboard.config import ActivationSettings
from onboard.domain.error import (
    AlreadyActiveError,
    UserNotFoundError,
    ValidationError,
)
from onboard.domain.service import TokenService, UserService
from onboard.domain.value import ActivationToken, UserId
from onboard.util.jwt import JWTError

from .page import ActivationFailure, ActivationPage, ActivationView


class ActivateAccountRequest(BaseModel):
    """Activation form submission."""

    token: str | None = None
    password: str = ""
    confirm_password: str = ""


def validate_password(
    password: str, confirm_password: str, settings: ActivationSettings
) -> None:
    """Check the submitted password fields.

    Raises:
        ValidationError: With every rule that failed
    """
    errors: list[str] = []
    if len(password) < settings.min_password_length:
        errors.append(
            f"Password must be at least {settings.min_password_length} characters."
        )
    if password != confirm_password:
        errors.append("Password and confirmation do not match.")
    if errors:
        raise ValidationError(errors)


class ActivateAccountUseCase(BaseUseCase[ActivateAccountRequest, ActivationPage]):
    """Use case for the POST side of activation.

    Order of checks: token, form input, user lookup, pending state. Nothing
    is written unless all of them pass.
    """

    def __init__(
        self,
        token_service: TokenService,
        user_service: UserService,
        activation_settings: ActivationSettings,
    ) -> None:
        """Initialize use case.

        Args:
            token_service: Token domain service
            user_service: User domain service
            activation_settings: Activation settings
        """
        self.token_service = token_service
        self.user_service = user_service
        self.activation_settings = activation_settings

    async def execute(self, request: ActivateAccountRequest) -> ActivationPage:
        """Apply the new password and leave the pending state.

        Args:
            request: Form submission

        Returns:
            Success page, the form with errors, or an error page
        """
        with logfire.span("activate_account.execute"):
            if not request.token or not request.token.strip():
                return ActivationPage.error(ActivationFailure.TOKEN_INVALID)

            token = ActivationToken(root=request.token)
            try:
                payload = self.token_service.verify_activation_token(token)
            except JWTError:
                return ActivationPage.error(ActivationFailure.TOKEN_INVALID)

            try:
                validate_password(
                    request.password, request.confirm_password, self.activation_settings
                )
            except ValidationError as e:
                logfire.info(
                    "Activation form rejected",
                    user_id=payload.user_id,
                    errors=e.errors,
                )
                return ActivationPage(
                    view=ActivationView.FORM,
                    token=token.root,
                    email=payload.email,
                    errors=e.errors,
                )

            try:
                user = await self.user_service.find_exact_match(
                    UserId(payload.user_id), payload.email
                )
                await self.user_service.complete_activation(user, request.password)
            except UserNotFoundError:
                return ActivationPage.error(ActivationFailure.USER_NOT_FOUND)
            except AlreadyActiveError:
                return ActivationPage.error(ActivationFailure.ALREADY_ACTIVE)
            except ProviderError as e:
                logfire.error(
                    "Activation failed at provider",
                    user_id=payload.user_id,
                    error=str(e),
                )
                return ActivationPage.error(ActivationFailure.PROVIDER_ERROR)

            return ActivationPage(
                view=ActivationView.SUCCESS,
                email=user.email,
                name=user.display_name,
                message="Your account is active. You can now sign in.",
            )
