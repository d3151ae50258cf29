"""Activation page model shared by the activation use cases."""

from enum import Enum

from pydantic import BaseModel


class ActivationView(str, Enum):
    """Which activation page to render."""

    FORM = "form"
    ERROR = "error"
    SUCCESS = "success"


class ActivationFailure(str, Enum):
    """Why activation cannot proceed."""

    TOKEN_INVALID = "token_invalid"
    USER_NOT_FOUND = "user_not_found"
    ALREADY_ACTIVE = "already_active"
    PROVIDER_ERROR = "provider_error"


FAILURE_MESSAGES = {
    ActivationFailure.TOKEN_INVALID: "Activation token not found or invalid.",
    ActivationFailure.USER_NOT_FOUND: "No exact match for this activation link.",
    ActivationFailure.ALREADY_ACTIVE: "This account has already been activated. Please sign in.",
    ActivationFailure.PROVIDER_ERROR: "Your account could not be activated right now. Please try again later.",
}


class ActivationPage(BaseModel):
    """Outcome of an activation step, rendered by the interface layer."""

    view: ActivationView
    token: str | None = None
    email: str | None = None
    name: str | None = None
    failure: ActivationFailure | None = None
    message: str | None = None
    errors: list[str] = []

    @classmethod
    def error(cls, failure: ActivationFailure) -> "ActivationPage":
        """Error page for a failure."""
        return cls(
            view=ActivationView.ERROR,
            failure=failure,
            message=FAILURE_MESSAGES[failure],
        )
