"""Activation use cases."""

from onboard.application.usecase.activation.activate_account import (
    ActivateAccountRequest,
    ActivateAccountUseCase,
)
from onboard.application.usecase.activation.page import (
    ActivationFailure,
    ActivationPage,
    ActivationView,
)
from onboard.application.usecase.activation.show_activation_form import (
    ShowActivationFormRequest,
    ShowActivationFormUseCase,
)

__all__ = [
    "ActivateAccountRequest",
    "ActivateAccountUseCase",
    "ActivationFailure",
    "ActivationPage",
    "ActivationView",
    "ShowActivationFormRequest",
    "ShowActivationFormUseCase",
]
