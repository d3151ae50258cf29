"""Application layer DI providers."""

from dishka import Scope, provide

from onboard.application.usecase.activation import (
    ActivateAccountUseCase,
    ShowActivationFormUseCase,
)
from onboard.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from onboard.application.usecase.invite import (
    CreateInvitesUseCase,
    DeleteInviteUseCase,
    GetInvitesUseCase,
)
from onboard.config import ActivationSettings, InvitationSettings
from onboard.domain.service import (
    AuthService,
    EmailService,
    InvitationService,
    SessionGateService,
    TokenService,
    UserService,
)
from onboard.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        session_gate: SessionGateService,
        token_service: TokenService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            session_gate=session_gate,
            token_service=token_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, token_service: TokenService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(token_service=token_service)

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invites_use_case(
        self,
        user_service: UserService,
        token_service: TokenService,
        invitation_service: InvitationService,
        email_service: EmailService,
        invitation_settings: InvitationSettings,
    ) -> CreateInvitesUseCase:
        """Provide create invites use case."""
        return CreateInvitesUseCase(
            user_service=user_service,
            token_service=token_service,
            invitation_service=invitation_service,
            email_service=email_service,
            invitation_settings=invitation_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_invites_use_case(self, user_service: UserService) -> GetInvitesUseCase:
        """Provide get invites use case."""
        return GetInvitesUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_invite_use_case(
        self, user_service: UserService
    ) -> DeleteInviteUseCase:
        """Provide delete invite use case."""
        return DeleteInviteUseCase(user_service=user_service)

    # Activation use cases
    @provide(scope=Scope.REQUEST)
    def get_show_activation_form_use_case(
        self, token_service: TokenService, user_service: UserService
    ) -> ShowActivationFormUseCase:
        """Provide show activation form use case."""
        return ShowActivationFormUseCase(
            token_service=token_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_activate_account_use_case(
        self,
        token_service: TokenService,
        user_service: UserService,
        activation_settings: ActivationSettings,
    ) -> ActivateAccountUseCase:
        """Provide activate account use case."""
        return ActivateAccountUseCase(
            token_service=token_service,
            user_service=user_service,
            activation_settings=activation_settings,
        )
