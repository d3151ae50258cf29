"""Create invites use case."""

from enum import Enum

import logfire
from pydantic import BaseModel, ValidationError as PydanticValidationError

from onboard.adapter.error import DeliveryError, ProviderError
from onboard.application.usecase.base import BaseUseCase
from onboard.config import InvitationSettings
from onboard.domain.error import ValidationError
from onboard.domain.model import Invitee
from onboard.domain.service import (
    EmailService,
    InvitationService,
    TokenService,
    UserService,
)
from onboard.domain.value import EmailAddress


class InviteeInfo(BaseModel):
    """Info for a single invitee."""

    given_name: str = ""
    family_name: str = ""
    email: str = ""


class CreateInvitesRequest(BaseModel):
    """Request to invite a batch of people."""

    invitees: list[InviteeInfo]


class FailureStage(str, Enum):
    """Where an invite failed."""

    VALIDATION = "validation"
    PROVIDER = "provider"
    DELIVERY = "delivery"


class InvitedItem(BaseModel):
    """Successfully invited user in response."""

    user_id: str
    email: str
    given_name: str
    family_name: str


class FailedInvite(BaseModel):
    """Invite that could not be completed."""

    email: str
    stage: FailureStage
    message: str
    # Set when the user record was created before the failure
    user_id: str | None = None


class CreateInvitesResponse(BaseModel):
    """Response after processing an invite batch."""

    invited: list[InvitedItem]
    failed: list[FailedInvite]
    skipped: int  # Entries without an email


class CreateInvitesUseCase(BaseUseCase[CreateInvitesRequest, CreateInvitesResponse]):
    """Use case for inviting a batch of people.

    Each entry is an independent unit of work: create a pending user, sign
    an activation token, get a verification ticket pointing at the
    activation endpoint, email the ticket link. A failing entry is reported
    and the batch carries on.
    """

    def __init__(
        self,
        user_service: UserService,
        token_service: TokenService,
        invitation_service: InvitationService,
        email_service: EmailService,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize use case.

        Args:
            user_service: User domain service
            token_service: Token domain service
            invitation_service: Invitation domain service
            email_service: Email domain service
            invitation_settings: Invitation settings
        """
        self.user_service = user_service
        self.token_service = token_service
        self.invitation_service = invitation_service
        self.email_service = email_service
        self.invitation_settings = invitation_settings

    async def execute(self, request: CreateInvitesRequest) -> CreateInvitesResponse:
        """Execute create invites use case.

        Args:
            request: Create invites request

        Returns:
            Response with invited users, per-entry failures and skip count

        Raises:
            ValidationError: If the batch is larger than allowed
        """
        max_batch = self.invitation_settings.max_batch_size
        if len(request.invitees) > max_batch:
            raise ValidationError(
                f"At most {max_batch} invitees per batch, got {len(request.invitees)}"
            )

        with logfire.span("create_invites", invite_count=len(request.invitees)):
            invited: list[InvitedItem] = []
            failed: list[FailedInvite] = []
            skipped = 0

            for entry in request.invitees:
                if not entry.email.strip():
                    skipped += 1
                    continue

                try:
                    email = EmailAddress(root=entry.email).root
                except PydanticValidationError:
                    failed.append(
                        FailedInvite(
                            email=entry.email,
                            stage=FailureStage.VALIDATION,
                            message="Invalid email address",
                        )
                    )
                    continue

                invitee = Invitee(
                    given_name=entry.given_name.strip(),
                    family_name=entry.family_name.strip(),
                    email=email,
                )
                result = await self._invite_one(invitee)
                if isinstance(result, FailedInvite):
                    failed.append(result)
                else:
                    invited.append(result)

            logfire.info(
                "Invite batch processed",
                invited=len(invited),
                failed=len(failed),
                skipped=skipped,
            )
            return CreateInvitesResponse(invited=invited, failed=failed, skipped=skipped)

    async def _invite_one(self, invitee: Invitee) -> InvitedItem | FailedInvite:
        """Run the invite steps for a single invitee."""
        try:
            user = await self.user_service.create_pending_user(invitee)
        except ProviderError as e:
            logfire.warn(
                "Failed to create invited user", email=invitee.email, error=str(e)
            )
            message = "User already exists" if e.is_conflict else str(e)
            return FailedInvite(
                email=invitee.email, stage=FailureStage.PROVIDER, message=message
            )

        try:
            token = self.token_service.create_activation_token(user)
            ticket = await self.invitation_service.issue_ticket(user, token)
            await self.email_service.send_activation_email(user, ticket)
        except ProviderError as e:
            logfire.warn(
                "Failed to issue verification ticket",
                user_id=user.user_id,
                error=str(e),
            )
            return FailedInvite(
                email=invitee.email,
                stage=FailureStage.PROVIDER,
                message=str(e),
                user_id=user.user_id,
            )
        except DeliveryError as e:
            logfire.warn(
                "Failed to deliver activation email",
                user_id=user.user_id,
                error=str(e),
            )
            return FailedInvite(
                email=invitee.email,
                stage=FailureStage.DELIVERY,
                message=str(e),
                user_id=user.user_id,
            )

        return InvitedItem(
            user_id=user.user_id,
            email=user.email,
            given_name=invitee.given_name,
            family_name=invitee.family_name,
        )
