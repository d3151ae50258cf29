"""Invite use cases."""

from onboard.application.usecase.invite.create_invites import (
    CreateInvitesRequest,
    CreateInvitesResponse,
    CreateInvitesUseCase,
)
from onboard.application.usecase.invite.delete_invite import (
    DeleteInviteRequest,
    DeleteInviteUseCase,
)
from onboard.application.usecase.invite.get_invites import (
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
)

__all__ = [
    "CreateInvitesRequest",
    "CreateInvitesResponse",
    "CreateInvitesUseCase",
    "DeleteInviteRequest",
    "DeleteInviteUseCase",
    "GetInvitesRequest",
    "GetInvitesResponse",
    "GetInvitesUseCase",
]
