"""Domain model entities for onboarding."""

from onboard.domain.model.email import OutboundEmail
from onboard.domain.model.identity import AuthenticatedIdentity
from onboard.domain.model.invitee import Invitee
from onboard.domain.model.user import InvitedUser, UserPage

__all__ = [
    "AuthenticatedIdentity",
    "InvitedUser",
    "Invitee",
    "OutboundEmail",
    "UserPage",
]
