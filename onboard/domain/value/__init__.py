"""Domain value objects for onboarding."""

from onboard.domain.value.identifiers import UserId
from onboard.domain.value.types import (
    ActivationToken,
    Capability,
    EmailAddress,
    VerificationTicket,
)

__all__ = [
    # Identifiers
    "UserId",
    # Types
    "ActivationToken",
    "Capability",
    "EmailAddress",
    "VerificationTicket",
]
