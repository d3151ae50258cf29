"""Invited user entity.

The user record itself lives in the identity provider; this is the typed
view of it the rest of the service works with.
"""

from datetime import datetime
from typing import Optional

from onboard.domain.model.common import DomainModel
from onboard.domain.value import UserId


class InvitedUser(DomainModel):
    """User record as held by the identity provider.

    Lifecycle:
    - created by the invitation flow with activation_pending=True
    - transitioned once by the activation flow to activation_pending=False
    - terminal afterwards (only administrative deletion remains)

    activation_pending is None for users the invitation flow never touched;
    such users are treated like pending ones by the session gate.
    """

    user_id: UserId
    email: str
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    email_verified: bool = False
    activation_pending: Optional[bool] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        """Whether activation has been completed."""
        return self.activation_pending is False

    @property
    def display_name(self) -> str:
        """Human-readable name, falling back to the email."""
        name = " ".join(p for p in (self.given_name, self.family_name) if p)
        return name or self.email


class UserPage(DomainModel):
    """One page of a user listing."""

    users: list[InvitedUser]
    # Matching users across all pages, as reported by the provider
    total: int
