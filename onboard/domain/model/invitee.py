"""Invitee entity - one entry of an invitation batch."""

from onboard.domain.model.common import DomainModel


class Invitee(DomainModel):
    """Person to invite.

    An empty email marks an entry that is skipped by the invitation flow.
    """

    given_name: str = ""
    family_name: str = ""
    email: str = ""
