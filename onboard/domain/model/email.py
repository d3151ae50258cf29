"""Outbound email message."""

from onboard.domain.model.common import DomainModel


class OutboundEmail(DomainModel):
    """Rendered email ready to hand to an email sender."""

    to: str
    subject: str
    html_body: str
    text_body: str
