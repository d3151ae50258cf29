"""Email domain service."""

import jinja2
import logfire

from onboard.config import ActivationSettings, EmailSettings
from onboard.domain.model import InvitedUser, OutboundEmail
from onboard.domain.value import VerificationTicket

from .base import Service


class EmailSender:
    """Outbound email interface."""

    async def send(self, email: OutboundEmail) -> None:
        """Deliver an email.

        Raises:
            DeliveryError: If the relay refuses or cannot be reached
        """
        raise NotImplementedError


class EmailService(Service):
    """Domain service composing and sending activation emails."""

    def __init__(
        self,
        email_sender: EmailSender,
        templates: jinja2.Environment,
        email_settings: EmailSettings,
        activation_settings: ActivationSettings,
    ) -> None:
        """Initialize email service.

        Args:
            email_sender: Email sender implementation
            templates: Template environment holding email/ templates
            email_settings: Email settings
            activation_settings: Activation settings (for link lifetime)
        """
        self.email_sender = email_sender
        self.templates = templates
        self.email_settings = email_settings
        self.activation_settings = activation_settings

    def compose_activation_email(
        self, user: InvitedUser, ticket: VerificationTicket
    ) -> OutboundEmail:
        """Render the activation email for a newly invited user."""
        context = {
            "subject": self.email_settings.subject,
            "name": user.given_name or user.display_name,
            "activation_url": ticket.ticket_url,
            "expiry_hours": self.activation_settings.token_expiry_hours,
        }
        return OutboundEmail(
            to=user.email,
            subject=self.email_settings.subject,
            html_body=self.templates.get_template("email/activation.html").render(
                context
            ),
            text_body=self.templates.get_template("email/activation.txt").render(
                context
            ),
        )

    async def send_activation_email(
        self, user: InvitedUser, ticket: VerificationTicket
    ) -> OutboundEmail:
        """Compose and send the activation email.

        Raises:
            DeliveryError: If sending fails
        """
        with logfire.span("email_service.send_activation_email", user_id=user.user_id):
            email = self.compose_activation_email(user, ticket)
            await self.email_sender.send(email)
            logfire.info("Activation email sent", user_id=user.user_id, to=user.email)
            return email
