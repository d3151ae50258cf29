"""SMTP email sender implementation."""

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid

import logfire

from onboard.adapter.error import DeliveryError
from onboard.config import EmailSettings
from onboard.domain.model import OutboundEmail
from onboard.domain.service.email_service import EmailSender


class SmtpEmailSender(EmailSender):
    """Base class for SMTP email senders.

    Provides type distinction for dependency injection.
    """

    pass


class RealSmtpEmailSender(SmtpEmailSender):
    """Delivers email through an SMTP relay."""

    def __init__(self, settings: EmailSettings) -> None:
        """Initialize SMTP sender.

        Args:
            settings: Email settings
        """
        self.settings = settings

    def _build_message(self, email: OutboundEmail) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = email.subject
        msg["To"] = email.to
        msg["From"] = self.settings.from_address
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid(
            domain=self.settings.from_address.partition("@")[2] or None
        )

        # Plain text first so HTML-capable clients prefer the HTML part
        msg.attach(MIMEText(email.text_body, "plain"))
        msg.attach(MIMEText(email.html_body, "html"))
        return msg

    def _send_sync(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(
            self.settings.smtp_host,
            self.settings.smtp_port,
            timeout=self.settings.timeout_seconds,
        ) as s:
            if self.settings.use_tls:
                s.starttls()
            if self.settings.smtp_user:
                s.login(self.settings.smtp_user, self.settings.smtp_password or "")
            s.send_message(msg)

    async def send(self, email: OutboundEmail) -> None:
        """Send email on a worker thread.

        Raises:
            DeliveryError: If the relay refuses or cannot be reached
        """
        msg = self._build_message(email)
        try:
            await asyncio.to_thread(self._send_sync, msg)
        except (smtplib.SMTPException, OSError) as e:
            logfire.error(
                "SMTP delivery failed",
                to=email.to,
                host=self.settings.smtp_host,
                error=str(e),
            )
            raise DeliveryError(f"Could not deliver email to {email.to}: {e}")
        logfire.info("Email handed to SMTP relay", to=email.to)


class MockEmailSender(SmtpEmailSender):
    """Mock sender that keeps sent messages in an outbox.

    Recipients listed in ``undeliverable`` raise DeliveryError.
    """

    def __init__(self) -> None:
        """Initialize empty outbox."""
        self.outbox: list[OutboundEmail] = []
        self.undeliverable: set[str] = set()

    async def send(self, email: OutboundEmail) -> None:
        """Record the email."""
        if email.to in self.undeliverable:
            raise DeliveryError(f"Could not deliver email to {email.to}: mailbox unavailable")
        self.outbox.append(email)
