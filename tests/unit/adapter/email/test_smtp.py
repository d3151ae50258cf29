"""Unit tests for the SMTP email sender."""

import smtplib

import pytest

from onboard.adapter.email import smtp
from onboard.adapter.email.smtp import RealSmtpEmailSender
from onboard.adapter.error import DeliveryError
from onboard.config import EmailSettings
from onboard.domain.model import OutboundEmail

EMAIL = OutboundEmail(
    to="ada@example.com",
    subject="Activate your account",
    html_body="<p>Hello Ada</p>",
    text_body="Hello Ada",
)


class FakeSMTP:
    """Stands in for smtplib.SMTP and records what happens."""

    instances: list["FakeSMTP"] = []
    refuse = False
    unreachable = False

    def __init__(self, host: str, port: int, timeout: float) -> None:
        if FakeSMTP.unreachable:
            raise TimeoutError("timed out")
        self.host = host
        self.port = port
        self.timeout = timeout
        self.started_tls = False
        self.logged_in: tuple[str, str] | None = None
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self) -> None:
        self.started_tls = True

    def login(self, user: str, password: str) -> None:
        self.logged_in = (user, password)

    def send_message(self, msg) -> None:
        if FakeSMTP.refuse:
            raise smtplib.SMTPRecipientsRefused({EMAIL.to: (550, b"No such user")})
        self.sent.append(msg)


@pytest.fixture(autouse=True)
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.refuse = False
    FakeSMTP.unreachable = False
    monkeypatch.setattr(smtp.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


class TestRealSmtpEmailSender:
    """Tests for RealSmtpEmailSender."""

    @pytest.mark.asyncio
    async def test_sends_multipart_message(self):
        """Message has both parts and goes through TLS with login."""
        sender = RealSmtpEmailSender(
            EmailSettings(
                smtp_host="smtp.example.com",
                smtp_user="mailer",
                smtp_password="secret",
                from_address="no-reply@example.com",
            )
        )

        await sender.send(EMAIL)

        [conn] = FakeSMTP.instances
        assert (conn.host, conn.port) == ("smtp.example.com", 587)
        assert conn.started_tls
        assert conn.logged_in == ("mailer", "secret")
        [msg] = conn.sent
        assert msg["To"] == "ada@example.com"
        assert msg["From"] == "no-reply@example.com"
        assert [part.get_content_type() for part in msg.get_payload()] == [
            "text/plain",
            "text/html",
        ]

    @pytest.mark.asyncio
    async def test_refused_recipient_is_a_delivery_error(self):
        """SMTP failures surface as DeliveryError."""
        FakeSMTP.refuse = True
        sender = RealSmtpEmailSender(EmailSettings(use_tls=False))

        with pytest.raises(DeliveryError):
            await sender.send(EMAIL)

    @pytest.mark.asyncio
    async def test_connection_uses_configured_timeout(self):
        """The relay connection is opened with the configured timeout."""
        sender = RealSmtpEmailSender(EmailSettings(use_tls=False, timeout_seconds=5.0))

        await sender.send(EMAIL)

        [conn] = FakeSMTP.instances
        assert conn.timeout == 5.0

    @pytest.mark.asyncio
    async def test_relay_timeout_is_a_delivery_error(self):
        """A relay that never answers fails the send instead of blocking."""
        FakeSMTP.unreachable = True
        sender = RealSmtpEmailSender(EmailSettings(use_tls=False, timeout_seconds=0.1))

        with pytest.raises(DeliveryError):
            await sender.send(EMAIL)
