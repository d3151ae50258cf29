"""Email adapters."""

from onboard.adapter.email.smtp import (
    MockEmailSender,
    RealSmtpEmailSender,
    SmtpEmailSender,
)

__all__ = ["MockEmailSender", "RealSmtpEmailSender", "SmtpEmailSender"]
