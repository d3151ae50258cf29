"""Email infrastructure providers."""

from dishka import Scope, provide

from onboard.adapter.email.smtp import RealSmtpEmailSender
from onboard.config import EmailSettings
from onboard.domain.service import EmailSender
from onboard.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider using an SMTP relay."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_sender(self, settings: EmailSettings) -> EmailSender:
        """Provide SMTP email sender."""
        return RealSmtpEmailSender(settings=settings)
