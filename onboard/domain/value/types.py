"""Domain value objects for onboarding.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from onboard.domain.value.common import RootValueObject, ValueObject


class Capability(str, Enum):
    """Capabilities the session gate can grant to an authenticated identity."""

    MEMBER = "Member"


class EmailAddress(RootValueObject[str]):
    """Normalized email address (trimmed, lowercased)."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate basic email shape."""
        v = v.strip().lower()
        local, sep, domain = v.partition("@")
        if not sep or not local or "." not in domain:
            raise ValueError("Email must look like name@domain.tld")
        if len(v) > 254:
            raise ValueError("Email must be at most 254 characters")
        return v


class ActivationToken(RootValueObject[str]):
    """Signed activation token as carried in the activation link."""

    @field_validator("root")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Validate token is not blank."""
        if not v.strip():
            raise ValueError("Activation token must not be empty")
        return v

    def preview(self) -> str:
        """Prefix safe to put in logs."""
        return self.root[:8] + "..."


class VerificationTicket(ValueObject):
    """Email verification ticket issued by the identity provider."""

    ticket_url: str
