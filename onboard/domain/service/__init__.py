"""Domain services."""

from .auth_service import AuthService, LoginClient
from .base import Service
from .email_service import EmailSender, EmailService
from .identity_provider import IdentityProviderClient
from .invitation_service import InvitationService
from .session_gate import SessionGateService
from .token_service import TokenService
from .user_service import UserService

__all__ = [
    "AuthService",
    "EmailSender",
    "EmailService",
    "IdentityProviderClient",
    "InvitationService",
    "LoginClient",
    "Service",
    "SessionGateService",
    "TokenService",
    "UserService",
]
