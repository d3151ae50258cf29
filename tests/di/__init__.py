"""Mock providers for testing."""

from .identity import MockIdentityProvider
from .login import MockLoginProvider
from .email import MockEmailProvider
from .container import build_test_container

__all__ = [
    "MockIdentityProvider",
    "MockLoginProvider",
    "MockEmailProvider",
    "build_test_container",
]
