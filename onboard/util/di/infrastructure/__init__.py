"""Infrastructure providers."""

# Import bases
from .email import EmailProvider
from .identity import IdentityProvider
from .login import LoginProvider

# Import implementations (needed for __subclasses__())
from .email import ProdEmailProvider  # noqa: F401
from .identity import ProdIdentityProvider  # noqa: F401
from .login import ProdLoginProvider  # noqa: F401

__all__ = [
    "EmailProvider",
    "IdentityProvider",
    "LoginProvider",
    "ProdEmailProvider",
    "ProdIdentityProvider",
    "ProdLoginProvider",
]
