"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class LoginRequiredError(InterfaceError):
    """Request needs a session but has none (or an invalid one)."""

    pass


class MissingCapabilityError(InterfaceError):
    """Session lacks a capability the resource requires."""

    def __init__(self, capability: str) -> None:
        self.capability = capability
        super().__init__(f"Missing capability: {capability}")
