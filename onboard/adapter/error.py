"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """Identity provider error.

    Attributes:
        status_code: HTTP status returned by the provider, if any
        error_code: Provider error code (e.g. "auth0_idp_error"), if any
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)

    @property
    def is_conflict(self) -> bool:
        """Whether the provider rejected the call because the user exists."""
        return self.status_code == 409

    @property
    def is_transient(self) -> bool:
        """Whether repeating the call may succeed.

        Transport failures carry no status code. Rate limiting and server
        errors are worth another attempt; other 4xx replies are not.
        """
        if self.status_code is None:
            return True
        return self.status_code == 429 or self.status_code >= 500


class DeliveryError(AdapterError):
    """Outbound email could not be delivered to the relay."""

    pass
