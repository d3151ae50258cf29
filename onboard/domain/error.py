"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Carries one message per failed rule so forms can show all of them.
    """

    def __init__(self, errors: list[str] | str):
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("; ".join(self.errors))


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class AlreadyActiveError(BusinessRuleViolationError):
    """Raised when activation is attempted on a user who is no longer pending."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} has already been activated")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UserNotFoundError(NotFoundError):
    """Raised when an identifier has no matching user record."""

    def __init__(self, identifier: str):
        super().__init__("User", identifier)
