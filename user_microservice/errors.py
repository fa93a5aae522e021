"""Domain-level exceptions.

The service raises these to express business rule violations.
Route handlers catch them and map to HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested user does not exist."""


class DuplicateEmailError(DomainError):
    """A user with the same email already exists."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email {email} already exists")


class ConstraintViolationError(DomainError):
    """The database rejected a write on a constraint (unique, not null)."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""
