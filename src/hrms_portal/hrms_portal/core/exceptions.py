class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConflictError(DomainError):
    """Raised when a record clashes with existing data or its current state."""


class AuthorizationError(DomainError):
    """Raised when the caller cannot be identified for an action."""
