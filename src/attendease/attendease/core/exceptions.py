class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials, codes or tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced user or record does not exist."""


class ConflictError(DomainError):
    """Raised when a unique field (email, student id) is already taken."""


class DeliveryError(DomainError):
    """Raised when an e-mail could not be handed to the mail server."""
