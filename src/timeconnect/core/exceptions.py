class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are invalid."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or record does not exist."""


class ConflictError(DomainError):
    """Raised when a unique attribute (email, employee ID) is already taken."""


class DuplicateRecordError(DomainError):
    """Raised by repositories when a storage-level unique key is violated."""
