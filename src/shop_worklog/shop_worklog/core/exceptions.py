class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised when a uniqueness constraint would be violated."""

    status_code = 409


class StorageError(DomainError):
    """Raised when the backing store fails in a way not classified above."""

    status_code = 500
