"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
UNAUTHORIZED = "UNAUTHORIZED"
STORAGE_ERROR = "STORAGE_ERROR"
CRYPTO_UNAVAILABLE = "CRYPTO_UNAVAILABLE"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when attempting to create a resource that would violate a uniqueness constraint."""

    pass


class DomainValidationError(DomainError):
    """Raised when client-supplied data is rejected (e.g. a required form field is blank)."""

    pass


class UnauthorizedError(DomainError):
    """Raised for bad credentials or an invalid, expired or evicted token.

    Deliberately coarse: callers cannot tell which check failed.
    """

    pass


class StorageError(DomainError):
    """Raised when the database fails; the driver exception is chained as ``__cause__``."""

    pass


class CryptoUnavailableError(DomainError):
    """Raised when the password hashing backend cannot be invoked."""

    pass
