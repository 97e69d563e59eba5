class DomainError(Exception):
    """Base exception for the punch bridge."""


class ValidationError(DomainError):
    """Raised when client input is invalid (never reaches the store)."""


class AuthenticationError(DomainError):
    """Raised when the API bearer token is missing or wrong."""


class StorageError(DomainError):
    """Raised when the storage layer fails to read or write punches."""


class ConfigurationError(DomainError):
    """Raised at startup when required settings are missing or invalid."""
