"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""
from typing import Optional


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicensingException(DomainException):
    """Base exception for license lifecycle errors."""

    pass


class TransportError(LicensingException):
    """Raised when the licensing authority cannot be reached or times out."""

    def __init__(self, message: str = "Could not reach the licensing API"):
        super().__init__(message, code="TRANSPORT_ERROR")


class UnexpectedResponseFormat(LicensingException):
    """Raised when a 2xx response is missing required fields."""

    def __init__(self, message: str = "Unexpected response format from the licensing API"):
        super().__init__(message, code="UNEXPECTED_RESPONSE_FORMAT")


class RemoteRejected(LicensingException):
    """Raised when the licensing authority answers with a non-2xx status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(
            message or f"Licensing API rejected the request (HTTP {status_code})",
            code="REMOTE_REJECTED",
        )
        self.status_code = status_code


class NotFound(LicensingException):
    """Raised when no storage map entry exists for a plugin."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseNotProvisionedError(NotFound):
    """Raised when an entry exists but no license id was stored for it."""

    def __init__(self, message: str = "License has not been provisioned"):
        super().__init__(message)
        self.code = "LICENSE_NOT_PROVISIONED"


class PersistenceException(DomainException):
    """Base exception for errors of the local license records."""

    pass


class DecryptionError(PersistenceException):
    """Raised when persisted license data is present but unreadable."""

    def __init__(self, message: str = "Stored license data could not be decrypted"):
        super().__init__(message, code="DECRYPTION_ERROR")


class StorageError(PersistenceException):
    """Raised when the key-value store rejects a write."""

    def __init__(self, message: str = "Could not persist license data"):
        super().__init__(message, code="STORAGE_ERROR")
