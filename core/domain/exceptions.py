"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""
from typing import List, Optional


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


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found or belongs to another owner."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class InvalidLicenseDataError(LicenseException):
    """Raised when license fields violate a business rule."""

    def __init__(self, message: str = "Invalid license data"):
        super().__init__(message, code="INVALID_LICENSE_DATA")


class CSVImportException(DomainException):
    """Base exception for CSV import errors."""

    pass


class CSVFormatError(CSVImportException):
    """Raised when an uploaded CSV payload cannot be decoded."""

    def __init__(self, message: str = "CSV file could not be read"):
        super().__init__(message, code="CSV_FORMAT_ERROR")


class CSVValidationError(CSVImportException):
    """
    Raised when one or more CSV rows fail validation.

    Carries every row error so the caller can show them all at once.
    """

    def __init__(self, errors: List[str], message: Optional[str] = None):
        super().__init__(
            message or f"CSV validation failed with {len(errors)} error(s)",
            code="CSV_VALIDATION_ERROR",
        )
        self.errors = list(errors)


class AccountException(DomainException):
    """Base exception for account-related errors."""

    pass


class ProfileNotFoundError(AccountException):
    """Raised when a user profile is not found."""

    def __init__(self, message: str = "Profile not found"):
        super().__init__(message, code="PROFILE_NOT_FOUND")


class InvalidCredentialsError(AccountException):
    """Raised when an email/password pair does not match a user."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidAccessTokenError(AccountException):
    """Raised when an access token is unknown or expired."""

    def __init__(self, message: str = "Invalid access token"):
        super().__init__(message, code="INVALID_ACCESS_TOKEN")


class EmailAlreadyRegisteredError(AccountException):
    """Raised when registering an email that already has an account."""

    def __init__(self, message: str = "Email is already registered"):
        super().__init__(message, code="EMAIL_ALREADY_REGISTERED")


class InvalidNotificationPreferenceError(AccountException):
    """Raised when notification preferences are out of range."""

    def __init__(self, message: str = "Invalid notification preference"):
        super().__init__(message, code="INVALID_NOTIFICATION_PREFERENCE")


class NotificationException(DomainException):
    """Base exception for notification errors."""

    pass


class EmailDeliveryError(NotificationException):
    """Raised when the email provider rejects or fails a send."""

    def __init__(self, message: str = "Email delivery failed"):
        super().__init__(message, code="EMAIL_DELIVERY_FAILED")
