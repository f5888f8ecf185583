"""
Custom exception classes for the application.

All custom exceptions inherit from base AppException for consistent error handling.
"""


class AppException(Exception):
    """
    Base application exception.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Error message
        code: Error code
        status_code: HTTP status code
    """

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        status_code: int = 500
    ):
        """
        Initialize AppException.

        Args:
            message: Error message
            code: Error code
            status_code: HTTP status code
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(self.message)


# Wallet Authentication Exceptions

class MissingCredentialsError(AppException):
    """Wallet address or signature was not supplied."""

    def __init__(self, message: str = "Wallet address and signature are required!"):
        super().__init__(message=message, code="MISSING_CREDENTIALS", status_code=400)


class SignatureMismatchError(AppException):
    """Recovered signer does not match the claimed wallet address."""

    def __init__(
        self,
        message: str = "Signature verification failed!",
        code: str = "SIGNATURE_MISMATCH"
    ):
        super().__init__(message=message, code=code, status_code=403)


class MalformedSignatureError(SignatureMismatchError):
    """Signature bytes cannot be parsed or recovered to a public key."""

    def __init__(self, message: str = "Signature is malformed"):
        super().__init__(message=message, code="MALFORMED_SIGNATURE")


# Validation Exceptions

class ValidationError(AppException):
    """Malformed input shape."""

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message=message, code="VALIDATION_FAILED", status_code=400)


class DuplicateResourceError(AppException):
    """Resource already exists."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message=message, code="DUPLICATE_RESOURCE", status_code=400)


class InvalidFileTypeError(AppException):
    """Invalid file type."""

    def __init__(self, message: str = "Invalid file type"):
        super().__init__(message=message, code="INVALID_FILE_TYPE", status_code=400)


class FileTooLargeError(AppException):
    """File size exceeds limit."""

    def __init__(self, message: str = "File size exceeds limit"):
        super().__init__(message=message, code="FILE_TOO_LARGE", status_code=413)


# Resource Exceptions

class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message=message, code=code, status_code=404)


class AdminNotFoundError(NotFoundError):
    """Admin not found."""

    def __init__(self, message: str = "Admin not found!"):
        super().__init__(message=message, code="ADMIN_NOT_FOUND")


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, message: str = "User not found!"):
        super().__init__(message=message, code="USER_NOT_FOUND")


class TransactionNotFoundError(NotFoundError):
    """User or embedded transaction not found."""

    def __init__(self, message: str = "User or transaction not found!"):
        super().__init__(message=message, code="TRANSACTION_NOT_FOUND")


class DocumentNotFoundError(NotFoundError):
    """KYC document not found."""

    def __init__(self, message: str = "Document not found!"):
        super().__init__(message=message, code="DOCUMENT_NOT_FOUND")


class ContactNotFoundError(NotFoundError):
    """Contact not found."""

    def __init__(self, message: str = "Contact not found!"):
        super().__init__(message=message, code="CONTACT_NOT_FOUND")


class ThemeNotFoundError(NotFoundError):
    """CSS theme not found."""

    def __init__(self, message: str = "CSS properties not found!"):
        super().__init__(message=message, code="THEME_NOT_FOUND")


# Infrastructure Exceptions

class DatabaseError(AppException):
    """Database error."""

    def __init__(self, message: str = "Database error"):
        super().__init__(message=message, code="DATABASE_ERROR", status_code=500)


class ConfigurationError(AppException):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str = "Server is not configured for this operation"):
        super().__init__(message=message, code="CONFIGURATION_ERROR", status_code=500)


class InternalServerError(AppException):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message=message, code="INTERNAL_SERVER_ERROR", status_code=500)
