"""
Error Handling Module

Defines domain exceptions and error categories for the application.
Domain exceptions are pure and have no external dependencies.
Application exceptions bridge domain errors to user-facing API responses.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    INVALID_REQUEST = "invalid_request"
    INVALID_FILE_ID = "invalid_file_id"
    FILE_NOT_FOUND = "file_not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    LENGTH_REQUIRED = "length_required"
    FILE_TOO_LARGE = "file_too_large"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    STORAGE_FAILED = "storage_failed"
    SYSTEM_ERROR = "system_error"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.INVALID_REQUEST: {
        "title": "Invalid Request",
        "message": "The request is missing required information or contains invalid data.",
        "action": "Please check your input and try again.",
    },
    ErrorCategory.INVALID_FILE_ID: {
        "title": "Invalid File Identifier",
        "message": "The file identifier contains characters that are not allowed.",
        "action": "Use the identifier exactly as it was returned by the upload.",
    },
    ErrorCategory.FILE_NOT_FOUND: {
        "title": "File Not Found",
        "message": "The requested file could not be found or has expired.",
        "action": "Please upload the file again.",
    },
    ErrorCategory.UNAUTHORIZED: {
        "title": "Unauthorized",
        "message": "The token is not valid.",
        "action": "Send a valid token in the Authorization header as 'Bearer <token>'.",
    },
    ErrorCategory.FORBIDDEN: {
        "title": "Forbidden",
        "message": "You can not upload a file with this content type.",
        "action": "Ask the administrator to allow this file type for your token.",
    },
    ErrorCategory.LENGTH_REQUIRED: {
        "title": "Length Required",
        "message": "The request must declare its Content-Length.",
        "action": "Send the request with a Content-Length header.",
    },
    ErrorCategory.FILE_TOO_LARGE: {
        "title": "File Too Large",
        "message": "The uploaded file exceeds the maximum allowed size.",
        "action": "Upload a smaller file.",
    },
    ErrorCategory.UNSUPPORTED_MEDIA_TYPE: {
        "title": "Unsupported Content Type",
        "message": "The content type of the file is not valid.",
        "action": "Upload one of the supported file types.",
    },
    ErrorCategory.STORAGE_FAILED: {
        "title": "Storage Failed",
        "message": "The file could not be stored.",
        "action": "Please try the upload again.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions are pure and have no external dependencies.
    They can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class ConfigError(DomainError):
    """Raised when a configuration value is missing or invalid."""
    pass


class InvalidFileIdError(DomainError):
    """Raised when a file identifier is not drawn from the safe charset."""

    def __init__(self, file_id: Any):
        super().__init__(f"Invalid file id: {file_id!r}")
        self.file_id = file_id


class InvalidLengthError(DomainError):
    """Raised when an identifier length below the minimum is requested."""

    def __init__(self, length: Any):
        super().__init__(f"Invalid id length: {length!r} (must be >= 2)")
        self.length = length


class InvalidTtlError(DomainError):
    """Raised when a TTL is negative and not the Never sentinel."""

    def __init__(self, ttl: Any):
        super().__init__(f"Invalid ttl: {ttl!r} (must be >= 0 or -1 for never)")
        self.ttl = ttl


class StorageError(DomainError):
    """Base exception for content and metadata storage operations."""
    pass


class StoredFileNotFoundError(StorageError):
    """Raised when no content (or no metadata) exists for a file id."""

    def __init__(self, file_id: str):
        super().__init__(f"File not found: {file_id}")
        self.file_id = file_id


class FileIdConflictError(StorageError):
    """Raised when a file id is already taken in a store."""

    def __init__(self, file_id: str):
        super().__init__(f"File id already exists: {file_id}")
        self.file_id = file_id


class IdExhaustedError(StorageError):
    """Raised when no free file id could be minted within the retry bound."""

    def __init__(self, attempts: int):
        super().__init__(f"Could not generate a free file id after {attempts} attempts")
        self.attempts = attempts


class ContentWriteError(StorageError):
    """
    Raised when streaming content to the content store fails.

    The ``written`` flag tells whether a (possibly partial) file was left on
    disk, so the caller can decide whether it has to be removed.
    """

    def __init__(self, message: str, written: bool, original_error: Exception = None):
        super().__init__(message, original_error)
        self.written = written


class StorageWriteFailedError(StorageError):
    """Raised when a store operation failed and was rolled back."""
    pass


# ============================================================================
# Application Layer Exceptions (Can have infrastructure concerns)
# ============================================================================

class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    This is an application-layer concern that bridges domain errors
    with user-facing error messages and HTTP responses.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for logging
            context: Additional context information
        """
        self.category = category
        self.technical_message = technical_message or ""
        self.context = context or {}

        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        technical_message: Technical error details for logging
        context: Additional context information
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message, context)
    return error.to_dict(), status_code
