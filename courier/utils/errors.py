"""Centralized error handling module."""

from enum import Enum
from typing import Any, Dict

from courier.utils.logging import get_logger

_logger = None

STATUS_MESSAGE_LIMIT = 100


def _get_logger():
    """Get logger with lazy initialisation."""
    global _logger
    if _logger is None:
        _logger = get_logger(__name__)
    return _logger


## Error Categories


class ErrorCategory(Enum):
    """Categories of errors for better handling."""

    NETWORK = "network"
    VALIDATION = "validation"
    COMPOSE = "compose"
    FILE_SYSTEM = "file_system"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


## Custom Exceptions


class CourierError(Exception):
    """Base exception for all Courier errors."""

    category = ErrorCategory.UNKNOWN
    user_message = "An error occurred"

    def __init__(
        self, message: str | None = None, details: Dict[str, Any] | None = None
    ):
        """Initialise CourierError with optional message and details."""
        self.message = message or self.user_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error details to a dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


## Network Errors


class NetworkError(CourierError):
    """Base exception for errors talking to the mail service."""

    category = ErrorCategory.NETWORK
    user_message = "A network error occurred"


class RequestTimeoutError(NetworkError):
    """Exception for requests that did not finish in time."""

    user_message = "The request timed out"


class DraftSaveError(NetworkError):
    """Exception for failed draft create/update calls."""

    user_message = "Failed to save draft"


class SendError(NetworkError):
    """Exception for failed send calls."""

    user_message = "Failed to send message"


## Validation Errors


class ValidationError(CourierError):
    """Base exception for validation-related errors."""

    category = ErrorCategory.VALIDATION
    user_message = "Invalid input"


class InvalidRecipientError(ValidationError):
    """Exception for a malformed recipient address."""

    user_message = "Invalid email address format"


class MissingRequiredFieldError(ValidationError):
    """Exception for missing required fields."""

    user_message = "A required field is missing"


## Compose Errors


class ComposeStateError(CourierError):
    """Base exception for compose session state violations."""

    category = ErrorCategory.COMPOSE
    user_message = "Invalid compose state"


class DraftBindingError(ComposeStateError):
    """Exception when a session's draft handle would be rebound."""

    user_message = "Draft is already bound to a different ID"


## File System Errors


class FileSystemError(CourierError):
    """Base exception for file system-related errors."""

    category = ErrorCategory.FILE_SYSTEM
    user_message = "A file system error occurred"


## Configuration Errors


class ConfigurationError(CourierError):
    """Base exception for configuration-related errors."""

    category = ErrorCategory.CONFIGURATION
    user_message = "A configuration error occurred"


class MissingConfigError(ConfigurationError):
    """Exception for missing configuration settings."""

    user_message = "Missing configuration settings"


class InvalidConfigError(ConfigurationError):
    """Exception for invalid configuration settings."""

    user_message = "Invalid configuration settings"


## Error Handler


class ErrorHandler:
    """Centralized error handling and logging."""

    @staticmethod
    def handle(
        error: BaseException, context: str = "", log_traceback: bool = True
    ) -> Dict[str, Any]:
        """Handle errors with logging and user-friendly message."""
        if isinstance(error, CourierError):
            _get_logger().error(f"{context}: {error.message}", extra=error.details)
            if log_traceback:
                _get_logger().exception(error)
            return error.to_dict()
        else:
            _get_logger().error(f"{context}: {str(error)}")
            if log_traceback:
                _get_logger().exception(error)
            return {
                "error_type": "UnknownError",
                "category": ErrorCategory.UNKNOWN.value,
                "message": str(error),
                "details": {"context": context},
            }


## Utility Functions


def format_error_message(error: BaseException) -> str:
    """Format an error message for display."""
    if isinstance(error, CourierError):
        return error.message
    message = str(error)
    return message or error.__class__.__name__


def truncate_message(message: str, limit: int = STATUS_MESSAGE_LIMIT) -> str:
    """Cap a status line at ``limit`` characters, ending in an ellipsis."""
    if len(message) <= limit:
        return message
    return message[: limit - 3] + "..."
