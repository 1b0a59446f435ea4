"""Global Error Handling for the Hospitable client

Error taxonomy shared by every layer of the client, plus a central handler
that logs failures which must not be raised to callers (background token
validation).
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class HospitableError(Exception):
    """Base exception class for the Hospitable client.

    Every failure carries a stable ``kind`` string so callers can branch on
    the failure category without importing each exception class.
    """

    kind = "error"

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        kind: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.severity = severity
        if kind:
            self.kind = kind
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(HospitableError):
    """Error raised when configuration is invalid."""

    kind = "configuration_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, severity=ErrorSeverity.HIGH, details=details)


class AuthenticationError(HospitableError):
    """Error raised by the credential store.

    Kinds: ``no_token``, ``no_credentials``, ``invalid_token``, ``forbidden``.
    """

    kind = "no_credentials"

    def __init__(self, message: str, kind: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, severity=ErrorSeverity.HIGH, kind=kind, details=details)


class ValidationError(HospitableError):
    """Error raised when caller-supplied options fail validation.

    Raised before any network call is attempted.
    """

    kind = "validation_error"

    def __init__(
        self,
        message: str,
        kind: str,
        field: Optional[str] = None,
        invalid: Optional[List[Any]] = None,
        allowed: Optional[List[str]] = None,
    ):
        details = {}
        if field is not None:
            details['field'] = field
        if invalid is not None:
            details['invalid'] = invalid
        if allowed is not None:
            details['allowed'] = allowed
        super().__init__(message, severity=ErrorSeverity.LOW, kind=kind, details=details)
        self.field = field
        self.invalid = invalid
        self.allowed = allowed


class ErrorHandler:
    """Central handler for errors that are logged rather than raised."""

    def __init__(self, logger_name: Optional[str] = None):
        """Initialize error handler."""
        self.logger = logging.getLogger(logger_name or __name__)
        self.error_callbacks: Dict[Type[Exception], Callable[[Exception], None]] = {}

    def register_error_callback(self, exception_type: Type[Exception],
                                callback: Callable[[Exception], None]):
        """Register a callback for specific exception types.

        Args:
            exception_type: The exception type to handle
            callback: Function to call when this exception occurs
        """
        self.error_callbacks[exception_type] = callback

    def handle_error(self, error: Exception, context: Optional[str] = None) -> bool:
        """Handle an error with appropriate logging.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            True if error was handled successfully, False otherwise
        """
        try:
            severity = self._get_error_severity(error)
            error_message = self._format_error_message(error, context)

            self._log_error(error_message, severity)

            callback = self.error_callbacks.get(type(error))
            if callback:
                callback(error)

            return True

        except Exception as handler_error:
            self.logger.error(f"Error handler failed: {handler_error}")
            return False

    def _get_error_severity(self, error: Exception) -> ErrorSeverity:
        """Determine error severity based on exception type."""
        if isinstance(error, HospitableError):
            return error.severity

        severity_map = {
            ConnectionError: ErrorSeverity.HIGH,
            TimeoutError: ErrorSeverity.MEDIUM,
            MemoryError: ErrorSeverity.CRITICAL,
        }

        return severity_map.get(type(error), ErrorSeverity.CRITICAL)

    def _format_error_message(self, error: Exception, context: Optional[str] = None) -> str:
        message = str(error)
        if isinstance(error, HospitableError):
            message = f"[{error.kind}] {message}"
        if context:
            message = f"{context}: {message}"

        return message

    def _log_error(self, message: str, severity: ErrorSeverity):
        log_methods = {
            ErrorSeverity.LOW: self.logger.info,
            ErrorSeverity.MEDIUM: self.logger.warning,
            ErrorSeverity.HIGH: self.logger.error,
            ErrorSeverity.CRITICAL: self.logger.critical,
        }

        log_method = log_methods[severity]
        log_method(message, exc_info=severity == ErrorSeverity.CRITICAL)
