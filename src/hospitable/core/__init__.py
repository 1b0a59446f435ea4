"""Core modules for the Hospitable client.

Configuration, logging and the shared error taxonomy. The client itself
lives in ``hospitable.core.application``.
"""

from .config_manager import (
    APIConfig,
    AuthConfig,
    ClientConfig,
    ConfigManager,
    LoggingConfig,
    PaginationConfig
)
from .error_handler import (
    AuthenticationError,
    ConfigurationError,
    ErrorHandler,
    ErrorSeverity,
    HospitableError,
    ValidationError
)
from .logging_manager import LoggingManager

__all__ = [
    "APIConfig",
    "AuthConfig",
    "ClientConfig",
    "ConfigManager",
    "LoggingConfig",
    "PaginationConfig",
    "AuthenticationError",
    "ConfigurationError",
    "ErrorHandler",
    "ErrorSeverity",
    "HospitableError",
    "ValidationError",
    "LoggingManager"
]
