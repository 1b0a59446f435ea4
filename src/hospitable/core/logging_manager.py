"""Centralized Logging Management for the Hospitable client

Handles handler configuration and formatting for the ``hospitable`` logger
hierarchy. The root logger is left untouched.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import List, Optional

PACKAGE_LOGGER = "hospitable"


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Format log record with colors for console output."""
        log_message = super().format(record)
        return f"{self.COLORS.get(record.levelname, '')}{log_message}{self.COLORS['RESET']}"


class LoggingManager:
    """Centralized logging configuration and management."""

    _instance: Optional['LoggingManager'] = None
    _initialized: bool = False

    def __new__(cls) -> 'LoggingManager':
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize logging manager (only once)."""
        if self._initialized:
            return

        self.logger = logging.getLogger(PACKAGE_LOGGER)
        self._handlers: List[logging.Handler] = []
        self._console_handler: Optional[logging.Handler] = None
        self._initialized = True

    def configure(self, config) -> logging.Logger:
        """Install handlers on the package logger from a ``LoggingConfig``.

        Handlers installed by a previous call are removed first.

        Args:
            config: LoggingConfig model

        Returns:
            The configured package logger
        """
        self._remove_handlers()

        level = self._resolve_level(config.level)
        self.logger.setLevel(logging.DEBUG)

        if config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(ColoredFormatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
                datefmt='%H:%M:%S'
            ))
            self._add_handler(console_handler)
            self._console_handler = console_handler

        if config.file_path:
            log_file = Path(config.file_path)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self._add_handler(file_handler)

        return self.logger

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger, namespaced under the package logger when needed.

        Args:
            name: Logger name (typically __name__ of the module)
        """
        if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
            name = f"{PACKAGE_LOGGER}.{name}"
        return logging.getLogger(name)

    def set_log_level(self, level: str):
        """Set the logging level for the console handler.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        numeric_level = self._resolve_level(level)
        if self._console_handler is not None:
            self._console_handler.setLevel(numeric_level)

    def _resolve_level(self, level: str) -> int:
        numeric_level = getattr(logging, str(level).upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {level}')
        return numeric_level

    def _add_handler(self, handler: logging.Handler):
        self.logger.addHandler(handler)
        self._handlers.append(handler)

    def _remove_handlers(self):
        for handler in self._handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers = []
        self._console_handler = None
