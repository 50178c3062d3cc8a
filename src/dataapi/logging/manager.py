"""
Installs handlers on the ``dataapi`` logger.

Importing dataapi never touches logging configuration; applications opt in
with :func:`configure_logging`. Only the library's own logger is modified,
never the root logger.
"""

import logging
import logging.handlers
import sys
from typing import List, Optional

from .config import LoggingConfig, create_default_config
from .formatters import StructuredFormatter, create_console_formatter, create_rich_handler

LIBRARY_LOGGER = "dataapi"


class LoggingManager:
    """Owns the handlers dataapi installs so they can be replaced or removed."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.config = None
            instance.handlers = []
            cls._instance = instance
        return cls._instance

    config: Optional[LoggingConfig]
    handlers: List[logging.Handler]

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(LIBRARY_LOGGER)

    def configure(self, config: LoggingConfig) -> None:
        """Replace any previously installed handlers with ones for ``config``."""
        self.reset()
        self.config = config
        self.logger.setLevel(config.level)

        self._install(self._console_handler(config), config)
        if config.file_path is not None:
            self._install(self._file_handler(config), config)

    @staticmethod
    def _console_handler(config: LoggingConfig) -> logging.Handler:
        if config.format_type == "rich":
            return create_rich_handler()
        handler = logging.StreamHandler(sys.stderr)
        if config.format_type == "json":
            handler.setFormatter(StructuredFormatter())
        else:
            handler.setFormatter(create_console_formatter())
        return handler

    @staticmethod
    def _file_handler(config: LoggingConfig) -> logging.Handler:
        config.file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        # Rich output is terminal-only; its file counterpart is JSON.
        if config.format_type == "console":
            handler.setFormatter(create_console_formatter())
        else:
            handler.setFormatter(StructuredFormatter())
        return handler

    def _install(self, handler: logging.Handler, config: LoggingConfig) -> None:
        handler.setLevel(config.level)
        self.logger.addHandler(handler)
        self.handlers.append(handler)

    def reset(self) -> None:
        """Detach and close every handler installed by :meth:`configure`."""
        for handler in self.handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self.handlers = []
        self.config = None


logging_manager = LoggingManager()


def configure_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """Configure the dataapi logger, by default from ``DATAAPI_LOG_LEVEL``."""
    logging_manager.configure(config or create_default_config())
    return logging_manager
