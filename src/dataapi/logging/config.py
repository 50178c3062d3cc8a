"""
Logging configuration for applications embedding dataapi.

The library never configures logging on import. An application builds a
LoggingConfig, explicitly or from ``DATAAPI_LOG_LEVEL``, and hands it to
:func:`~dataapi.logging.configure_logging`.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from dataapi.config import DataAPISettings
from dataapi.exceptions import InvalidConfigurationError

FORMAT_TYPES = ("console", "json", "rich")
DEFAULT_LEVEL = logging.WARNING


def parse_level(level: Union[str, int]) -> int:
    """Accept a level number or a name such as ``"debug"``."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise InvalidConfigurationError(
            "log_level", level, "DEBUG, INFO, WARNING, ERROR or CRITICAL"
        )
    return value


class LoggingConfig:
    """How the ``dataapi`` logger hierarchy writes its records.

    Console output always goes to stderr; setting ``file_path`` adds a
    rotating file alongside it.
    """

    def __init__(
        self,
        level: Union[str, int] = DEFAULT_LEVEL,
        format_type: str = "console",
        file_path: Optional[Union[str, Path]] = None,
        max_file_size: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ):
        if format_type not in FORMAT_TYPES:
            raise InvalidConfigurationError(
                "format_type", format_type, " or ".join(FORMAT_TYPES)
            )
        self.level = parse_level(level)
        self.format_type = format_type
        self.file_path = Path(file_path) if file_path else None
        self.max_file_size = max_file_size
        self.backup_count = backup_count

    @classmethod
    def from_settings(cls, settings: DataAPISettings, **overrides) -> "LoggingConfig":
        """Take the level from ``DATAAPI_LOG_LEVEL`` unless overridden."""
        if settings.log_level:
            overrides.setdefault("level", settings.log_level)
        return cls(**overrides)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(level={logging.getLevelName(self.level)!r}, "
            f"format_type={self.format_type!r}, file_path={self.file_path!r})"
        )


def create_default_config() -> LoggingConfig:
    """Console logging at the level named by the environment, WARNING otherwise."""
    return LoggingConfig.from_settings(DataAPISettings())
