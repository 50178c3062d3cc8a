"""
dataapi logging package.

- config: LoggingConfig (level from DATAAPI_LOG_LEVEL)
- formatters: JSON, console and Rich output
- manager: LoggingManager singleton and configure_logging()
- context: LoggingContext entry/success/failure messages
"""

from .config import LoggingConfig, create_default_config, parse_level
from .context import LoggingConfiguration, LoggingContext
from .formatters import StructuredFormatter
from .manager import LoggingManager, configure_logging, logging_manager

__all__ = [
    "LoggingConfig",
    "create_default_config",
    "parse_level",
    "LoggingManager",
    "configure_logging",
    "logging_manager",
    "LoggingContext",
    "LoggingConfiguration",
    "StructuredFormatter",
]
