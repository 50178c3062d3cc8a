"""
Formatters for the dataapi log handlers.

JSON output carries the request fields the executor attaches through
``extra=`` (method, url, status_code), so failed calls can be filtered by
status without parsing messages.
"""

import json
import logging
from datetime import datetime, timezone

from rich.console import Console
from rich.logging import RichHandler

REQUEST_FIELDS = ("method", "url", "status_code", "correlation_id")

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name)) for name in REQUEST_FIELDS if hasattr(record, name)
        )

        if record.exc_info:
            error = record.exc_info[1]
            entry["error"] = {
                "type": type(error).__name__,
                "message": getattr(error, "message", str(error)),
                "traceback": self.formatException(record.exc_info),
            }
            # dataapi errors carry the ID printed in their message
            if hasattr(error, "correlation_id"):
                entry.setdefault("correlation_id", error.correlation_id)

        return json.dumps(entry, default=str)


def create_console_formatter() -> logging.Formatter:
    return logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT)


def create_rich_handler() -> logging.Handler:
    """Rich terminal output on stderr; messages are printed without markup."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler
