"""
Base exception classes for dataapi.

Every error raised by the library derives from DataAPIError and carries a
short correlation ID that also appears in log records, so a failure reported
by a caller can be matched to the request that produced it.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass
class ExceptionContext:
    """Optional details attached to a dataapi exception."""

    help_text: Optional[str] = None
    error_code: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    technical_details: Optional[str] = None
    correlation_id: Optional[str] = None


class DataAPIError(Exception):
    """Base exception for all dataapi errors.

    Attributes:
        message: The error message
        help_text: What the caller can do about it, if anything
        error_code: Stable code for programmatic handling
        context: Structured details such as url and status_code
        technical_details: Raw material for debugging (e.g. a response body)
        correlation_id: Short unique ID for matching the error to log records
    """

    def __init__(self, message: str, context: Optional[ExceptionContext] = None):
        context = context or ExceptionContext()
        self.message = message
        self.help_text = context.help_text
        self.error_code = context.error_code
        self.context = dict(context.context)
        self.technical_details = context.technical_details
        self.correlation_id = context.correlation_id or uuid.uuid4().hex[:8]
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(message)

    def __str__(self) -> str:
        lines = [self.message]
        if self.technical_details:
            lines.append(f"Details: {self.technical_details}")
        if self.help_text:
            lines.append(f"Help: {self.help_text}")
        known = ", ".join(f"{k}={v}" for k, v in self.context.items() if v is not None)
        if known:
            lines.append(f"Context: {known}")
        lines.append(f"Error ID: {self.correlation_id}")
        return "\n\t".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for structured logs."""
        data = {
            "error_type": type(self).__name__,
            "message": self.message,
            "error_code": self.error_code,
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp.isoformat(),
            "context": dict(self.context),
        }
        if self.help_text:
            data["help_text"] = self.help_text
        if self.technical_details:
            data["technical_details"] = self.technical_details
        return data

    def add_context(self, **kwargs) -> "DataAPIError":
        """Attach more structured details and return the same exception."""
        self.context.update(kwargs)
        return self
