"""
Per-call request exceptions.

Execution failures cover transport errors and non-success statuses; protocol
failures cover responses that arrived but cannot be trusted or parsed.
"""

from typing import Optional

from .base import DataAPIError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates, RecoverySuggestions

# Keeps error messages readable when a server returns a whole HTML page.
MAX_BODY_IN_MESSAGE = 2048


class RequestExecutionError(DataAPIError):
    """Raised when a request could not be sent or returned a non-success status."""

    error_code = ErrorCodes.REQUEST_FAILED

    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        body: Optional[str] = None,
    ):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.body = body

        if status_code is not None:
            status_line = f"{status_code} {reason or ''}".rstrip()
        else:
            status_line = reason or "no response returned"
        message = ErrorMessageTemplates.REQUEST_FAILED.format(
            url=url, status_line=status_line
        )

        context = ExceptionContext(
            help_text=(
                RecoverySuggestions.for_http_status(status_code)
                if status_code is not None
                else "Check network connectivity and the service URL"
            ),
            error_code=type(self).error_code,
            context={"url": url, "status_code": status_code},
            technical_details=body[:MAX_BODY_IN_MESSAGE] if body else None,
        )
        super().__init__(message, context)


class PreconditionFailedError(RequestExecutionError):
    """Raised on HTTP 412: the If-Match ETag no longer matches the server copy."""

    error_code = ErrorCodes.PRECONDITION_FAILED


class ProtocolError(DataAPIError):
    """Base class for responses that violate the Atom protocol contract."""

    def __init__(self, url: str, message: str, context: Optional[ExceptionContext] = None):
        self.url = url
        super().__init__(message, context)
        self.context.setdefault("url", url)


class UnexpectedContentTypeError(ProtocolError):
    """Raised when a non-empty response body is not application/atom+xml."""

    def __init__(self, url: str, content_type: Optional[str], expected: str):
        self.content_type = content_type
        message = ErrorMessageTemplates.CONTENT_TYPE_MISMATCH.format(
            url=url, expected=expected, content_type=content_type
        )
        context = ExceptionContext(
            error_code=ErrorCodes.CONTENT_TYPE_MISMATCH,
            context={"content_type": content_type},
        )
        super().__init__(url, message, context)


class ResponseParseError(ProtocolError):
    """Raised when a response body cannot be deserialized into the expected type."""

    def __init__(self, url: str, detail: str):
        self.detail = detail
        message = ErrorMessageTemplates.RESPONSE_BROKEN.format(url=url, detail=detail)
        context = ExceptionContext(error_code=ErrorCodes.RESPONSE_BROKEN)
        super().__init__(url, message, context)


class EntryNotEditableError(DataAPIError):
    """Raised when put/delete is attempted on an entry without an edit link."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        message = ErrorMessageTemplates.ENTRY_NOT_EDITABLE.format(
            operation=operation, reason=reason
        )
        context = ExceptionContext(
            help_text="Fetch the entry from the server before modifying it",
            error_code=ErrorCodes.ENTRY_NOT_EDITABLE,
        )
        super().__init__(message, context)
