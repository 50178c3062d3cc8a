"""
Authentication-related exceptions.

Raised when a login exchange or an OAuth handshake step fails, or when an
authenticator is asked to sign before it holds usable credentials.
"""

from typing import Optional

from .base import DataAPIError, ExceptionContext
from .request import MAX_BODY_IN_MESSAGE
from .templates import ErrorCodes, ErrorMessageTemplates, RecoverySuggestions


class AuthenticationError(DataAPIError):
    """Raised when authentication with the service fails."""

    def __init__(
        self,
        scheme: str,
        details: Optional[str] = None,
        http_code: Optional[int] = None,
        url: Optional[str] = None,
        response_body: Optional[str] = None,
    ):
        self.scheme = scheme
        self.http_code = http_code
        self.url = url
        self.response_body = response_body

        message = ErrorMessageTemplates.AUTH_FAILED.format(scheme=scheme)
        if details:
            message += f" - {details}"

        technical_details = None
        if http_code == 401:
            technical_details = "HTTP 401 Unauthorized - Invalid credentials"
        elif http_code == 403:
            technical_details = "HTTP 403 Forbidden - Credentials rejected by the provider"
        if response_body:
            body_line = f"Response body: {response_body.strip()[:MAX_BODY_IN_MESSAGE]}"
            technical_details = (
                f"{technical_details}\n{body_line}" if technical_details else body_line
            )

        context_values = {"scheme": scheme, "http_code": http_code}
        if url:
            context_values["url"] = url

        context = ExceptionContext(
            help_text=RecoverySuggestions.for_auth_error(scheme),
            error_code=ErrorCodes.AUTH_FAILED,
            context=context_values,
            technical_details=technical_details,
        )
        super().__init__(message, context)


class AuthenticationStateError(AuthenticationError):
    """Raised when an authenticator is used before it holds a token."""

    def __init__(self, scheme: str, reason: str):
        self.scheme = scheme
        self.http_code = None
        self.url = None
        self.response_body = None
        message = ErrorMessageTemplates.AUTH_NOT_READY.format(
            scheme=scheme, reason=reason
        )
        context = ExceptionContext(
            error_code=ErrorCodes.AUTH_NOT_READY,
            context={"scheme": scheme},
        )
        DataAPIError.__init__(self, message, context)
