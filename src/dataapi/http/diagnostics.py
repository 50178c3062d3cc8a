"""
Diagnostic sinks for raw request/response dumps.

A sink is purely observational: the executor hands it the prepared request
before sending and the raw response after receiving it. Without a sink
nothing is dumped.
"""

import logging
from typing import Optional, Protocol, Union, runtime_checkable

from requests import PreparedRequest, Response

from dataapi.security import SensitiveDataSanitizer


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives every request the executor sends and every response it gets."""

    def record_request(self, request: PreparedRequest) -> None:
        ...

    def record_response(self, response: Response) -> None:
        ...


def _decode(body: Union[bytes, str, None]) -> str:
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def format_request(request: PreparedRequest) -> str:
    headers = SensitiveDataSanitizer.sanitize_headers(request.headers)
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{name}: {value}" for name, value in headers.items())
    return "\n".join(lines) + "\n\n" + _decode(request.body)


def format_response(response: Response) -> str:
    headers = SensitiveDataSanitizer.sanitize_headers(response.headers)
    lines = [f"{response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in headers.items())
    return "\n".join(lines) + "\n\n" + _decode(response.content)


class LoggingDiagnosticSink:
    """Write raw requests and responses to a logger, credentials masked."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger("dataapi.diagnostics")
        self.level = level

    def record_request(self, request: PreparedRequest) -> None:
        self.logger.log(self.level, "request:\n%s", format_request(request))

    def record_response(self, response: Response) -> None:
        self.logger.log(self.level, "response:\n%s", format_response(response))
