"""
Request executor: the single path every service call takes to the network.

Builds the HTTP request from a descriptor, lets the authenticator sign it,
sends it, validates the response and deserializes it. Nothing here retries;
every failure surfaces to the caller with the URL, status and body needed to
diagnose it.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, List, Optional, Tuple
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests

from dataapi.auth import Authenticator
from dataapi.config import coerce_uri
from dataapi.constants import HeaderNames, MediaTypes, NetworkConstants
from dataapi.exceptions import (
    PreconditionFailedError,
    RequestExecutionError,
    ResponseParseError,
    UnexpectedContentTypeError,
)
from dataapi.http import DiagnosticSink, HttpTransport
from dataapi.security import SensitiveDataSanitizer

from .request import QueryParams, RequestDescriptor, ResponseEnvelope

logger = logging.getLogger(__name__)


def build_url(uri: str, query: Optional[QueryParams] = None) -> str:
    """Append ``query`` to ``uri`` in the order given."""
    uri = coerce_uri(uri)
    if not query:
        return uri

    pairs: List[Tuple[str, Any]] = list(query.items()) if hasattr(query, "items") else list(query)
    encoded = urlencode(pairs, doseq=True)

    parts = urlsplit(uri)
    merged = f"{parts.query}&{encoded}" if parts.query else encoded
    return urlunsplit((parts.scheme, parts.netloc, parts.path, merged, parts.fragment))


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class RequestExecutor:
    """Turns request descriptors into signed HTTP round trips."""

    def __init__(
        self,
        transport: HttpTransport,
        authenticator: Authenticator,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        self.transport = transport
        self.authenticator = authenticator
        self.diagnostics = diagnostics

    def execute(self, descriptor: RequestDescriptor) -> Any:
        """Run one request.

        Returns:
            ``descriptor.response_type.from_xml(body)`` when a response type is
            given, otherwise a :class:`ResponseEnvelope`.

        Raises:
            RequestExecutionError: network failure or non-2xx status
                (PreconditionFailedError for 412).
            UnexpectedContentTypeError: non-empty body that is not Atom.
            ResponseParseError: Atom body that does not parse into the type.
        """
        method = descriptor.resolved_method
        url = build_url(descriptor.uri, descriptor.query)
        safe_url = SensitiveDataSanitizer.sanitize_url(url)

        headers = dict(descriptor.headers)
        if descriptor.content_type:
            headers[HeaderNames.CONTENT_TYPE] = descriptor.content_type

        body = descriptor.body
        if isinstance(body, str):
            body = body.encode("utf-8")

        prepared = self.transport.prepare(
            requests.Request(method, url, headers=headers, data=body)
        )
        self.authenticator.sign_request(prepared)

        if self.diagnostics is not None:
            self.diagnostics.record_request(prepared)

        try:
            response = self.transport.send(prepared)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {safe_url} failed: {e}")
            raise RequestExecutionError(safe_url, reason=str(e)) from e

        if self.diagnostics is not None:
            self.diagnostics.record_response(response)

        if not is_success(response.status_code):
            error_class = (
                PreconditionFailedError
                if response.status_code == NetworkConstants.HTTP_PRECONDITION_FAILED
                else RequestExecutionError
            )
            logger.warning(
                f"{method} {safe_url} returned {response.status_code}",
                extra={"method": method, "url": safe_url, "status_code": response.status_code},
            )
            raise error_class(
                safe_url, response.status_code, response.reason, response.text
            )

        content_type = response.headers.get(HeaderNames.CONTENT_TYPE, "")
        if response.content and not content_type.startswith(MediaTypes.ATOM):
            raise UnexpectedContentTypeError(safe_url, content_type, MediaTypes.ATOM)

        if descriptor.response_type is None:
            return ResponseEnvelope.from_response(response)

        try:
            return descriptor.response_type.from_xml(response.content)
        except (ET.ParseError, ValueError) as e:
            raise ResponseParseError(safe_url, str(e)) from e
