"""
Per-call request descriptors and response envelopes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type, Union

from requests import Response

from dataapi.constants import HeaderNames

QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical operation: where to send it and what to expect back.

    ``response_type`` is any class with a ``from_xml`` constructor (a Feed or
    Entry subtype). When it is None the executor returns the raw envelope.
    """

    uri: str
    method: Optional[str] = None
    query: Optional[QueryParams] = None
    body: Optional[Union[bytes, str]] = None
    content_type: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    response_type: Optional[Type[Any]] = None

    @property
    def resolved_method(self) -> str:
        if self.method:
            return self.method.upper()
        return "POST" if self.body else "GET"


@dataclass(frozen=True)
class ResponseEnvelope:
    """Raw result of a request that was not deserialized."""

    url: str
    status_code: int
    reason: str
    headers: Dict[str, str]
    body: bytes
    content_type: Optional[str] = None

    @classmethod
    def from_response(cls, response: Response) -> "ResponseEnvelope":
        return cls(
            url=response.url,
            status_code=response.status_code,
            reason=response.reason or "",
            headers=dict(response.headers),
            body=response.content,
            content_type=response.headers.get(HeaderNames.CONTENT_TYPE),
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")
