"""
CRUD façade over the request executor.

Encodes the Atom protocol's rules for each operation: which verb, which
headers, and which type the response deserializes into. Updates and deletes
carry the entry's ETag in ``If-Match``; a stale ETag comes back from the
server as :class:`~dataapi.exceptions.PreconditionFailedError` and is left to
the caller to resolve by re-fetching.
"""

import logging
from typing import Mapping, Optional, Type, TypeVar

from dataapi.atom import Entry, Feed
from dataapi.auth import Authenticator
from dataapi.constants import HeaderNames, MediaTypes, NetworkConstants
from dataapi.exceptions import EntryNotEditableError
from dataapi.http import DiagnosticSink, HttpTransport
from dataapi.namespaces import Namespace, NamespaceResolver

from .executor import RequestExecutor
from .request import QueryParams, RequestDescriptor, ResponseEnvelope

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=Entry)
FeedT = TypeVar("FeedT", bound=Feed)


class Service:
    """Authenticated access to one feed-based service.

    Example:
        >>> auth = ClientLoginAuth("wise", "my-app", "user@example.com", "secret")
        >>> with Service(auth, namespaces={"gs": GS_NS}, source="my-app") as service:
        ...     service.authenticate()
        ...     feed = service.get_feed(SPREADSHEETS_URL)
        ...     entry = feed.entries[0]
        ...     entry.title = "renamed"
        ...     entry = service.put(entry)
    """

    def __init__(
        self,
        authenticator: Authenticator,
        namespaces: Optional[Mapping[str, str]] = None,
        *,
        source: Optional[str] = None,
        timeout: int = NetworkConstants.DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[HttpTransport] = None,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        self.authenticator = authenticator
        self.resolver = NamespaceResolver(namespaces)
        self.transport = transport or HttpTransport(timeout=timeout, user_agent=source)
        self.executor = RequestExecutor(self.transport, authenticator, diagnostics)

    def authenticate(self) -> None:
        """Perform the authenticator's explicit login/verification step."""
        self.authenticator.authenticate()

    def ns(self, prefix: str) -> Namespace:
        return self.resolver.resolve(prefix)

    def request(self, descriptor: RequestDescriptor):
        return self.executor.execute(descriptor)

    def get_feed(
        self,
        url: str,
        query: Optional[QueryParams] = None,
        feed_class: Type[FeedT] = Feed,
    ) -> FeedT:
        return self.executor.execute(
            RequestDescriptor(uri=url, query=query, response_type=feed_class)
        )

    def get_entry(self, url: str, entry_class: Type[EntryT] = Entry) -> EntryT:
        return self.executor.execute(
            RequestDescriptor(uri=url, response_type=entry_class)
        )

    def post(
        self,
        url: str,
        entry: EntryT,
        headers: Optional[Mapping[str, str]] = None,
    ) -> EntryT:
        return self.executor.execute(
            RequestDescriptor(
                uri=url,
                method="POST",
                body=entry.to_xml(),
                content_type=MediaTypes.ATOM,
                headers=dict(headers or {}),
                response_type=type(entry),
            )
        )

    def put(self, entry: EntryT) -> EntryT:
        return self.executor.execute(
            RequestDescriptor(
                uri=self._edit_url(entry, "updated"),
                method="PUT",
                body=entry.to_xml(),
                content_type=MediaTypes.ATOM,
                headers=self._precondition_headers(entry),
                response_type=type(entry),
            )
        )

    def delete(self, entry: Entry) -> ResponseEnvelope:
        return self.executor.execute(
            RequestDescriptor(
                uri=self._edit_url(entry, "deleted"),
                method="DELETE",
                headers=self._precondition_headers(entry),
            )
        )

    @staticmethod
    def _edit_url(entry: Entry, operation: str) -> str:
        edit_url = entry.edit_url
        if not edit_url:
            raise EntryNotEditableError(operation, "it has no rel='edit' link")
        return edit_url

    @staticmethod
    def _precondition_headers(entry: Entry) -> dict:
        if entry.etag is None:
            logger.warning(
                f"Entry {entry.edit_url} has no ETag; sending without If-Match"
            )
            return {}
        return {HeaderNames.IF_MATCH: entry.etag}

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "Service":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
