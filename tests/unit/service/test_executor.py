"""
Tests for the request executor.
"""

import logging
from unittest.mock import Mock

import pytest
import requests

from dataapi.atom import Entry, Feed
from dataapi.exceptions import (
    PreconditionFailedError,
    ProtocolError,
    RequestExecutionError,
    ResponseParseError,
    UnexpectedContentTypeError,
)
from dataapi.http import HttpTransport, LoggingDiagnosticSink
from dataapi.service import RequestDescriptor, RequestExecutor, ResponseEnvelope, build_url

FEED_URL = "http://example.com/myentry"
ENTRY_URL = "http://example.com/myentry/1"
ATOM = {"Content-Type": "application/atom+xml; charset=UTF-8; type=entry"}


@pytest.fixture
def executor(authenticator, transport):
    return RequestExecutor(transport, authenticator)


@pytest.mark.unit
class TestBuildUrl:
    """Test URL assembly from a descriptor's uri and query."""

    def test_no_query(self):
        assert build_url(FEED_URL) == FEED_URL
        assert build_url(FEED_URL, {}) == FEED_URL

    def test_query_order_is_preserved(self):
        url = build_url(FEED_URL, [("max-results", 10), ("alt", "atom"), ("b", "2")])

        assert url == f"{FEED_URL}?max-results=10&alt=atom&b=2"

    def test_mapping_query(self):
        assert build_url(FEED_URL, {"q": "a b"}) == f"{FEED_URL}?q=a+b"

    def test_existing_query_is_kept(self):
        assert build_url(f"{FEED_URL}?x=0", {"y": "1"}) == f"{FEED_URL}?x=0&y=1"

    def test_repeated_values(self):
        assert build_url(FEED_URL, {"category": ["a", "b"]}) == f"{FEED_URL}?category=a&category=b"

    def test_scheme_is_added(self):
        assert build_url("example.com/myentry") == FEED_URL


@pytest.mark.unit
class TestRequestDescriptor:
    """Test method defaulting."""

    def test_get_without_body(self):
        assert RequestDescriptor(uri=FEED_URL).resolved_method == "GET"

    def test_post_with_body(self):
        assert RequestDescriptor(uri=FEED_URL, body=b"<entry/>").resolved_method == "POST"

    def test_explicit_method_wins(self):
        descriptor = RequestDescriptor(uri=ENTRY_URL, method="put", body=b"<entry/>")

        assert descriptor.resolved_method == "PUT"

    def test_explicit_delete_without_body(self):
        assert RequestDescriptor(uri=ENTRY_URL, method="DELETE").resolved_method == "DELETE"


@pytest.mark.unit
class TestExecuteSuccess:
    """Test successful round trips."""

    def test_get_deserializes_feed(self, executor, requests_mock, feed_xml):
        requests_mock.get(FEED_URL, content=feed_xml, headers=ATOM)

        feed = executor.execute(RequestDescriptor(uri=FEED_URL, response_type=Feed))

        assert isinstance(feed, Feed)
        assert len(feed.entries) == 2

    def test_body_defaults_to_post(self, executor, requests_mock, entry_xml):
        requests_mock.post(FEED_URL, status_code=201, content=entry_xml, headers=ATOM)

        entry = executor.execute(
            RequestDescriptor(
                uri=FEED_URL,
                body=Entry(title="hello").to_xml(),
                content_type="application/atom+xml",
                response_type=Entry,
            )
        )

        assert entry.title == "hello"
        request = requests_mock.last_request
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/atom+xml"
        assert b"hello" in request.body

    def test_text_body_is_encoded(self, executor, requests_mock):
        requests_mock.post(FEED_URL, status_code=204)

        executor.execute(RequestDescriptor(uri=FEED_URL, body="café"))

        assert requests_mock.last_request.body == "café".encode("utf-8")

    def test_query_and_headers_are_sent(self, executor, requests_mock):
        requests_mock.get(FEED_URL, status_code=200)

        executor.execute(
            RequestDescriptor(
                uri=FEED_URL,
                query=[("start-index", 3), ("max-results", 2)],
                headers={"X-Custom": "yes"},
            )
        )

        request = requests_mock.last_request
        assert request.url == f"{FEED_URL}?start-index=3&max-results=2"
        assert request.headers["X-Custom"] == "yes"

    def test_request_is_signed(self, executor, authenticator, requests_mock):
        requests_mock.get(FEED_URL, status_code=200)

        executor.execute(RequestDescriptor(uri=FEED_URL))

        assert requests_mock.last_request.headers["Authorization"] == "Static test-token"
        assert len(authenticator.signed) == 1
        assert requests_mock.last_request.headers["User-Agent"] == "MyService"

    def test_envelope_without_response_type(self, executor, requests_mock, entry_xml):
        requests_mock.get(ENTRY_URL, content=entry_xml, headers=ATOM)

        envelope = executor.execute(RequestDescriptor(uri=ENTRY_URL))

        assert isinstance(envelope, ResponseEnvelope)
        assert envelope.ok
        assert envelope.status_code == 200
        assert envelope.body == entry_xml
        assert envelope.content_type == ATOM["Content-Type"]
        assert "hello" in envelope.text

    def test_empty_body_skips_content_type_check(self, executor, requests_mock):
        requests_mock.delete(ENTRY_URL, status_code=200, headers={"Content-Type": "text/html"})

        envelope = executor.execute(RequestDescriptor(uri=ENTRY_URL, method="DELETE"))

        assert envelope.status_code == 200
        assert envelope.body == b""


@pytest.mark.unit
class TestExecuteFailures:
    """Test that every failure surfaces with enough detail to diagnose it."""

    def test_not_found(self, executor, requests_mock):
        requests_mock.get(ENTRY_URL, status_code=404, reason="Not Found", text="Entry not found")

        with pytest.raises(RequestExecutionError) as exc_info:
            executor.execute(RequestDescriptor(uri=ENTRY_URL, response_type=Entry))

        error = exc_info.value
        assert error.url == ENTRY_URL
        assert error.status_code == 404
        assert error.reason == "Not Found"
        assert error.body == "Entry not found"
        assert "404 Not Found" in error.message
        assert not isinstance(error, PreconditionFailedError)

    def test_precondition_failed(self, executor, requests_mock):
        requests_mock.put(ENTRY_URL, status_code=412, text="Mismatch: etags")

        with pytest.raises(PreconditionFailedError) as exc_info:
            executor.execute(RequestDescriptor(uri=ENTRY_URL, method="PUT", body=b"<entry/>"))

        assert exc_info.value.status_code == 412
        assert isinstance(exc_info.value, RequestExecutionError)
        assert requests_mock.call_count == 1

    def test_redirect_is_not_followed(self, executor, requests_mock):
        requests_mock.get(FEED_URL, status_code=302, headers={"Location": "http://example.com/moved"})
        moved = requests_mock.get("http://example.com/moved", status_code=200)

        with pytest.raises(RequestExecutionError) as exc_info:
            executor.execute(RequestDescriptor(uri=FEED_URL))

        assert exc_info.value.status_code == 302
        assert not moved.called

    def test_network_failure(self, executor, requests_mock):
        requests_mock.get(FEED_URL, exc=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(RequestExecutionError) as exc_info:
            executor.execute(RequestDescriptor(uri=FEED_URL))

        assert exc_info.value.status_code is None
        assert "refused" in exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_unexpected_content_type(self, executor, requests_mock):
        requests_mock.get(
            FEED_URL, text="<html>login</html>", headers={"Content-Type": "text/html"}
        )

        with pytest.raises(UnexpectedContentTypeError) as exc_info:
            executor.execute(RequestDescriptor(uri=FEED_URL, response_type=Feed))

        assert exc_info.value.content_type == "text/html"
        assert isinstance(exc_info.value, ProtocolError)

    def test_unexpected_content_type_without_response_type(self, executor, requests_mock):
        requests_mock.get(FEED_URL, text="{}", headers={"Content-Type": "application/json"})

        with pytest.raises(UnexpectedContentTypeError):
            executor.execute(RequestDescriptor(uri=FEED_URL))

    def test_broken_body(self, executor, requests_mock):
        requests_mock.get(ENTRY_URL, text="<entry", headers=ATOM)

        with pytest.raises(ResponseParseError) as exc_info:
            executor.execute(RequestDescriptor(uri=ENTRY_URL, response_type=Entry))

        assert exc_info.value.url == ENTRY_URL
        assert "is broken" in exc_info.value.message

    def test_wrong_document_type(self, executor, requests_mock, feed_xml):
        requests_mock.get(ENTRY_URL, content=feed_xml, headers=ATOM)

        with pytest.raises(ResponseParseError):
            executor.execute(RequestDescriptor(uri=ENTRY_URL, response_type=Entry))

    def test_error_url_is_sanitized(self, executor, requests_mock):
        url = "http://example.com/feed?oauth_token=secret-token"
        requests_mock.get(url, status_code=500)

        with pytest.raises(RequestExecutionError) as exc_info:
            executor.execute(RequestDescriptor(uri=url))

        assert "secret-token" not in exc_info.value.url

    def test_authenticator_errors_propagate(self, transport, requests_mock):
        authenticator = Mock()
        authenticator.sign_request.side_effect = RuntimeError("not ready")
        executor = RequestExecutor(transport, authenticator)

        with pytest.raises(RuntimeError):
            executor.execute(RequestDescriptor(uri=FEED_URL))

        assert not requests_mock.called


@pytest.mark.unit
class TestDiagnostics:
    """Test the observational diagnostic sink."""

    def test_sink_sees_request_and_response(self, authenticator, transport, requests_mock):
        requests_mock.get(FEED_URL, status_code=200)
        sink = Mock()
        executor = RequestExecutor(transport, authenticator, diagnostics=sink)

        executor.execute(RequestDescriptor(uri=FEED_URL))

        request = sink.record_request.call_args.args[0]
        assert request.headers["Authorization"] == "Static test-token"
        response = sink.record_response.call_args.args[0]
        assert response.status_code == 200

    def test_sink_sees_failed_responses(self, authenticator, transport, requests_mock):
        requests_mock.get(FEED_URL, status_code=500)
        sink = Mock()
        executor = RequestExecutor(transport, authenticator, diagnostics=sink)

        with pytest.raises(RequestExecutionError):
            executor.execute(RequestDescriptor(uri=FEED_URL))

        sink.record_response.assert_called_once()

    def test_no_response_recorded_on_network_failure(self, authenticator, transport, requests_mock):
        requests_mock.get(FEED_URL, exc=requests.exceptions.ConnectTimeout)
        sink = Mock()
        executor = RequestExecutor(transport, authenticator, diagnostics=sink)

        with pytest.raises(RequestExecutionError):
            executor.execute(RequestDescriptor(uri=FEED_URL))

        sink.record_request.assert_called_once()
        sink.record_response.assert_not_called()

    def test_logging_sink_masks_credentials(self, authenticator, transport, requests_mock, caplog):
        requests_mock.get(FEED_URL, text="<feed/>", headers=ATOM)
        executor = RequestExecutor(transport, authenticator, diagnostics=LoggingDiagnosticSink())

        with caplog.at_level(logging.DEBUG, logger="dataapi.diagnostics"):
            executor.execute(RequestDescriptor(uri=FEED_URL))

        dumps = [record.getMessage() for record in caplog.records if record.name == "dataapi.diagnostics"]
        assert len(dumps) == 2
        assert f"GET {FEED_URL}" in dumps[0]
        assert "Authorization: [REDACTED]" in dumps[0]
        assert "test-token" not in dumps[0]
        assert dumps[1].startswith("response:\n200")
        assert "<feed/>" in dumps[1]
