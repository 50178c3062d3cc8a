"""
HTTP transport for the request layer.

Wraps a ``requests.Session`` behind the narrow prepare/send capability the
request executor and the authenticators consume. Redirects are never followed
(a 3xx surfaces as a non-success status) and no retry adapter is mounted: any
retry policy belongs to the caller.
"""

import logging
from typing import Any, Optional

import requests
from requests import PreparedRequest, Response

from dataapi.constants import HeaderNames, NetworkConstants
from dataapi.security import SensitiveDataSanitizer


class HttpTransport:
    """Blocking HTTP transport shared by a service and its authenticator."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: int = NetworkConstants.DEFAULT_REQUEST_TIMEOUT,
        user_agent: Optional[str] = None,
    ):
        """Initialize the transport.

        Args:
            session: Optional existing session to use
            timeout: Request timeout in seconds
            user_agent: User-Agent header for a newly created session
        """
        self.timeout = timeout
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.session = session or self._create_session(user_agent)

    def _create_session(self, user_agent: Optional[str]) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            HeaderNames.USER_AGENT: user_agent or NetworkConstants.DEFAULT_USER_AGENT,
        })
        return session

    def prepare(self, request: requests.Request) -> PreparedRequest:
        """Merge session defaults (User-Agent, cookies) into ``request``."""
        return self.session.prepare_request(request)

    def send(self, prepared: PreparedRequest) -> Response:
        """Send a prepared request without following redirects."""
        self.logger.debug(
            f"{prepared.method} {SensitiveDataSanitizer.sanitize_url(prepared.url)}"
        )

        # Session.send skips proxy/CA environment lookup; Session.request does it here.
        settings = self.session.merge_environment_settings(
            prepared.url, {}, None, None, None
        )
        response = self.session.send(
            prepared,
            allow_redirects=False,
            timeout=self.timeout,
            **settings,
        )

        self._log_response(response)
        return response

    def request(self, method: str, url: str, **kwargs: Any) -> Response:
        """Convenience one-shot request used by the authentication handshakes."""
        self.logger.debug(f"{method} {SensitiveDataSanitizer.sanitize_url(url)}")

        kwargs.setdefault("timeout", self.timeout)
        kwargs["allow_redirects"] = False
        response = self.session.request(method, url, **kwargs)

        self._log_response(response)
        return response

    def _log_response(self, response: Response) -> None:
        self.logger.debug(
            f"Response: {response.status_code} - "
            f"{len(response.content)} bytes"
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
