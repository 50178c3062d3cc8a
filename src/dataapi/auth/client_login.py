"""
Legacy username/password session-token authentication (ClientLogin).

Handles the login exchange and stamps the resulting session token, together
with the protocol version header, onto every request.
"""

import logging
from typing import Dict, Optional

import requests
from requests import PreparedRequest

from dataapi.constants import ClientLoginConstants, HeaderNames, MediaTypes
from dataapi.exceptions import (
    AuthenticationError,
    AuthenticationStateError,
    InvalidConfigurationError,
)
from dataapi.http import HttpTransport
from dataapi.logging import LoggingConfiguration, LoggingContext
from dataapi.security import SensitiveDataSanitizer

from .base import Authenticator

logger = logging.getLogger(__name__)


def parse_login_response(body: str) -> Dict[str, str]:
    """Parse the ``Key=value`` lines of a ClientLogin response body."""
    values = {}
    for line in body.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            values[key.strip()] = value.strip()
    return values


class ClientLoginAuth(Authenticator):
    """Session-token authenticator for the legacy login endpoint."""

    scheme = "client_login"

    def __init__(
        self,
        service: str,
        source: str,
        username: str,
        password: str,
        account_type: str = ClientLoginConstants.DEFAULT_ACCOUNT_TYPE,
        gdata_version: str = ClientLoginConstants.DEFAULT_GDATA_VERSION,
        login_url: str = ClientLoginConstants.LOGIN_URL,
        transport: Optional[HttpTransport] = None,
    ):
        for field, value in (
            ("service", service),
            ("source", source),
            ("username", username),
            ("password", password),
        ):
            if not value or not str(value).strip():
                raise InvalidConfigurationError(field, value, "a non-empty string")

        self.service = service
        self.source = source
        self.username = username.strip()
        self._password = password
        self.account_type = account_type
        self.gdata_version = gdata_version
        self.login_url = login_url
        self.transport = transport or HttpTransport(user_agent=source)
        self._auth_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self._auth_token is not None

    def authenticate(self) -> None:
        self.login()

    def login(self) -> None:
        """Exchange username/password for a session token.

        Raises:
            AuthenticationError: the endpoint was unreachable, rejected the
                credentials, or answered without an ``Auth`` token.
        """
        masked = SensitiveDataSanitizer.mask_credential(self.username)
        config = LoggingConfiguration(
            entry_msg=f"Logging in as {masked} ...",
            success_msg=f"Logged in as {masked}.",
            failure_msg=f"Login failed for {masked}.",
            logger=logger,
        )
        with LoggingContext(config):
            payload = {
                "accountType": self.account_type,
                "Email": self.username,
                "Passwd": self._password,
                "service": self.service,
                "source": self.source,
            }
            try:
                response = self.transport.request(
                    "POST",
                    self.login_url,
                    data=payload,
                    headers={HeaderNames.CONTENT_TYPE: MediaTypes.FORM},
                )
            except requests.exceptions.RequestException as e:
                raise AuthenticationError(
                    self.scheme, f"login request failed: {e}", url=self.login_url
                ) from e

            values = parse_login_response(response.text)
            if not 200 <= response.status_code < 300:
                details = values.get("Error") or f"{response.status_code} {response.reason}"
                raise AuthenticationError(
                    self.scheme,
                    details,
                    response.status_code,
                    url=self.login_url,
                    response_body=response.text,
                )

            token = values.get("Auth")
            if not token:
                raise AuthenticationError(self.scheme, "login response carried no Auth token")

            self._auth_token = token

    def sign_request(self, request: PreparedRequest) -> PreparedRequest:
        if self._auth_token is None:
            raise AuthenticationStateError(self.scheme, "call login() before sending requests")
        request.headers[HeaderNames.AUTHORIZATION] = (
            f"{ClientLoginConstants.AUTH_SCHEME} auth={self._auth_token}"
        )
        request.headers[HeaderNames.GDATA_VERSION] = self.gdata_version
        return request

    def __repr__(self) -> str:
        masked = SensitiveDataSanitizer.mask_credential(self.username)
        return f"{self.__class__.__name__}(service={self.service!r}, username={masked!r})"
