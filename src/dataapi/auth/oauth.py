"""
OAuth 1.0a authentication and the three-legged token exchange.

The authenticator moves through four states::

    UNAUTHENTICATED -> REQUEST_TOKEN_OBTAINED -> AUTHORIZATION_URL_ISSUED
                    -> ACCESS_TOKEN_OBTAINED

Request and access tokens are held as ``Optional[TokenPair]``. Once the
request token has been exchanged it is replaced by ``None`` and cannot be
used again. The handshake is not safe for concurrent use; callers sharing an
authenticator across threads must serialize it.

Example:
    >>> auth = OAuthAuthenticator(
    ...     consumer_key="consumer.example.com",
    ...     consumer_secret="mys3cr3t",
    ...     scope=["http://spreadsheets.google.com/feeds/"],
    ... )
    >>> url = auth.get_authorize_token_url()
    >>> # show the user ``url`` and read back the verifier
    >>> auth.get_access_token(verifier)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

import requests
from oauthlib.common import generate_nonce, generate_timestamp
from oauthlib.oauth1 import (
    SIGNATURE_HMAC,
    SIGNATURE_PLAINTEXT,
    SIGNATURE_TYPE_AUTH_HEADER,
    SIGNATURE_TYPE_QUERY,
    Client,
)
from requests import PreparedRequest

from dataapi.constants import HeaderNames, MediaTypes, OAuthConstants
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

SIGNATURE_METHODS = (SIGNATURE_HMAC, SIGNATURE_PLAINTEXT)


@dataclass(frozen=True)
class TokenPair:
    """An OAuth token and its secret."""

    token: str
    secret: str

    @classmethod
    def from_response_body(cls, body: str) -> "TokenPair":
        """Parse ``oauth_token=...&oauth_token_secret=...``."""
        values = parse_qs(body.strip(), keep_blank_values=True)
        token = values.get("oauth_token", [""])[0]
        secret = values.get("oauth_token_secret", [None])[0]
        if not token or secret is None:
            raise ValueError("response does not contain oauth_token and oauth_token_secret")
        return cls(token, secret)

    def __repr__(self) -> str:
        return f"TokenPair(token={self.token!r}, secret='***')"


class OAuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    REQUEST_TOKEN_OBTAINED = "request_token_obtained"
    AUTHORIZATION_URL_ISSUED = "authorization_url_issued"
    ACCESS_TOKEN_OBTAINED = "access_token_obtained"


class OAuthAuthenticator(Authenticator):
    """Signs requests with OAuth 1.0a and drives the token handshake."""

    scheme = "oauth"

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        scope: Sequence[str],
        callback: Optional[str] = None,
        signature_method: str = OAuthConstants.DEFAULT_SIGNATURE_METHOD,
        authorize_token_hd: str = OAuthConstants.DEFAULT_HOSTED_DOMAIN,
        authorize_token_hl: str = OAuthConstants.DEFAULT_LANGUAGE,
        mobile: bool = False,
        request_token_url: str = OAuthConstants.REQUEST_TOKEN_URL,
        authorize_token_url: str = OAuthConstants.AUTHORIZE_TOKEN_URL,
        access_token_url: str = OAuthConstants.ACCESS_TOKEN_URL,
        access_token: Optional[TokenPair] = None,
        transport: Optional[HttpTransport] = None,
    ):
        if not consumer_key:
            raise InvalidConfigurationError("consumer_key", consumer_key, "a non-empty string")
        if not consumer_secret:
            raise InvalidConfigurationError("consumer_secret", "***", "a non-empty string")
        if isinstance(scope, str) or not scope:
            raise InvalidConfigurationError("scope", scope, "a non-empty list of scope URLs")
        if signature_method not in SIGNATURE_METHODS:
            raise InvalidConfigurationError(
                "signature_method", signature_method, " or ".join(SIGNATURE_METHODS)
            )

        self.consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self.scope: Tuple[str, ...] = tuple(scope)
        self.callback = callback
        self.signature_method = signature_method
        self.authorize_token_hd = authorize_token_hd
        self.authorize_token_hl = authorize_token_hl
        self.mobile = mobile
        self.request_token_url = request_token_url
        self.authorize_token_url = authorize_token_url
        self.access_token_url = access_token_url
        self.transport = transport or HttpTransport()

        self._request_token: Optional[TokenPair] = None
        self._access_token: Optional[TokenPair] = access_token
        self._authorization_url_issued = False

    # -- state -----------------------------------------------------------------

    @property
    def request_token(self) -> Optional[TokenPair]:
        return self._request_token

    @property
    def access_token(self) -> Optional[TokenPair]:
        return self._access_token

    @property
    def state(self) -> OAuthState:
        if self._access_token is not None:
            return OAuthState.ACCESS_TOKEN_OBTAINED
        if self._request_token is not None and self._authorization_url_issued:
            return OAuthState.AUTHORIZATION_URL_ISSUED
        if self._request_token is not None:
            return OAuthState.REQUEST_TOKEN_OBTAINED
        return OAuthState.UNAUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self._access_token is not None

    def authenticate(self) -> None:
        if self._access_token is None:
            raise AuthenticationStateError(
                self.scheme,
                "no access token; complete get_authorize_token_url() and "
                "get_access_token(verifier) first",
            )

    # -- handshake ---------------------------------------------------------------

    def get_request_token(self) -> TokenPair:
        """Obtain a fresh request token from the provider."""
        url = _with_query(self.request_token_url, [("scope", ",".join(self.scope))])
        client = self._client(
            SIGNATURE_TYPE_QUERY,
            callback_uri=self.callback or OAuthConstants.OUT_OF_BAND_CALLBACK,
        )
        body = self._handshake_request("request token", client, url)
        self._request_token = self._parse_token(body, "request token")
        self._authorization_url_issued = False
        return self._request_token

    def get_authorize_token_url(self) -> str:
        """URL the user must visit to authorize the request token."""
        if self._request_token is None:
            self.get_request_token()

        query = [
            ("oauth_token", self._request_token.token),
            ("hd", self.authorize_token_hd),
            ("hl", self.authorize_token_hl),
        ]
        if self.mobile:
            query.append(("btmpl", OAuthConstants.MOBILE_TEMPLATE))

        self._authorization_url_issued = True
        return _with_query(self.authorize_token_url, query)

    def get_access_token(self, verifier: Optional[str] = None) -> TokenPair:
        """Exchange the request token (and verifier) for an access token.

        The request token is discarded once the provider has accepted the
        exchange; a failed exchange is not retried.
        """
        if self._request_token is None:
            self.get_request_token()

        request_token = self._request_token
        client = self._client(
            SIGNATURE_TYPE_QUERY,
            request_token.token,
            request_token.secret,
            verifier=verifier,
        )
        body = self._handshake_request("access token", client, self.access_token_url)

        self._request_token = None
        self._authorization_url_issued = False
        self._access_token = self._parse_token(body, "access token")
        return self._access_token

    def _handshake_request(self, step: str, client: Client, url: str) -> str:
        signed_url, _, _ = client.sign(url, http_method="GET")
        safe_url = SensitiveDataSanitizer.sanitize_url(url)

        config = LoggingConfiguration(
            entry_msg=f"Requesting OAuth {step} ...",
            success_msg=f"Obtained OAuth {step}.",
            failure_msg=f"OAuth {step} request failed.",
            logger=logger,
        )
        with LoggingContext(config):
            try:
                response = self.transport.request("GET", signed_url)
            except requests.exceptions.RequestException as e:
                raise AuthenticationError(
                    self.scheme, f"{step} request failed: {e}", url=safe_url
                ) from e

            if not 200 <= response.status_code < 300:
                raise AuthenticationError(
                    self.scheme,
                    f"{step} request failed: {response.status_code} {response.reason}",
                    response.status_code,
                    url=safe_url,
                    response_body=response.text,
                )
            return response.text

    def _parse_token(self, body: str, step: str) -> TokenPair:
        try:
            return TokenPair.from_response_body(body)
        except ValueError as e:
            raise AuthenticationError(self.scheme, f"{step} response is broken: {e}") from e

    def _client(
        self,
        signature_type: str,
        token: Optional[str] = None,
        token_secret: Optional[str] = None,
        **kwargs,
    ) -> Client:
        """An oauthlib client for one signature; nonce and timestamp are fresh."""
        return Client(
            self.consumer_key,
            client_secret=self._consumer_secret,
            resource_owner_key=token,
            resource_owner_secret=token_secret,
            signature_method=self.signature_method,
            signature_type=signature_type,
            nonce=generate_nonce(),
            timestamp=generate_timestamp(),
            **kwargs,
        )

    # -- signing -----------------------------------------------------------------

    def sign_request(self, request: PreparedRequest) -> PreparedRequest:
        if self._access_token is None:
            raise AuthenticationStateError(
                self.scheme, "no access token; complete the token exchange first"
            )

        client = self._client(
            SIGNATURE_TYPE_AUTH_HEADER, self._access_token.token, self._access_token.secret
        )
        # Only form bodies take part in the signature.
        body = _form_body(request)
        headers = {HeaderNames.CONTENT_TYPE: MediaTypes.FORM} if body else None
        _, signed_headers, _ = client.sign(request.url, request.method, body, headers)

        request.headers[HeaderNames.AUTHORIZATION] = signed_headers[HeaderNames.AUTHORIZATION]
        return request

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(consumer_key={self.consumer_key!r}, "
            f"state={self.state.value!r})"
        )


def _with_query(url: str, params: List[Tuple[str, str]]) -> str:
    parts = urlsplit(url)
    query = urlencode(params)
    if parts.query:
        query = f"{parts.query}&{query}"
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _form_body(request: PreparedRequest) -> Optional[str]:
    content_type = request.headers.get(HeaderNames.CONTENT_TYPE, "")
    if not content_type.startswith(MediaTypes.FORM) or not request.body:
        return None
    body = request.body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return body
