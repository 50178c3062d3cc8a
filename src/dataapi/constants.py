"""
Protocol constants: endpoints, media types, header names and namespaces.
"""


class NamespaceConstants:
    """XML namespaces wired into the Atom model."""

    ATOM = "http://www.w3.org/2005/Atom"
    APP = "http://www.w3.org/2007/app"
    GD_PREFIX = "gd"
    GD = "http://schemas.google.com/g/2005"


class MediaTypes:
    """Media types produced and accepted by the request layer."""

    ATOM = "application/atom+xml"
    FORM = "application/x-www-form-urlencoded"


class HeaderNames:
    """Wire header names."""

    AUTHORIZATION = "Authorization"
    GDATA_VERSION = "GData-Version"
    CONTENT_TYPE = "Content-Type"
    IF_MATCH = "If-Match"
    USER_AGENT = "User-Agent"


class NetworkConstants:
    """Transport defaults."""

    DEFAULT_REQUEST_TIMEOUT = 30
    DEFAULT_USER_AGENT = "dataapi"
    HTTP_PRECONDITION_FAILED = 412


class ClientLoginConstants:
    """Legacy username/password session token scheme."""

    LOGIN_URL = "https://www.google.com/accounts/ClientLogin"
    DEFAULT_ACCOUNT_TYPE = "HOSTED_OR_GOOGLE"
    DEFAULT_GDATA_VERSION = "2.0"
    AUTH_SCHEME = "GoogleLogin"


class OAuthConstants:
    """OAuth 1.0a provider endpoints and defaults."""

    REQUEST_TOKEN_URL = "https://www.google.com/accounts/OAuthGetRequestToken"
    AUTHORIZE_TOKEN_URL = "https://www.google.com/accounts/OAuthAuthorizeToken"
    ACCESS_TOKEN_URL = "https://www.google.com/accounts/OAuthGetAccessToken"

    VERSION = "1.0"
    OUT_OF_BAND_CALLBACK = "oob"
    HMAC_SHA1 = "HMAC-SHA1"
    PLAINTEXT = "PLAINTEXT"
    DEFAULT_SIGNATURE_METHOD = HMAC_SHA1

    DEFAULT_HOSTED_DOMAIN = "default"
    DEFAULT_LANGUAGE = "en"
    MOBILE_TEMPLATE = "mobile"
