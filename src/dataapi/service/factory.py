"""
Build a ready-to-use Service from configuration.

Selects the authentication scheme from what is configured: OAuth when an
OAuthConfig is given, ClientLogin when a username and password exist.
No network I/O happens here; call ``service.authenticate()`` afterwards.
"""

import logging
from typing import Optional

from dataapi.auth import Authenticator, ClientLoginAuth, OAuthAuthenticator, TokenPair
from dataapi.config import ClientLoginConfig, DataAPISettings, OAuthConfig, ServiceConfig
from dataapi.exceptions import MissingConfigurationError
from dataapi.http import HttpTransport, LoggingDiagnosticSink

from .service import Service

logger = logging.getLogger(__name__)


def create_oauth_authenticator(
    config: OAuthConfig, transport: Optional[HttpTransport] = None
) -> OAuthAuthenticator:
    access_token = None
    if config.access_token is not None:
        access_token = TokenPair(config.access_token, config.access_token_secret)
    return OAuthAuthenticator(
        consumer_key=config.consumer_key,
        consumer_secret=config.consumer_secret,
        scope=config.scope,
        callback=config.callback,
        signature_method=config.signature_method,
        authorize_token_hd=config.authorize_token_hd,
        authorize_token_hl=config.authorize_token_hl,
        mobile=config.mobile,
        request_token_url=config.request_token_url,
        authorize_token_url=config.authorize_token_url,
        access_token_url=config.access_token_url,
        access_token=access_token,
        transport=transport,
    )


def create_client_login_authenticator(
    service_config: ServiceConfig,
    config: ClientLoginConfig,
    transport: Optional[HttpTransport] = None,
) -> ClientLoginAuth:
    return ClientLoginAuth(
        service=service_config.service,
        source=service_config.source,
        username=config.username,
        password=config.password,
        account_type=config.account_type,
        gdata_version=service_config.gdata_version,
        login_url=config.login_url,
        transport=transport,
    )


def _apply_settings(oauth: OAuthConfig, settings: DataAPISettings) -> OAuthConfig:
    """Fill consumer credentials and a persisted access token from the environment."""
    update = {}
    if not oauth.consumer_key and settings.consumer_key:
        update["consumer_key"] = settings.consumer_key
    if not oauth.consumer_secret and settings.consumer_secret:
        update["consumer_secret"] = settings.consumer_secret
    if oauth.access_token is None and settings.access_token and settings.access_token_secret:
        update["access_token"] = settings.access_token
        update["access_token_secret"] = settings.access_token_secret
    oauth = oauth.model_copy(update=update) if update else oauth

    if not oauth.consumer_key:
        raise MissingConfigurationError("consumer_key", "DATAAPI_CONSUMER_KEY")
    if not oauth.consumer_secret:
        raise MissingConfigurationError("consumer_secret", "DATAAPI_CONSUMER_SECRET")
    return oauth


def create_service(
    config: ServiceConfig,
    settings: Optional[DataAPISettings] = None,
    oauth: Optional[OAuthConfig] = None,
    client_login: Optional[ClientLoginConfig] = None,
) -> Service:
    """Create a Service whose authenticator matches the available credentials.

    Args:
        config: Service name, source, namespaces and transport options
        settings: Environment settings; read from the process when omitted
        oauth: OAuth options; consumer credentials and a persisted access
            token missing from it are taken from ``settings``
        client_login: Explicit ClientLogin credentials

    Raises:
        MissingConfigurationError: no usable credentials were found.
    """
    settings = settings or DataAPISettings()
    timeout = settings.timeout or config.timeout
    transport = HttpTransport(timeout=timeout, user_agent=config.source)

    authenticator: Authenticator
    if oauth is not None:
        authenticator = create_oauth_authenticator(_apply_settings(oauth, settings), transport)
    elif client_login is not None:
        authenticator = create_client_login_authenticator(config, client_login, transport)
    elif settings.has_client_login_credentials:
        authenticator = create_client_login_authenticator(
            config,
            ClientLoginConfig(username=settings.username, password=settings.password),
            transport,
        )
    else:
        raise MissingConfigurationError("username", "DATAAPI_USERNAME")

    diagnostics = None
    if config.debug or settings.debug:
        diagnostics = LoggingDiagnosticSink(level=logging.WARNING)

    logger.debug(f"Creating {config.service} service with {authenticator.scheme} authentication")
    return Service(
        authenticator,
        config.namespaces,
        transport=transport,
        diagnostics=diagnostics,
    )
