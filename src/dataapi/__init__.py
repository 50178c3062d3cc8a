"""
dataapi: authenticated CRUD client for Atom-based data APIs

Architecture Overview:
- auth: ClientLogin session tokens and OAuth 1.0a (signing + token exchange)
- atom: Feed and Entry objects over ElementTree
- service: request descriptors, the request executor and the CRUD façade
- http: requests-backed transport and diagnostic sinks
- config, logging, exceptions: shared infrastructure
"""

__version__ = "0.3.0"

from .atom import Entry, Feed
from .auth import Authenticator, ClientLoginAuth, OAuthAuthenticator, OAuthState, TokenPair
from .config import ClientLoginConfig, DataAPISettings, OAuthConfig, ServiceConfig
from .exceptions import DataAPIError
from .namespaces import Namespace, NamespaceResolver
from .service import RequestDescriptor, ResponseEnvelope, Service, create_service

__all__ = [
    "Entry",
    "Feed",
    "Authenticator",
    "ClientLoginAuth",
    "OAuthAuthenticator",
    "OAuthState",
    "TokenPair",
    "ServiceConfig",
    "ClientLoginConfig",
    "OAuthConfig",
    "DataAPISettings",
    "DataAPIError",
    "Namespace",
    "NamespaceResolver",
    "RequestDescriptor",
    "ResponseEnvelope",
    "Service",
    "create_service",
]
