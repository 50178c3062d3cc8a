"""
Authenticators.

- base: the Authenticator interface used by the request executor
- client_login: legacy username/password session token
- oauth: OAuth 1.0a signing (via oauthlib) and the three-legged token exchange
"""

from .base import Authenticator
from .client_login import ClientLoginAuth
from .oauth import OAuthAuthenticator, OAuthState, TokenPair

__all__ = [
    "Authenticator",
    "ClientLoginAuth",
    "OAuthAuthenticator",
    "OAuthState",
    "TokenPair",
]
