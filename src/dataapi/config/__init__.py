"""
Configuration for dataapi.

Usage:
    from dataapi.config import ServiceConfig, DataAPISettings

    config = ServiceConfig(service="wise", source="my-app", namespaces={"gs": GS_NS})
    settings = DataAPISettings()  # reads DATAAPI_* and GOOGLE_DATAAPI_DEBUG
"""

from .models import ClientLoginConfig, OAuthConfig, ServiceConfig, coerce_uri
from .settings import DataAPISettings

__all__ = [
    "ServiceConfig",
    "ClientLoginConfig",
    "OAuthConfig",
    "DataAPISettings",
    "coerce_uri",
]
