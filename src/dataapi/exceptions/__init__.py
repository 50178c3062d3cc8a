"""
dataapi Exception Hierarchy

Exception Hierarchy:
    DataAPIError (base)
    ├── AuthenticationError
    │   └── AuthenticationStateError
    ├── ConfigurationError
    │   ├── InvalidConfigurationError
    │   ├── MissingConfigurationError
    │   └── NamespaceNotDefinedError
    ├── RequestExecutionError
    │   └── PreconditionFailedError
    ├── ProtocolError
    │   ├── UnexpectedContentTypeError
    │   └── ResponseParseError
    └── EntryNotEditableError
"""

from .auth import AuthenticationError, AuthenticationStateError
from .base import DataAPIError, ExceptionContext
from .config import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
    NamespaceNotDefinedError,
)
from .request import (
    EntryNotEditableError,
    PreconditionFailedError,
    ProtocolError,
    RequestExecutionError,
    ResponseParseError,
    UnexpectedContentTypeError,
)

__all__ = [
    # Base
    "DataAPIError",
    "ExceptionContext",
    # Authentication
    "AuthenticationError",
    "AuthenticationStateError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "NamespaceNotDefinedError",
    # Requests
    "RequestExecutionError",
    "PreconditionFailedError",
    "ProtocolError",
    "UnexpectedContentTypeError",
    "ResponseParseError",
    "EntryNotEditableError",
]
