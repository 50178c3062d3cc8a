"""
Errors for bad service settings: rejected values, absent credentials and
unregistered namespace prefixes.
"""

from typing import Any, Optional

from .base import DataAPIError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates


class ConfigurationError(DataAPIError):
    """A service or authenticator was set up with unusable settings."""


class InvalidConfigurationError(ConfigurationError):
    """A setting was supplied but fails validation (timeout, URI, log level...)."""

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        message = ErrorMessageTemplates.CONFIG_INVALID.format(
            field=field, value=value, expected=expected
        )
        context = ExceptionContext(
            help_text=f"Provide a value for '{field}' matching: {expected}",
            error_code=ErrorCodes.CONFIG_INVALID,
        )
        super().__init__(message, context)


class MissingConfigurationError(ConfigurationError):
    """A credential or endpoint needed before the first request was never given."""

    def __init__(self, field: str, env_var: Optional[str] = None):
        self.field = field
        message = ErrorMessageTemplates.CONFIG_MISSING.format(field=field)
        help_text = f"Pass '{field}' explicitly"
        if env_var:
            help_text += f" or set the {env_var} environment variable"
        context = ExceptionContext(
            help_text=help_text,
            error_code=ErrorCodes.CONFIG_MISSING,
        )
        super().__init__(message, context)


class NamespaceNotDefinedError(ConfigurationError):
    """Raised when an extension prefix was never registered with the service."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        message = ErrorMessageTemplates.NAMESPACE_NOT_DEFINED.format(prefix=prefix)
        context = ExceptionContext(
            help_text=f"Add '{prefix}' to the namespaces mapping given to the service",
            error_code=ErrorCodes.NAMESPACE_NOT_DEFINED,
            context={"prefix": prefix},
        )
        super().__init__(message, context)
