"""
Standardized error message templates and error codes.

Keeps the wording of dataapi errors consistent across the auth, config and
request layers.
"""


class ErrorMessageTemplates:
    """Standardized error message templates for consistent formatting."""

    # Authentication
    AUTH_FAILED = "{scheme} authentication failed"
    AUTH_NOT_READY = "{scheme} authenticator is not ready: {reason}"

    # Configuration
    CONFIG_INVALID = "Invalid configuration for '{field}': got {value!r}, expected {expected}"
    CONFIG_MISSING = "Missing required configuration: '{field}'"
    NAMESPACE_NOT_DEFINED = "Namespace '{prefix}' is not defined!"

    # Requests
    REQUEST_FAILED = "request for '{url}' failed: {status_line}"
    CONTENT_TYPE_MISMATCH = (
        "Content-Type of response for '{url}' is not '{expected}': {content_type}"
    )
    RESPONSE_BROKEN = "response for '{url}' is broken: {detail}"
    ENTRY_NOT_EDITABLE = "Entry cannot be {operation}: {reason}"


class ErrorCodes:
    """Standardized error codes for programmatic error handling."""

    AUTH_FAILED = "AUTH_FAILED"
    AUTH_NOT_READY = "AUTH_NOT_READY"

    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_MISSING = "CONFIG_MISSING"
    NAMESPACE_NOT_DEFINED = "NAMESPACE_NOT_DEFINED"

    REQUEST_FAILED = "REQUEST_FAILED"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"
    CONTENT_TYPE_MISMATCH = "CONTENT_TYPE_MISMATCH"
    RESPONSE_BROKEN = "RESPONSE_BROKEN"
    ENTRY_NOT_EDITABLE = "ENTRY_NOT_EDITABLE"


class RecoverySuggestions:
    """Standard recovery suggestions for common error scenarios."""

    @staticmethod
    def for_auth_error(scheme: str) -> str:
        if scheme == "oauth":
            return (
                "Check the consumer key/secret and scope, then restart the "
                "handshake with get_request_token()"
            )
        return "Verify the username, password and service name used for login"

    @staticmethod
    def for_http_status(status_code: int) -> str:
        if status_code in (401, 403):
            return "The credentials were rejected or lack permission for this resource"
        if status_code == 404:
            return "Check that the feed or entry URL exists"
        if status_code == 409 or status_code == 412:
            return "The entry changed on the server; fetch it again and reapply the change"
        if 300 <= status_code < 400:
            return "Redirects are not followed; use the final resource URL"
        if status_code >= 500:
            return "The server failed; the request may be retried later"
        return "Inspect the response body for the server's explanation"
