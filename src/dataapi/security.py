"""
Sensitive data sanitization.

Masks credentials before anything reaches a log record or a diagnostic sink.
"""

from typing import Mapping, Set
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


class SensitiveDataSanitizer:
    """Sanitize sensitive data from headers, URLs and credentials."""

    SENSITIVE_HEADER_KEYS: Set[str] = {
        "authorization",
        "proxy-authorization",
        "cookie",
        "set-cookie",
        "www-authenticate",
    }

    SENSITIVE_QUERY_KEYS: Set[str] = {
        "oauth_signature",
        "oauth_token",
        "oauth_verifier",
        "passwd",
        "password",
    }

    @classmethod
    def sanitize_headers(cls, headers: Mapping[str, str]) -> dict:
        """Return a copy of ``headers`` with credential-bearing values redacted."""
        sanitized = {}
        for key, value in headers.items():
            if key.lower() in cls.SENSITIVE_HEADER_KEYS:
                sanitized[key] = "[REDACTED]"
            else:
                sanitized[key] = value
        return sanitized

    @classmethod
    def sanitize_url(cls, url: str) -> str:
        """Remove userinfo and redact OAuth query parameters."""
        parts = urlsplit(url)
        netloc = parts.netloc
        if "@" in netloc:
            netloc = "[REDACTED]@" + netloc.split("@", 1)[1]

        query = parts.query
        if query:
            pairs = [
                (k, "[REDACTED]" if k.lower() in cls.SENSITIVE_QUERY_KEYS else v)
                for k, v in parse_qsl(query, keep_blank_values=True)
            ]
            query = urlencode(pairs, safe="[]")

        return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))

    @staticmethod
    def mask_credential(credential: str, visible_chars: int = 4) -> str:
        """Mask credential for display/logging purposes."""
        if not credential:
            return "[empty]"

        if len(credential) <= visible_chars:
            return "*" * len(credential)

        return "*" * (len(credential) - visible_chars) + credential[-visible_chars:]
