"""
Configuration models for dataapi.

Pydantic-based models that validate everything a Service and its
authenticator need before any network I/O happens.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from dataapi.constants import (
    ClientLoginConstants,
    NamespaceConstants,
    NetworkConstants,
    OAuthConstants,
)


def coerce_uri(value: str) -> str:
    """Prefix ``http://`` onto a URI that carries no scheme."""
    if value and "://" not in value:
        return "http://" + value
    return value


class ServiceConfig(BaseModel):
    """Per-service settings shared by every request."""

    service: str = Field(..., min_length=1, description="ClientLogin service name, e.g. 'wise'")
    source: str = Field(..., min_length=1, description="Application identifier, sent as User-Agent")
    gdata_version: str = Field(
        ClientLoginConstants.DEFAULT_GDATA_VERSION, description="GData-Version header value"
    )
    namespaces: Dict[str, str] = Field(
        default_factory=dict, description="Extension prefix to namespace URI mapping"
    )
    timeout: int = Field(
        NetworkConstants.DEFAULT_REQUEST_TIMEOUT,
        ge=1,
        le=300,
        description="Transport timeout in seconds",
    )
    debug: bool = Field(False, description="Dump raw requests and responses to the log")

    model_config = {
        "extra": "forbid",
        "str_strip_whitespace": True,
    }

    @field_validator("namespaces")
    @classmethod
    def validate_namespaces(cls, v: Dict[str, str]) -> Dict[str, str]:
        for prefix, uri in v.items():
            if not prefix or not uri:
                raise ValueError("namespace prefixes and URIs must be non-empty")
            if prefix == NamespaceConstants.GD_PREFIX and uri != NamespaceConstants.GD:
                raise ValueError(f"prefix 'gd' is reserved for {NamespaceConstants.GD}")
        return v


class ClientLoginConfig(BaseModel):
    """Credentials for the legacy session-token scheme."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, repr=False)
    account_type: str = Field(ClientLoginConstants.DEFAULT_ACCOUNT_TYPE)
    login_url: str = Field(ClientLoginConstants.LOGIN_URL)

    @field_validator("login_url")
    @classmethod
    def validate_login_url(cls, v: str) -> str:
        return coerce_uri(v)


class OAuthConfig(BaseModel):
    """Consumer credentials and handshake options for OAuth 1.0a."""

    consumer_key: Optional[str] = Field(None, description="Falls back to DATAAPI_CONSUMER_KEY")
    consumer_secret: Optional[str] = Field(None, repr=False)
    scope: List[str] = Field(..., min_length=1, description="Scope URLs requested")
    callback: Optional[str] = Field(None, description="Callback URL; 'oob' when unset")
    signature_method: Literal["HMAC-SHA1", "PLAINTEXT"] = OAuthConstants.DEFAULT_SIGNATURE_METHOD
    authorize_token_hd: str = OAuthConstants.DEFAULT_HOSTED_DOMAIN
    authorize_token_hl: str = OAuthConstants.DEFAULT_LANGUAGE
    mobile: bool = False
    request_token_url: str = OAuthConstants.REQUEST_TOKEN_URL
    authorize_token_url: str = OAuthConstants.AUTHORIZE_TOKEN_URL
    access_token_url: str = OAuthConstants.ACCESS_TOKEN_URL
    access_token: Optional[str] = Field(None, description="Persisted access token")
    access_token_secret: Optional[str] = Field(None, repr=False)

    @field_validator(
        "callback", "request_token_url", "authorize_token_url", "access_token_url"
    )
    @classmethod
    def validate_urls(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return coerce_uri(v)

    @model_validator(mode="after")
    def validate_access_token_pair(self) -> "OAuthConfig":
        if (self.access_token is None) != (self.access_token_secret is None):
            raise ValueError("access_token and access_token_secret must be provided together")
        return self
