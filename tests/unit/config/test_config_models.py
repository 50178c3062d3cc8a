"""
Tests for configuration models and environment settings.
"""

import pytest
from pydantic import ValidationError

from dataapi.config import (
    ClientLoginConfig,
    DataAPISettings,
    OAuthConfig,
    ServiceConfig,
    coerce_uri,
)

SCOPE = ["http://spreadsheets.google.com/feeds/"]


@pytest.mark.unit
class TestCoerceUri:
    """Test scheme defaulting for configured URIs."""

    @pytest.mark.parametrize("value,expected", [
        ("example.com/feeds", "http://example.com/feeds"),
        ("http://example.com/feeds", "http://example.com/feeds"),
        ("https://example.com/feeds", "https://example.com/feeds"),
        ("", ""),
    ])
    def test_coerce(self, value, expected):
        assert coerce_uri(value) == expected


@pytest.mark.unit
class TestServiceConfig:
    """Test service configuration validation."""

    def test_defaults(self):
        config = ServiceConfig(service="wise", source="MyService")

        assert config.gdata_version == "2.0"
        assert config.namespaces == {}
        assert config.timeout == 30
        assert config.debug is False

    def test_strips_whitespace(self):
        assert ServiceConfig(service=" wise ", source="MyService").service == "wise"

    @pytest.mark.parametrize("kwargs", [
        {"service": ""},
        {"source": ""},
        {"timeout": 0},
        {"timeout": 301},
        {"namespaces": {"foo": ""}},
        {"namespaces": {"gd": "http://example.com/not-gd"}},
        {"unexpected": True},
    ])
    def test_invalid(self, kwargs):
        arguments = {"service": "wise", "source": "MyService"}
        arguments.update(kwargs)

        with pytest.raises(ValidationError):
            ServiceConfig(**arguments)

    def test_gd_may_be_given_with_its_own_uri(self):
        config = ServiceConfig(
            service="wise",
            source="MyService",
            namespaces={"gd": "http://schemas.google.com/g/2005"},
        )

        assert "gd" in config.namespaces


@pytest.mark.unit
class TestClientLoginConfig:
    """Test ClientLogin credentials."""

    def test_defaults(self):
        config = ClientLoginConfig(username="user", password="secret")

        assert config.account_type == "HOSTED_OR_GOOGLE"
        assert config.login_url == "https://www.google.com/accounts/ClientLogin"

    def test_login_url_scheme_is_added(self):
        config = ClientLoginConfig(
            username="user", password="secret", login_url="login.example.com/ClientLogin"
        )

        assert config.login_url == "http://login.example.com/ClientLogin"

    def test_password_hidden_from_repr(self):
        assert "secret" not in repr(ClientLoginConfig(username="user", password="secret"))

    def test_empty_password(self):
        with pytest.raises(ValidationError):
            ClientLoginConfig(username="user", password="")


@pytest.mark.unit
class TestOAuthConfig:
    """Test OAuth options."""

    def test_defaults(self):
        config = OAuthConfig(scope=SCOPE)

        assert config.consumer_key is None
        assert config.callback is None
        assert config.signature_method == "HMAC-SHA1"
        assert config.authorize_token_hd == "default"
        assert config.authorize_token_hl == "en"
        assert config.mobile is False

    def test_scope_required(self):
        with pytest.raises(ValidationError):
            OAuthConfig(scope=[])

    def test_unsupported_signature_method(self):
        with pytest.raises(ValidationError):
            OAuthConfig(scope=SCOPE, signature_method="RSA-SHA1")

    def test_urls_get_scheme(self):
        config = OAuthConfig(scope=SCOPE, callback="example.com/callback")

        assert config.callback == "http://example.com/callback"

    def test_access_token_needs_secret(self):
        with pytest.raises(ValidationError, match="provided together"):
            OAuthConfig(scope=SCOPE, access_token="acc")

    def test_access_token_pair(self):
        config = OAuthConfig(scope=SCOPE, access_token="acc", access_token_secret="sec")

        assert config.access_token == "acc"
        assert "access_token_secret" not in repr(config)


@pytest.mark.unit
@pytest.mark.usefixtures("clean_environment")
class TestDataAPISettings:
    """Test environment-driven settings."""

    def test_empty_environment(self):
        settings = DataAPISettings()

        assert settings.username is None
        assert settings.timeout is None
        assert settings.debug is False
        assert not settings.has_client_login_credentials

    def test_reads_environment(self, clean_environment):
        clean_environment.setenv("DATAAPI_USERNAME", "user@example.com")
        clean_environment.setenv("DATAAPI_PASSWORD", "secret")
        clean_environment.setenv("DATAAPI_CONSUMER_KEY", "key")
        clean_environment.setenv("DATAAPI_CONSUMER_SECRET", "consumer-secret")
        clean_environment.setenv("DATAAPI_TIMEOUT", "15")

        settings = DataAPISettings()

        assert settings.username == "user@example.com"
        assert settings.timeout == 15
        assert settings.has_client_login_credentials
        assert settings.consumer_key == "key"
        assert settings.consumer_secret == "consumer-secret"

    @pytest.mark.parametrize("name", ["GOOGLE_DATAAPI_DEBUG", "DATAAPI_DEBUG"])
    def test_debug_switch(self, clean_environment, name):
        clean_environment.setenv(name, "true")

        assert DataAPISettings().debug is True

    def test_reads_dotenv_file(self, clean_environment, tmp_path):
        (tmp_path / ".env").write_text("DATAAPI_USERNAME=dotenv-user\n")

        assert DataAPISettings().username == "dotenv-user"

    def test_field_names_accepted(self):
        settings = DataAPISettings(username="user", password="secret")

        assert settings.has_client_login_credentials

    def test_invalid_timeout(self, clean_environment):
        clean_environment.setenv("DATAAPI_TIMEOUT", "0")

        with pytest.raises(ValidationError):
            DataAPISettings()
