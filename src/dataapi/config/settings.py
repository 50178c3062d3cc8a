"""
Environment-driven settings.

Credentials and switches that operators set outside the code, read once
through pydantic-settings (process environment and an optional ``.env``).
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataAPISettings(BaseSettings):
    """Settings that can be provided by environment variables."""

    username: Optional[str] = Field(None, alias="DATAAPI_USERNAME")
    password: Optional[str] = Field(None, alias="DATAAPI_PASSWORD", repr=False)

    consumer_key: Optional[str] = Field(None, alias="DATAAPI_CONSUMER_KEY")
    consumer_secret: Optional[str] = Field(None, alias="DATAAPI_CONSUMER_SECRET", repr=False)
    access_token: Optional[str] = Field(None, alias="DATAAPI_ACCESS_TOKEN")
    access_token_secret: Optional[str] = Field(
        None, alias="DATAAPI_ACCESS_TOKEN_SECRET", repr=False
    )

    timeout: Optional[int] = Field(None, alias="DATAAPI_TIMEOUT", ge=1, le=300)
    log_level: Optional[str] = Field(None, alias="DATAAPI_LOG_LEVEL")
    debug: bool = Field(
        False,
        validation_alias=AliasChoices("GOOGLE_DATAAPI_DEBUG", "DATAAPI_DEBUG"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def has_client_login_credentials(self) -> bool:
        return bool(self.username and self.password)
