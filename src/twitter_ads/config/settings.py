"""Configuration settings for the Twitter Ads SDK.

This module defines the configuration settings for the SDK, including
the API host, credentials, timeouts and retry policy. Settings are
loaded from environment variables and .env files.
"""

from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PRODUCTION_HOST = "ads-api.twitter.com"
SANDBOX_HOST = "ads-api-sandbox.twitter.com"


class Settings(BaseSettings):
    """SDK settings loaded from environment variables.

    :param twitter_ads_api_base_url: Base URL for the Ads API
    :type twitter_ads_api_base_url: str
    :param twitter_ads_sandbox: Route requests to the sandbox host
    :type twitter_ads_sandbox: bool
    :param twitter_ads_access_token: Bearer token sent with every request
    :type twitter_ads_access_token: Optional[str]
    :param twitter_ads_timeout: Read timeout for API requests in seconds
    :type twitter_ads_timeout: float
    :param twitter_ads_max_retries: Attempts per request, including the first
    :type twitter_ads_max_retries: int
    :param twitter_ads_retry_delay: Initial delay between attempts in seconds
    :type twitter_ads_retry_delay: float
    :param log_level: Logging level for the SDK
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # sandbox must be declared before the base URL so the validator sees it
    twitter_ads_sandbox: bool = Field(
        False, description="Use the sandbox API host"
    )
    twitter_ads_api_base_url: str = Field(
        f"https://{PRODUCTION_HOST}",
        description="Twitter Ads API Base URL",
        validate_default=True,
    )

    twitter_ads_access_token: Optional[str] = Field(
        None,
        validation_alias=AliasChoices(
            "TWITTER_ADS_ACCESS_TOKEN", "twitter_ads_access_token"
        ),
        description="OAuth 2.0 bearer token",
    )

    twitter_ads_timeout: float = Field(
        30.0, gt=0, description="Read timeout for API requests (seconds)"
    )
    twitter_ads_max_retries: int = Field(
        3, ge=1, description="Maximum attempts per request"
    )
    twitter_ads_retry_delay: float = Field(
        1.0, ge=0, description="Initial retry delay (seconds)"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    @field_validator("twitter_ads_api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str, info) -> str:
        """Adjust API URL based on sandbox mode.

        :param v: The original API base URL
        :type v: str
        :param info: Validation info containing other field values
        :type info: Any
        :return: Base URL without trailing slash, sandbox host if enabled
        :rtype: str
        """
        v = v.rstrip("/")
        if info.data.get("twitter_ads_sandbox"):
            return v.replace(PRODUCTION_HOST, SANDBOX_HOST)
        return v


settings = Settings()
"""Global settings instance for the SDK.

Created once at import time and used as the default configuration for
every :class:`~twitter_ads.client.Client`.
"""
