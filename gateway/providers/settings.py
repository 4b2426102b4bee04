"""
Configuration settings for the gateway using Pydantic Settings.

This module centralizes provider credentials and the aggregation limits,
loaded from environment variables (and an optional ``.env`` file).
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional


class ProviderSettings(BaseSettings):
    """
    Settings for the search provider and the aggregation engine.

    Uses Pydantic Settings to load and validate configuration from
    environment variables with proper type checking and defaults.
    """

    # Provider selection
    search_provider: str = Field(
        default="tomtom",
        alias="SEARCH_PROVIDER",
        description="Geo-search provider used for nearby searches (tomtom)"
    )

    # TomTom settings
    tomtom_api_key: Optional[str] = Field(
        default=None,
        alias="TOMTOM_API_KEY",
        description="TomTom API key (required for every search)"
    )
    tomtom_base_url: str = Field(
        default="https://api.tomtom.com",
        alias="TOMTOM_BASE_URL",
        description="TomTom API base URL"
    )

    # Aggregation limits
    search_query_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        alias="SEARCH_QUERY_TIMEOUT_SECONDS",
        description="Upper bound for a single provider sub-query"
    )
    search_request_timeout_seconds: float = Field(
        default=25.0,
        gt=0,
        alias="SEARCH_REQUEST_TIMEOUT_SECONDS",
        description="Upper bound for a whole aggregation call"
    )
    search_max_concurrency: int = Field(
        default=8,
        ge=1,
        alias="SEARCH_MAX_CONCURRENCY",
        description="Maximum sub-queries in flight for one aggregation"
    )
    search_default_radius_meters: int = Field(
        default=50000,
        gt=0,
        alias="SEARCH_DEFAULT_RADIUS_METERS",
        description="Radius used when a request does not specify one"
    )

    # API configuration
    evgateway_api_url: str = Field(
        default="http://localhost:8001/api",
        alias="EVGATEWAY_API_URL",
        description="Gateway API base URL (used by the CLI)"
    )
    evgateway_host: str = Field(
        default="0.0.0.0",
        alias="EVGATEWAY_HOST",
        description="API server host"
    )
    evgateway_port: int = Field(
        default=8001,
        alias="EVGATEWAY_PORT",
        description="API server port"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_prefix": "",
        "extra": "ignore",
    }


# Global settings instance
_settings: Optional[ProviderSettings] = None


def get_settings() -> ProviderSettings:
    """
    Get global settings instance (singleton pattern).

    Returns:
        Validated ProviderSettings instance
    """
    global _settings
    if _settings is None:
        _settings = ProviderSettings()
    return _settings


def reset_settings() -> None:
    """Reset global settings (useful for testing)."""
    global _settings
    _settings = None
