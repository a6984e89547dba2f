"""Configuration module using pydantic-settings for type-safe env variable loading."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Uses pydantic-settings for type-safe configuration with validation.
    Automatically loads from .env file if present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # JigsawStack Web Search Configuration
    jigsaw_api_key: str = Field(
        default="",
        description="JigsawStack API key (empty surfaces as an authorization failure)",
    )
    jigsaw_base_url: str = Field(
        default="https://api.jigsawstack.com/v1",
        description="Base URL of the JigsawStack REST API",
    )

    # Proxy Configuration
    search_timeout_ms: int = Field(
        default=30000,
        ge=1,
        le=300000,
        description="Maximum time in milliseconds to wait for the search provider",
    )
    default_query: str = Field(
        default="What is the capital of France?",
        min_length=1,
        description="Query used when the request carries no query parameter",
    )

    # Front End Configuration
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the proxy API used by the Streamlit front end",
    )
    client_timeout: float = Field(
        default=35.0,
        gt=0,
        le=300,
        description="Timeout in seconds for front end requests to the proxy API",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )


# Global settings instance
settings = Settings()
