"""
CacheHub Application Configuration

Configuration management with environment variable support.
Implements secure defaults and validation for all settings.
"""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.cache.value_objects import CacheBackendType, DecodeFailurePolicy, TTL

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings with validation and secure defaults."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # Environment settings
    ENVIRONMENT: str = Field(
        default="development", description="Application environment"
    )
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_JSON: bool = Field(
        default=False, description="Render structured logs as JSON"
    )

    # Cache backend selection
    CACHE_BACKEND: CacheBackendType = Field(
        default=CacheBackendType.MEMORY,
        description="Cache backend implementation (memory or redis)",
    )
    CACHE_DEFAULT_TTL_SECONDS: Optional[int] = Field(
        default=None,
        ge=1,
        le=86400 * 365,
        description="Default entry TTL; unset leaves expiration to the backend",
    )
    CACHE_DECODE_FAILURE_POLICY: DecodeFailurePolicy = Field(
        default=DecodeFailurePolicy.MISS,
        description="Treat undecodable entries as a miss or raise",
    )
    CACHE_REMOVE_CONCURRENCY: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Maximum concurrent deletes during prefix removal",
    )

    # Redis configuration
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )
    REDIS_MAX_CONNECTIONS: int = Field(
        default=10, ge=1, le=50, description="Redis connection pool size"
    )
    REDIS_SOCKET_TIMEOUT: float = Field(
        default=5.0, gt=0, le=60, description="Redis socket timeout in seconds"
    )

    # API configuration
    API_HOST: str = Field(default="0.0.0.0", description="API server host")
    API_PORT: int = Field(default=8000, ge=1, le=65535, description="API server port")

    # OpenTelemetry configuration
    OTEL_SERVICE_NAME: str = Field(
        default="cachehub-api", description="OpenTelemetry service name"
    )
    OTEL_SERVICE_VERSION: str = Field(
        default="0.1.0", description="OpenTelemetry service version"
    )

    @field_validator("REDIS_URL")
    @classmethod
    def validate_redis_url(cls, v):
        """Validate Redis URL scheme."""
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("REDIS_URL must be a redis://, rediss:// or unix:// URL")
        return v

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @property
    def default_ttl(self) -> Optional[TTL]:
        """Default TTL as a value object, if configured."""
        if self.CACHE_DEFAULT_TTL_SECONDS is None:
            return None
        return TTL(self.CACHE_DEFAULT_TTL_SECONDS)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
