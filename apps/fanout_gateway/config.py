"""
Fan-Out Gateway Configuration

Settings loaded from environment variables or a .env file.
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Fan-Out Gateway settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service Configuration
    service_name: str = "fanout-gateway"
    port: int = 8080
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Fan-out Configuration
    downstream_base_url: str = Field(
        default="http://localhost:8080",
        description="Base address /api/1 resolves api/2 and api/3 against",
    )
    deadline_ms: int = Field(
        default=900,
        gt=0,
        description="Shared deadline for all calls of one fan-out, in milliseconds",
    )
    http_timeout_seconds: float = Field(default=30.0, gt=0)
    http_max_connections: int = Field(default=20, ge=1)

    # Simulated work for GET /api/2 and /api/3 (upper bound exclusive)
    random_delay_min_ms: int = Field(default=50, ge=0)
    random_delay_max_ms: int = Field(default=1000, gt=0)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    @model_validator(mode="after")
    def _validate_delay_range(self) -> "Settings":
        if self.random_delay_min_ms >= self.random_delay_max_ms:
            raise ValueError("random_delay_min_ms must be below random_delay_max_ms")
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Example:
        >>> settings = get_settings()
        >>> settings.deadline_ms
        900
    """
    return Settings()
