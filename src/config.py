"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import PostgresDsn, RedisDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.constants import ANILIST_API_URL, DATA_ACCESS_TIMEOUT, DEFAULT_RECOMMENDATION_LIMIT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"

    # Database
    database_url: PostgresDsn

    # Redis
    redis_url: RedisDsn

    # External APIs
    anilist_api_url: str = ANILIST_API_URL

    # Recommendations
    recommendation_limit: int = DEFAULT_RECOMMENDATION_LIMIT
    data_access_timeout: float = DATA_ACCESS_TIMEOUT

    @field_validator("recommendation_limit")
    @classmethod
    def validate_recommendation_limit(cls, v: int) -> int:
        """Reject negative default limits."""
        if v < 0:
            raise ValueError("RECOMMENDATION_LIMIT must not be negative")
        return v

    @field_validator("data_access_timeout")
    @classmethod
    def validate_data_access_timeout(cls, v: float) -> float:
        """Ensure the data access timeout is usable."""
        if v <= 0:
            raise ValueError("DATA_ACCESS_TIMEOUT must be greater than zero")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def database_url_async(self) -> str:
        """Get async database URL (postgresql+asyncpg)."""
        url = str(self.database_url)
        return url.replace("postgresql://", "postgresql+asyncpg://")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
