"""Configuration settings for log-window."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Window limits and logging options loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_WINDOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Window
    event_limit: int = Field(
        default=1000,
        gt=0,
        description="Maximum span of counters kept materialized at once",
    )
    page_size: int = Field(
        default=50,
        gt=0,
        description="Default displacement of a single paging step",
    )
    line_height: float = Field(
        default=1.0,
        gt=0,
        description="Height of one buffer line reported by the in-memory sink",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="json", description="Log format (json or console)"
    )

    @model_validator(mode="after")
    def check_page_fits_limit(self) -> "Settings":
        if self.page_size > self.event_limit:
            raise ValueError("page_size cannot exceed event_limit")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


# Singleton instance
settings = get_settings()
