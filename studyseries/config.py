"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./studyseries.db"

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "studyseries API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Study sessions
    # "reject" refuses to start a session while another one is active,
    # "auto_complete" force-completes the active one first.
    SESSION_START_POLICY: Literal["reject", "auto_complete"] = "reject"
    STORAGE_CONFLICT_MAX_RETRIES: int = 3

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    @field_validator("STORAGE_CONFLICT_MAX_RETRIES", mode="after")
    @classmethod
    def validate_max_retries(cls, value: int) -> int:
        """Retries cannot be negative."""
        if value < 0:
            msg = "STORAGE_CONFLICT_MAX_RETRIES must be non-negative"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def validate_page_sizes(self) -> "Settings":
        """Validate pagination configuration."""
        if self.DEFAULT_PAGE_SIZE < 1 or self.MAX_PAGE_SIZE < 1:
            msg = "Page sizes must be at least 1"
            raise ValueError(msg)
        if self.DEFAULT_PAGE_SIZE > self.MAX_PAGE_SIZE:
            msg = "DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE"
            raise ValueError(msg)
        return self


_SHARED_PROCESSORS: tuple[Callable[..., Any], ...] = (
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
)


def configure_logging(environment: str = "development") -> None:
    """
    Route structlog through stdlib logging on stdout.

    Production renders one JSON object per line, other environments use the
    console renderer. Only development logs at debug level.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )
    # SQL echo stays off even in development
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if environment == "production"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return Settings()
