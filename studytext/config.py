"""Settings for the study API and the study-view client, read from env/.env."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    DATABASE_URL: str = "sqlite:///./studytext.db"

    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "studytext API"
    VERSION: str = "0.1.0"

    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None

    CORS_ORIGINS: list[str] = ["*"]

    # Client side: where the study store lives
    API_BASE_URL: str = "http://localhost:8000"
    API_TIMEOUT_SECONDS: float = 30.0

    # Client side: study view timings, in seconds
    AUTOSAVE_DEBOUNCE_SECONDS: float = 2.0
    SAVED_STATUS_DISPLAY_SECONDS: float = 2.0
    ERROR_STATUS_DISPLAY_SECONDS: float = 3.0
    ASSISTANT_REPLY_DELAY_SECONDS: float = 1.5

    DISPLAY_TEXT_MAX_LENGTH: int = 200

    @computed_field  # type: ignore[prop-decorator]
    @property
    def json_logs(self) -> bool:
        """Production emits one JSON object per log line."""
        return self.ENVIRONMENT == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def log_level(self) -> int:
        if self.LOG_LEVEL is not None:
            return logging.getLevelNamesMapping()[self.LOG_LEVEL]
        return logging.DEBUG if self.ENVIRONMENT == "development" else logging.INFO

    @field_validator(
        "AUTOSAVE_DEBOUNCE_SECONDS",
        "SAVED_STATUS_DISPLAY_SECONDS",
        "ERROR_STATUS_DISPLAY_SECONDS",
        "ASSISTANT_REPLY_DELAY_SECONDS",
        "API_TIMEOUT_SECONDS",
        "DISPLAY_TEXT_MAX_LENGTH",
        mode="after",
    )
    @classmethod
    def require_positive(cls, value: float) -> float:
        if value <= 0:
            msg = "Timings and lengths must be positive"
            raise ValueError(msg)
        return value


def configure_logging(settings: Settings) -> None:
    """Route stdlib logging and structlog through one stdout handler."""
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=settings.log_level)
    # SQL echo is noise outside of debugging the store itself
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if settings.json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
