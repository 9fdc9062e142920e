"""Configuration management."""

import logging
from typing import Optional

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from ``HEXAGRID_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HEXAGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Mesh Generation
    default_side_size: int = Field(default=8, ge=2, description="Hexagon radius in lattice rows")
    search_iteration_count: int = Field(
        default=100, gt=0, description="Retry budget per triangle sampling round"
    )
    force_circle_shape: bool = Field(
        default=False, description="Snap boundary points onto the unit circle"
    )
    default_seed: Optional[str] = Field(
        default=None, description="Seed for the Alea PRNG when no random source is given"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure structlog on top of the stdlib logging module."""
    config = config or settings
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    if config.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


settings = Settings()
