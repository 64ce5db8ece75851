"""
Craps Quest - Application Settings

Loads configuration from environment variables (or a local .env file)
using Pydantic Settings.
"""

import logging
import random
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Randomness
    rng_seed: int | None = Field(
        default=None,
        description="Seed for a reproducible deck shuffle and dice. Unset means unseeded.",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Set up root logging; DEBUG wins over LOG_LEVEL when enabled."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def build_rng(settings: Settings | None = None) -> random.Random:
    """Random source for a game: seeded when RNG_SEED is set."""
    settings = settings or get_settings()
    return random.Random(settings.rng_seed)
