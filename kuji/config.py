"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def resolve_random_seed() -> int | None:
    """Resolve the shuffle seed.

    Unset or unparsable ``KUJI_RANDOM_SEED`` means a fresh OS-seeded RNG.
    """

    raw = os.getenv("KUJI_RANDOM_SEED")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    KUJI_RANDOM_SEED: int | None = resolve_random_seed()
    # Reject undersized remaining_tickets instead of clamping it up.
    KUJI_STRICT_SETUP: bool = _env_flag("KUJI_STRICT_SETUP")
    KUJI_SMALL_PRIZE_LABEL: str = os.getenv("KUJI_SMALL_PRIZE_LABEL", "Small Prize")


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Test configuration: deterministic shuffles."""

    TESTING: bool = True
    DEBUG: bool = False
    KUJI_RANDOM_SEED: int | None = 1234


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
