"""
Centralized configuration with environment variable overrides.

Scheduling defaults used by the availability engine live here so that
slot granularity can be changed per deployment without touching engine
logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from salon_booking.logging_context import LOG_FORMAT, install_request_id_filter

load_dotenv()

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class SchedulingConfig:
    """Slot and calendar settings for the booking engine."""

    default_slot_minutes: int = _safe_int("SLOT_DURATION_MINUTES", "30")
    # Informational only; the engine works on naive calendar dates.
    business_timezone: str = os.getenv("BUSINESS_TIMEZONE", "Asia/Manila")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "salon-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    slot = config.scheduling.default_slot_minutes
    if slot < 1:
        raise ValueError(f"SLOT_DURATION_MINUTES must be >= 1, got {slot}")
    if slot > MINUTES_PER_DAY:
        raise ValueError(
            f"SLOT_DURATION_MINUTES must be <= {MINUTES_PER_DAY}, got {slot}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    install_request_id_filter()
    logger.info(
        "Configuration loaded for '%s' (slot=%d min)",
        config.app_name, config.scheduling.default_slot_minutes,
    )
    return config


# Singleton instance
settings = load_config()
