"""Configuration for Neon Breaker."""

from .settings import (
    BRICK_COLORS,
    MAX_SPEED_LEVEL,
    MIN_SPEED_LEVEL,
    Settings,
    get_settings,
    parse_speed_level,
)

__all__ = [
    "BRICK_COLORS",
    "MAX_SPEED_LEVEL",
    "MIN_SPEED_LEVEL",
    "Settings",
    "get_settings",
    "parse_speed_level",
]
