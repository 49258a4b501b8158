"""
Game settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Every value here is a startup constant; nothing is renegotiated at runtime.
"""

from functools import lru_cache
from typing import Any, Literal
import logging

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Neon palette, one colour per brick row (cycled)
BRICK_COLORS: tuple[tuple[int, int, int], ...] = (
    (0, 229, 255),    # Cyan
    (124, 77, 255),   # Purple
    (24, 255, 255),   # Light blue
    (255, 0, 229),    # Magenta
    (119, 0, 255),    # Violet
)

MIN_SPEED_LEVEL = 1
MAX_SPEED_LEVEL = 3


class FieldSettings(BaseModel):
    """Playfield geometry in logical units."""

    width: int = 800
    height: int = 600

    paddle_width: int = 100
    paddle_height: int = 15
    ball_radius: int = 10

    # Brick grid (9 columns x 5 rows)
    brick_columns: int = 9
    brick_rows: int = 5
    brick_width: int = 75
    brick_height: int = 20
    brick_padding: int = 10
    brick_offset_top: int = 30
    brick_offset_left: int = 30


class GameplaySettings(BaseModel):
    """Rules and physics tuning."""

    initial_lives: int = Field(default=3, ge=1)
    default_speed: int = Field(default=1, ge=MIN_SPEED_LEVEL, le=MAX_SPEED_LEVEL)

    # Speed level -> base velocity magnitude (units per frame)
    speed_map: dict[int, float] = Field(default={1: 1.0, 2: 2.0, 3: 3.0})

    paddle_bounce_factor: float = 0.15
    launch_factor: float = 0.1
    min_horizontal_speed: float = 0.5
    top_wall_jitter: float = 0.25
    steer_speed: float = 4.0

    cheats_enabled: bool = False
    progression: Literal["stay", "speed_up"] = "stay"


class EffectsSettings(BaseModel):
    """Cosmetic effect tuning."""

    particle_burst: int = 10
    trail_length: int = Field(default=10, ge=1)
    confetti: bool = True
    confetti_count: int = 120


class SimulatorSettings(BaseModel):
    """Desktop window settings."""

    title: str = "Neon Breaker"
    fps: int = 60
    status_bar_height: int = 40
    fullscreen: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEONBREAKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    playfield: FieldSettings = Field(default_factory=FieldSettings)
    gameplay: GameplaySettings = Field(default_factory=GameplaySettings)
    effects: EffectsSettings = Field(default_factory=EffectsSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)

    @property
    def total_bricks(self) -> int:
        """Number of bricks in a full grid."""
        return self.playfield.brick_columns * self.playfield.brick_rows

    def base_speed(self, level: int) -> float:
        """Velocity magnitude for a speed level."""
        return self.gameplay.speed_map.get(level, self.gameplay.speed_map[MIN_SPEED_LEVEL])


def parse_speed_level(value: Any) -> int:
    """Parse a speed selector value into a level in 1..3.

    Anything that does not parse to a known level falls back to the
    baseline speed instead of raising.
    """
    try:
        level = int(str(value).strip())
    except (TypeError, ValueError):
        logger.warning(f"Malformed speed value {value!r}, using speed {MIN_SPEED_LEVEL}")
        return MIN_SPEED_LEVEL

    if not MIN_SPEED_LEVEL <= level <= MAX_SPEED_LEVEL:
        logger.warning(f"Speed {level} out of range, using speed {MIN_SPEED_LEVEL}")
        return MIN_SPEED_LEVEL

    return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
