"""
Simulated output devices for the desktop window.

The playfield is a numpy frame buffer turned into a pygame surface;
the status bar keeps the score/time/lives readouts as text.
"""

import logging

import pygame

from neonbreaker.graphics.renderer import FieldRenderer
from neonbreaker.hardware.base import DisplaySink

logger = logging.getLogger(__name__)

HEART_SYMBOL = "♥"


class SimulatedField:
    """Wraps the field renderer's buffer for blitting."""

    def __init__(self, renderer: FieldRenderer) -> None:
        self.renderer = renderer

    @property
    def width(self) -> int:
        return self.renderer.width

    @property
    def height(self) -> int:
        return self.renderer.height

    def render(self) -> pygame.Surface:
        """Current frame as a pygame surface (buffer is height-major)."""
        return pygame.surfarray.make_surface(self.renderer.buffer.swapaxes(0, 1))


class SimulatedStatusBar(DisplaySink):
    """Info bar above the field: score, lives as hearts, elapsed time."""

    def __init__(self) -> None:
        self.score = 0
        self.seconds = 0
        self.lives = 0

    def set_score(self, score: int) -> None:
        self.score = score

    def set_time(self, seconds: int) -> None:
        self.seconds = seconds

    def set_lives(self, lives: int) -> None:
        self.lives = lives
        logger.debug(f"Lives display: {self.hearts}")

    @property
    def hearts(self) -> str:
        return HEART_SYMBOL * max(0, self.lives)

    def segments(self) -> tuple[str, str, str]:
        """Left, centre and right texts for the bar."""
        return f"SCORE {self.score}", self.hearts, f"TIME {self.seconds}"
