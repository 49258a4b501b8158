"""
Abstract output interfaces.

The game core only talks to these; the pygame simulator and the
tests provide the implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neonbreaker.animation.particles import Particle
    from neonbreaker.core.state import GameState
    from neonbreaker.game.entities import Ball, Brick, Paddle


@dataclass
class FrameSnapshot:
    """Everything a render sink needs to draw one frame."""

    width: int
    height: int
    state: "GameState"
    bricks: list["Brick"]
    ball: "Ball"
    paddle: "Paddle"
    trail: list[tuple[float, float]] = field(default_factory=list)
    particles: list["Particle"] = field(default_factory=list)
    instruction: str | None = None
    frame: int = 0


class RenderSink(ABC):
    """Draws frames. Fire-and-forget, called once per tick."""

    @abstractmethod
    def render(self, snapshot: FrameSnapshot) -> None:
        """Draw the given frame."""
        ...


class DisplaySink(ABC):
    """Score, time and lives readouts."""

    @abstractmethod
    def set_score(self, score: int) -> None:
        ...

    @abstractmethod
    def set_time(self, seconds: int) -> None:
        ...

    @abstractmethod
    def set_lives(self, lives: int) -> None:
        """Lives are shown as repeated life glyphs."""
        ...
