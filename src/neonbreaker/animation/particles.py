"""Particle bursts, the ball trail and win confetti.

All of this is cosmetic. Particles live in frame units like the
physics: one update() per tick, life counted in frames.
"""

from collections import deque
from dataclasses import dataclass
from typing import Iterator, List, Tuple
import math
import random

Color = Tuple[int, int, int]

# Life values are drawn from [LIFE_MIN, LIFE_MAX); fade is life / LIFE_MAX
LIFE_MIN = 30.0
LIFE_MAX = 50.0


@dataclass
class Particle:
    """A single burst particle moving along a fixed heading."""

    x: float
    y: float
    angle: float
    speed: float
    radius: float
    color: Color
    life: float
    max_life: float = LIFE_MAX

    @property
    def is_dead(self) -> bool:
        return self.life <= 0

    @property
    def fade(self) -> float:
        """Remaining life fraction in [0, 1]; drives alpha and size."""
        if self.max_life <= 0:
            return 0.0
        return max(0.0, min(1.0, self.life / self.max_life))

    def update(self) -> None:
        self.x += math.cos(self.angle) * self.speed
        self.y += math.sin(self.angle) * self.speed
        self.life -= 1


class ParticleSystem:
    """Owns every live burst particle."""

    def __init__(self, burst_size: int = 10, rng: random.Random | None = None):
        self.burst_size = burst_size
        self.particles: List[Particle] = []
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def burst(self, x: float, y: float, color: Color) -> List[Particle]:
        """Spawn one fixed-size burst at (x, y)."""
        rng = self._rng
        spawned = [
            Particle(
                x=x,
                y=y,
                angle=rng.uniform(0.0, math.tau),
                speed=rng.uniform(1.0, 4.0),
                radius=rng.uniform(1.0, 4.0),
                color=color,
                life=rng.uniform(LIFE_MIN, LIFE_MAX),
            )
            for _ in range(self.burst_size)
        ]
        self.particles.extend(spawned)
        return spawned

    def update(self) -> None:
        """Advance all particles one frame and drop dead ones."""
        for particle in self.particles:
            particle.update()
        self.particles = [p for p in self.particles if not p.is_dead]

    def clear(self) -> None:
        self.particles.clear()


class Trail:
    """Fixed-capacity ring buffer of recent ball positions."""

    def __init__(self, capacity: int = 10):
        self.capacity = capacity
        self._samples: deque[Tuple[float, float]] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(self._samples)

    def record(self, x: float, y: float) -> None:
        """Append a sample, evicting the oldest when full."""
        self._samples.append((x, y))

    def samples(self) -> List[Tuple[float, float]]:
        """Oldest first."""
        return list(self._samples)

    def clear(self) -> None:
        self._samples.clear()


@dataclass
class ConfettiPiece:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: Color
    spin: float
    rotation: float = 0.0


CONFETTI_COLORS: Tuple[Color, ...] = (
    (0, 229, 255),
    (255, 0, 229),
    (124, 77, 255),
    (255, 230, 0),
    (24, 255, 255),
)


class ConfettiShower:
    """Falling confetti shown over the frozen field after a win.

    Runs independently of the game tick, driven by the window's
    own frame loop.
    """

    GRAVITY = 0.05
    DRAG = 0.99

    def __init__(self, width: float, height: float, rng: random.Random | None = None):
        self.width = width
        self.height = height
        self.pieces: List[ConfettiPiece] = []
        self._rng = rng or random.Random()

    @property
    def active(self) -> bool:
        return bool(self.pieces)

    def start(self, count: int = 120) -> None:
        rng = self._rng
        self.pieces = [
            ConfettiPiece(
                x=rng.uniform(0.0, self.width),
                y=rng.uniform(-self.height * 0.5, 0.0),
                vx=rng.uniform(-1.5, 1.5),
                vy=rng.uniform(1.0, 3.0),
                size=rng.uniform(4.0, 9.0),
                color=rng.choice(CONFETTI_COLORS),
                spin=rng.uniform(-0.2, 0.2),
            )
            for _ in range(count)
        ]

    def update(self) -> None:
        for piece in self.pieces:
            piece.vx *= self.DRAG
            piece.vy += self.GRAVITY
            piece.x += piece.vx
            piece.y += piece.vy
            piece.rotation += piece.spin
        self.pieces = [p for p in self.pieces if p.y - p.size < self.height]

    def stop(self) -> None:
        self.pieces.clear()
