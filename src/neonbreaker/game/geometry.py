"""Axis-aligned box math for ball/brick collisions."""

from dataclasses import dataclass
from enum import Enum


class Side(Enum):
    """Side of a rectangle the ball touched."""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class Axis(Enum):
    """Velocity component flipped by a bounce."""
    HORIZONTAL = "horizontal"  # flip dx
    VERTICAL = "vertical"      # flip dy


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle; x/y is the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


def circle_box(cx: float, cy: float, radius: float) -> Box:
    """Bounding box of a circle (centre +/- radius)."""
    return Box(cx - radius, cy - radius, radius * 2, radius * 2)


def overlaps(a: Box, b: Box) -> bool:
    """Strict AABB overlap; touching edges do not count."""
    return (
        a.right > b.left and
        a.left < b.right and
        a.bottom > b.top and
        a.top < b.bottom
    )


def edge_distances(ball: Box, target: Box) -> dict[Side, float]:
    """Distance between each ball edge and the facing target edge.

    LEFT means the ball's right edge against the target's left edge,
    and so on; the smallest value is the side most recently crossed.
    """
    return {
        Side.LEFT: abs(ball.right - target.left),
        Side.RIGHT: abs(ball.left - target.right),
        Side.TOP: abs(ball.bottom - target.top),
        Side.BOTTOM: abs(ball.top - target.bottom),
    }


def hit_side(ball: Box, target: Box) -> Side:
    """Side with minimum penetration. Horizontal sides win ties."""
    distances = edge_distances(ball, target)
    # dict order is LEFT, RIGHT, TOP, BOTTOM so min() keeps the first tie
    return min(distances, key=distances.__getitem__)


def reflection_axis(ball: Box, target: Box) -> Axis:
    """Which velocity component to flip for a ball/box hit."""
    if hit_side(ball, target) in (Side.LEFT, Side.RIGHT):
        return Axis.HORIZONTAL
    return Axis.VERTICAL


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def clamp_magnitude(value: float, minimum: float, maximum: float | None = None) -> float:
    """Keep |value| within [minimum, maximum], preserving sign.

    Zero is treated as positive.
    """
    sign = -1.0 if value < 0 else 1.0
    magnitude = abs(value)
    if magnitude < minimum:
        magnitude = minimum
    if maximum is not None and magnitude > maximum:
        magnitude = maximum
    return sign * magnitude
