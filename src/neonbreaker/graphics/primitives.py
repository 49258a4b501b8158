"""Drawing primitives on numpy RGB frame buffers (height, width, 3)."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def _clip_rect(buffer: Buffer, x: int, y: int, width: int, height: int) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    return (
        max(0, min(x, w)),
        max(0, min(y, h)),
        max(0, min(x + width, w)),
        max(0, min(y + height, h)),
    )


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    alpha: float = 1.0,
) -> None:
    """Draw a rectangle, optionally blended over what is already there.

    Args:
        buffer: Target frame buffer
        x, y: Top-left corner
        width, height: Size in pixels
        color: RGB color tuple
        filled: Fill the rectangle, or draw a 1px outline
        alpha: Opacity in [0, 1]
    """
    x1, y1, x2, y2 = _clip_rect(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        _paint(buffer[y1:y2, x1:x2], color, alpha)
        return

    _paint(buffer[y1, x1:x2], color, alpha)
    _paint(buffer[y2 - 1, x1:x2], color, alpha)
    _paint(buffer[y1:y2, x1], color, alpha)
    _paint(buffer[y1:y2, x2 - 1], color, alpha)


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled circle, only touching its bounding box."""
    if radius <= 0:
        return

    x1, y1, x2, y2 = _clip_rect(
        buffer,
        int(cx - radius) - 1,
        int(cy - radius) - 1,
        int(radius * 2) + 3,
        int(radius * 2) + 3,
    )
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    mask = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius ** 2
    region = buffer[y1:y2, x1:x2]

    if alpha >= 1.0:
        region[mask] = color
    else:
        blended = region[mask].astype(np.float32) * (1 - alpha) + np.array(color, np.float32) * alpha
        region[mask] = blended.astype(np.uint8)


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a horizontal or vertical line (the only kinds the game needs)."""
    if x1 == x2:
        top, bottom = sorted((y1, y2))
        draw_rect(buffer, x1, top, 1, bottom - top + 1, color, alpha=alpha)
    elif y1 == y2:
        left, right = sorted((x1, x2))
        draw_rect(buffer, left, y1, right - left + 1, 1, color, alpha=alpha)
    else:
        raise ValueError("Only axis-aligned lines are supported")


def draw_triangle_down(buffer: Buffer, cx: int, tip_y: int, half_width: int, color: Color) -> None:
    """Filled downward-pointing triangle with its tip at (cx, tip_y)."""
    for row in range(half_width + 1):
        y = tip_y - row
        draw_rect(buffer, cx - row, y, row * 2 + 1, 1, color)


def _paint(region: Buffer, color: Color, alpha: float) -> None:
    if alpha >= 1.0:
        region[...] = color
    elif alpha > 0.0:
        blended = region.astype(np.float32) * (1 - alpha) + np.array(color, np.float32) * alpha
        region[...] = blended.astype(np.uint8)
