"""Graphics module for Neon Breaker rendering."""

from neonbreaker.graphics.renderer import FieldRenderer
from neonbreaker.graphics.primitives import (
    clear,
    draw_circle,
    draw_line,
    draw_rect,
    draw_triangle_down,
)

__all__ = [
    "FieldRenderer",
    "clear",
    "draw_circle",
    "draw_line",
    "draw_rect",
    "draw_triangle_down",
]
