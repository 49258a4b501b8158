"""Render sink that draws the playfield into a numpy frame buffer."""

from typing import Optional
import math
import time
import numpy as np
from numpy.typing import NDArray

from neonbreaker.core.state import GameState
from neonbreaker.graphics.primitives import (
    clear, draw_circle, draw_line, draw_rect, draw_triangle_down
)
from neonbreaker.hardware.base import FrameSnapshot, RenderSink

# Colors
BG_COLOR = (10, 14, 23)
GRID_COLOR = (0, 229, 255)
ACCENT_COLOR = (0, 229, 255)
PADDLE_TOP = (20, 27, 45)
PADDLE_BOTTOM = (10, 14, 23)
BALL_COLOR = (255, 0, 229)
BALL_CORE = (255, 255, 255)
WHITE = (255, 255, 255)

GRID_SIZE = 30


class FieldRenderer(RenderSink):
    """Draws frames into an RGB buffer the window blits to screen.

    The sci-fi grid background is drawn once and copied in at the
    start of every frame.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.buffer: NDArray[np.uint8] = np.zeros((height, width, 3), dtype=np.uint8)
        self.last_snapshot: Optional[FrameSnapshot] = None
        self.frames_rendered = 0
        self._background = self._build_background()

    def render(self, snapshot: FrameSnapshot) -> None:
        """Draw background, bricks, trail, ball, paddle, particles, overlay."""
        buffer = self.buffer
        np.copyto(buffer, self._background)

        self._render_bricks(buffer, snapshot)
        self._render_trail(buffer, snapshot)
        self._render_ball(buffer, snapshot)
        self._render_paddle(buffer, snapshot)
        self._render_particles(buffer, snapshot)
        if snapshot.instruction:
            self._render_launch_arrow(buffer)

        self.last_snapshot = snapshot
        self.frames_rendered += 1

    def _build_background(self) -> NDArray[np.uint8]:
        background = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        clear(background, BG_COLOR)
        for y in range(0, self.height, GRID_SIZE):
            draw_line(background, 0, y, self.width - 1, y, GRID_COLOR, alpha=0.1)
        for x in range(0, self.width, GRID_SIZE):
            draw_line(background, x, 0, x, self.height - 1, GRID_COLOR, alpha=0.1)
        return background

    def _render_bricks(self, buffer: NDArray[np.uint8], snapshot: FrameSnapshot) -> None:
        for brick in snapshot.bricks:
            if not brick.alive:
                continue
            x, y = int(brick.x), int(brick.y)
            w, h = int(brick.width), int(brick.height)

            draw_rect(buffer, x, y, w, h, brick.color)
            # Highlight along the top for a 3D look
            draw_rect(buffer, x, y, w, 2, WHITE, alpha=0.3)
            # Inner outline
            draw_rect(buffer, x + 3, y + 3, w - 6, h - 6, WHITE, filled=False, alpha=0.2)

    def _render_trail(self, buffer: NDArray[np.uint8], snapshot: FrameSnapshot) -> None:
        samples = snapshot.trail
        if not samples:
            return
        radius = snapshot.ball.radius
        for i, (tx, ty) in enumerate(samples):
            fade = (i + 1) / len(samples)
            draw_circle(buffer, tx, ty, max(1.0, radius * fade * 0.8), BALL_COLOR, alpha=fade * 0.4)

    def _render_ball(self, buffer: NDArray[np.uint8], snapshot: FrameSnapshot) -> None:
        ball = snapshot.ball
        radius = ball.radius

        if ball.stuck_to_paddle and snapshot.state is GameState.STUCK:
            # Pulse while waiting for launch
            radius *= math.sin(time.monotonic() * 5.0) * 0.15 + 1
            draw_circle(buffer, ball.x, ball.y, radius * 1.5, ACCENT_COLOR, alpha=0.2)

        draw_circle(buffer, ball.x, ball.y, radius + 2, BALL_COLOR, alpha=0.35)
        draw_circle(buffer, ball.x, ball.y, radius, BALL_COLOR)
        draw_circle(buffer, ball.x, ball.y, radius * 0.45, BALL_CORE, alpha=0.8)

    def _render_paddle(self, buffer: NDArray[np.uint8], snapshot: FrameSnapshot) -> None:
        paddle = snapshot.paddle
        x, y = int(paddle.x), int(paddle.y)
        w, h = int(paddle.width), int(paddle.height)

        draw_rect(buffer, x, y, w, h // 2, PADDLE_TOP)
        draw_rect(buffer, x, y + h // 2, w, h - h // 2, PADDLE_BOTTOM)

        # Glowing edge and side accents
        draw_rect(buffer, x, y - 2, w, 2, ACCENT_COLOR, alpha=0.35)
        draw_rect(buffer, x, y, w, 2, ACCENT_COLOR)
        draw_rect(buffer, x, y, 2, h, ACCENT_COLOR)
        draw_rect(buffer, x + w - 2, y, 2, h, ACCENT_COLOR)

    def _render_particles(self, buffer: NDArray[np.uint8], snapshot: FrameSnapshot) -> None:
        for particle in snapshot.particles:
            draw_circle(buffer, particle.x, particle.y, particle.radius, particle.color, alpha=particle.fade)

    def _render_launch_arrow(self, buffer: NDArray[np.uint8]) -> None:
        arrow_y = self.height - 120 + int(math.sin(time.monotonic() * 3.3) * 5)
        draw_triangle_down(buffer, self.width // 2, arrow_y, 10, ACCENT_COLOR)
