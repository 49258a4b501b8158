"""Plain state records for the ball, paddle, bricks and game session."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from neonbreaker.config.settings import BRICK_COLORS, FieldSettings
from neonbreaker.game.geometry import Box, circle_box, clamp

Color = tuple[int, int, int]


class Outcome(Enum):
    """How a session ended."""
    NONE = auto()
    WON = auto()
    LOST = auto()


@dataclass
class Paddle:
    x: float  # left edge
    y: float  # top edge
    width: float
    height: float
    field_width: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    def move_to(self, x: float) -> None:
        """Set the left edge, clamped to the field."""
        self.x = clamp(x, 0.0, self.field_width - self.width)

    def center_on(self, x: float) -> None:
        """Centre the paddle on x, clamped to the field."""
        self.move_to(x - self.width / 2)

    def recenter(self) -> None:
        self.move_to((self.field_width - self.width) / 2)


@dataclass
class Ball:
    x: float
    y: float
    radius: float
    dx: float = 0.0
    dy: float = 0.0
    stuck_to_paddle: bool = True

    @property
    def box(self) -> Box:
        return circle_box(self.x, self.y, self.radius)

    def stick_to(self, paddle: Paddle) -> None:
        """Rest the ball on the paddle at the canonical launch spot."""
        self.stuck_to_paddle = True
        self.follow(paddle)

    def follow(self, paddle: Paddle) -> None:
        """Re-derive position from the paddle (stuck balls only)."""
        self.x = paddle.center_x
        self.y = paddle.y - self.radius - 2


@dataclass
class Brick:
    column: int
    row: int
    x: float
    y: float
    width: float
    height: float
    color: Color
    alive: bool = True

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    @property
    def center(self) -> tuple[float, float]:
        return self.box.center


class BrickGrid:
    """Fixed column-major grid of bricks: cells[column][row]."""

    def __init__(self, config: FieldSettings) -> None:
        self.columns = config.brick_columns
        self.rows = config.brick_rows
        self.cells: list[list[Brick]] = []

        for col in range(self.columns):
            column: list[Brick] = []
            for row in range(self.rows):
                column.append(Brick(
                    column=col,
                    row=row,
                    x=col * (config.brick_width + config.brick_padding) + config.brick_offset_left,
                    y=row * (config.brick_height + config.brick_padding) + config.brick_offset_top,
                    width=config.brick_width,
                    height=config.brick_height,
                    color=BRICK_COLORS[row % len(BRICK_COLORS)],
                ))
            self.cells.append(column)

    def __iter__(self) -> Iterator[Brick]:
        """Iterate column by column, top to bottom."""
        for column in self.cells:
            yield from column

    def __len__(self) -> int:
        return self.columns * self.rows

    def at(self, column: int, row: int) -> Brick:
        return self.cells[column][row]

    @property
    def total(self) -> int:
        return len(self)

    @property
    def alive_count(self) -> int:
        return sum(1 for brick in self if brick.alive)

    def alive(self) -> Iterator[Brick]:
        return (brick for brick in self if brick.alive)


@dataclass
class GameSession:
    """Everything that belongs to one play-through."""

    ball: Ball
    paddle: Paddle
    bricks: BrickGrid
    lives: int
    speed_level: int
    base_speed: float
    score: int = 0
    elapsed_seconds: int = 0
    outcome: Outcome = Outcome.NONE
    timer_started: bool = False
    steer_direction: int = 0

    @classmethod
    def create(
        cls,
        config: FieldSettings,
        lives: int,
        speed_level: int,
        base_speed: float,
    ) -> "GameSession":
        """Build a fresh session with bricks and canonical ball/paddle."""
        paddle = Paddle(
            x=(config.width - config.paddle_width) / 2,
            y=config.height - config.paddle_height,
            width=config.paddle_width,
            height=config.paddle_height,
            field_width=config.width,
        )
        ball = Ball(x=0.0, y=0.0, radius=config.ball_radius)
        ball.stick_to(paddle)

        return cls(
            ball=ball,
            paddle=paddle,
            bricks=BrickGrid(config),
            lives=lives,
            speed_level=speed_level,
            base_speed=base_speed,
        )

    @property
    def is_over(self) -> bool:
        return self.outcome is not Outcome.NONE

    @property
    def all_bricks_cleared(self) -> bool:
        return self.score == self.bricks.total
