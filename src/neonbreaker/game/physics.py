"""Ball, paddle and brick physics.

One call to PhysicsEngine.step() is one frame. Velocities are in field
units per frame, so there is no delta-time scaling. The engine mutates
the session in place and reports what happened as a TickResult whose
events feed the cosmetic effects.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
import logging
import random

from neonbreaker.config.settings import FieldSettings, GameplaySettings
from neonbreaker.game.entities import Brick, Color, GameSession, Outcome
from neonbreaker.game.geometry import Axis, clamp_magnitude, overlaps, reflection_axis

logger = logging.getLogger(__name__)


class CollisionKind(Enum):
    BRICK_BROKEN = auto()
    WALL_BOUNCE = auto()
    PADDLE_BOUNCE = auto()
    LIFE_LOST = auto()


@dataclass
class CollisionEvent:
    kind: CollisionKind
    x: float
    y: float
    color: Color | None = None
    axis: Axis | None = None


@dataclass
class TickResult:
    """What a single physics step changed."""

    events: list[CollisionEvent] = field(default_factory=list)
    score_delta: int = 0
    lives_delta: int = 0
    won: bool = False
    lost: bool = False
    missed: bool = False

    def of_kind(self, kind: CollisionKind) -> list[CollisionEvent]:
        return [event for event in self.events if event.kind is kind]


class PhysicsEngine:
    """Advances the ball and resolves wall, paddle and brick collisions."""

    def __init__(
        self,
        playfield: FieldSettings,
        gameplay: GameplaySettings,
        rng: random.Random | None = None,
    ) -> None:
        self.playfield = playfield
        self.gameplay = gameplay
        self._rng = rng or random.Random()

    def launch(self, session: GameSession) -> bool:
        """Release a stuck ball. Returns False if it was already free."""
        ball, paddle = session.ball, session.paddle
        if not ball.stuck_to_paddle:
            return False

        ball.stuck_to_paddle = False
        ball.dy = -session.base_speed
        # Gentler than a paddle bounce
        ball.dx = (ball.x - paddle.center_x) * self.gameplay.launch_factor
        logger.debug(f"Ball launched dx={ball.dx:.2f} dy={ball.dy:.2f}")
        return True

    def step(self, session: GameSession) -> TickResult:
        """Run one frame of simulation."""
        result = TickResult()
        if session.is_over:
            return result

        self._steer(session)

        ball = session.ball
        if ball.stuck_to_paddle:
            ball.follow(session.paddle)
            return result

        self._collide_bricks(session, result)

        if session.all_bricks_cleared:
            session.outcome = Outcome.WON
            result.won = True
            logger.info(f"All {session.bricks.total} bricks cleared")
            return result

        self._collide_walls(session, result)

        if session.is_over:
            return result

        if ball.stuck_to_paddle:
            ball.follow(session.paddle)
        else:
            ball.x += ball.dx
            ball.y += ball.dy

        return result

    def break_brick(self, session: GameSession, brick: Brick, result: TickResult | None = None) -> None:
        """Destroy a brick and score it."""
        if not brick.alive:
            return
        brick.alive = False
        session.score += 1
        if result is not None:
            cx, cy = brick.center
            result.score_delta += 1
            result.events.append(CollisionEvent(
                CollisionKind.BRICK_BROKEN, cx, cy, color=brick.color
            ))

    def _steer(self, session: GameSession) -> None:
        if session.steer_direction == 0:
            return
        paddle = session.paddle
        paddle.move_to(paddle.x + session.steer_direction * self.gameplay.steer_speed)
        if session.ball.stuck_to_paddle:
            session.ball.follow(paddle)

    def _collide_bricks(self, session: GameSession, result: TickResult) -> None:
        ball = session.ball
        for brick in session.bricks.alive():
            ball_box = ball.box
            if not overlaps(ball_box, brick.box):
                continue

            axis = reflection_axis(ball_box, brick.box)
            if axis is Axis.HORIZONTAL:
                ball.dx = -ball.dx
            else:
                ball.dy = -ball.dy

            self.break_brick(session, brick, result)
            result.events[-1].axis = axis
            logger.debug(
                f"Brick ({brick.column},{brick.row}) broken, {axis.value} bounce, "
                f"score={session.score}"
            )

    def _collide_walls(self, session: GameSession, result: TickResult) -> None:
        ball = session.ball
        width, height = self.playfield.width, self.playfield.height
        r = ball.radius
        next_x = ball.x + ball.dx
        next_y = ball.y + ball.dy

        if next_x > width - r or next_x < r:
            ball.dx = -ball.dx
            result.events.append(CollisionEvent(
                CollisionKind.WALL_BOUNCE, ball.x, ball.y, axis=Axis.HORIZONTAL
            ))

        if next_y < r:
            ball.dy = -ball.dy
            # Jitter breaks up purely vertical loops
            jitter = self._rng.uniform(-self.gameplay.top_wall_jitter, self.gameplay.top_wall_jitter)
            ball.dx = clamp_magnitude(
                ball.dx + jitter,
                self.gameplay.min_horizontal_speed,
                session.base_speed * 2,
            )
            result.events.append(CollisionEvent(
                CollisionKind.WALL_BOUNCE, ball.x, ball.y, axis=Axis.VERTICAL
            ))
        elif next_y > height - r - self.playfield.paddle_height:
            self._collide_paddle_or_miss(session, result, next_y)

    def _collide_paddle_or_miss(self, session: GameSession, result: TickResult, next_y: float) -> None:
        ball, paddle = session.ball, session.paddle
        r = ball.radius
        height = self.playfield.height

        if paddle.x < ball.x < paddle.x + paddle.width:
            if ball.dy <= 0:
                return
            ball.dy = -ball.dy
            ball.dx = clamp_magnitude(
                (ball.x - paddle.center_x) * self.gameplay.paddle_bounce_factor,
                self.gameplay.min_horizontal_speed,
            )
            # Keep the ball above the paddle so it cannot sink through
            ceiling = height - paddle.height - r - 1
            if ball.y > ceiling:
                ball.y = ceiling
            result.events.append(CollisionEvent(
                CollisionKind.PADDLE_BOUNCE, ball.x, ball.y, axis=Axis.VERTICAL
            ))
        elif next_y > height - r:
            self._miss(session, result)

    def _miss(self, session: GameSession, result: TickResult) -> None:
        ball, paddle = session.ball, session.paddle
        session.lives -= 1
        result.lives_delta -= 1
        result.missed = True
        result.events.append(CollisionEvent(
            CollisionKind.LIFE_LOST, ball.x, ball.y + 10
        ))

        if session.lives <= 0:
            session.outcome = Outcome.LOST
            result.lost = True
            logger.info("Ball missed, no lives left")
        else:
            paddle.recenter()
            ball.dx = ball.dy = 0.0
            ball.stick_to(paddle)
            logger.info(f"Ball missed, {session.lives} lives left")
