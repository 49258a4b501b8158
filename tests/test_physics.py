import random

import pytest

from neonbreaker.game.entities import Outcome
from neonbreaker.game.geometry import Axis
from neonbreaker.game.physics import CollisionKind, PhysicsEngine

from conftest import free_ball


def clear_all_but(session, keep):
    for brick in session.bricks:
        if brick is not keep:
            brick.alive = False


class TestLaunch:

    def test_launch_from_centre_goes_straight_up(self, physics, session):
        assert physics.launch(session)
        ball = session.ball
        assert not ball.stuck_to_paddle
        assert ball.dy == -1
        assert ball.dx == 0

    def test_launch_twice_is_noop(self, physics, session):
        physics.launch(session)
        session.ball.dx = 0.7
        assert not physics.launch(session)
        assert session.ball.dx == 0.7

    def test_stuck_ball_follows_steered_paddle(self, physics, session):
        session.steer_direction = 1
        physics.step(session)
        assert session.paddle.x == 354
        assert session.ball.x == session.paddle.center_x
        assert session.ball.y == 573


class TestBricks:

    def test_dead_centre_hit_from_below(self, physics, session):
        target = session.bricks.at(0, 0)
        for row in range(1, 5):
            session.bricks.at(0, row).alive = False
        ball = free_ball(session, 67.5, 58, 0, -1)

        result = physics.step(session)

        assert not target.alive
        assert session.score == 1
        assert result.score_delta == 1
        assert ball.dy == 1
        assert ball.dx == 0
        broken = result.of_kind(CollisionKind.BRICK_BROKEN)
        assert len(broken) == 1
        assert broken[0].axis is Axis.VERTICAL
        assert broken[0].color == target.color
        assert (broken[0].x, broken[0].y) == target.center

    def test_side_hit_flips_dx(self, physics, session):
        clear_all_but(session, session.bricks.at(1, 0))
        ball = free_ball(session, 107, 40, 1, 0.5)

        physics.step(session)

        assert ball.dx == -1
        assert ball.dy == 0.5

    def test_last_brick_wins_and_freezes(self, physics, session):
        target = session.bricks.at(0, 0)
        for brick in session.bricks:
            if brick is not target:
                physics.break_brick(session, brick)
        assert session.score == 44
        ball = free_ball(session, 67.5, 58, 0, -1)

        result = physics.step(session)

        assert result.won
        assert session.outcome is Outcome.WON
        assert session.score == 45
        # No integration on the winning frame
        assert (ball.x, ball.y) == (67.5, 58)

        assert physics.step(session).events == []
        assert (ball.x, ball.y) == (67.5, 58)


class TestWalls:

    def test_side_wall_reflects(self, physics, session):
        ball = free_ball(session, 795, 300, 1, 1)
        result = physics.step(session)
        assert ball.dx == -1
        assert result.of_kind(CollisionKind.WALL_BOUNCE)[0].axis is Axis.HORIZONTAL

    def test_top_wall_adds_minimum_horizontal_speed(self, physics, session):
        ball = free_ball(session, 400, 11, 0, -2)
        physics.step(session)
        assert ball.dy == 2
        assert abs(ball.dx) == pytest.approx(0.5)

    @pytest.mark.parametrize("seed", range(20))
    def test_top_wall_jitter_is_bounded(self, settings, session, seed):
        physics = PhysicsEngine(settings.playfield, settings.gameplay, random.Random(seed))
        ball = free_ball(session, 400, 10.5, 1.9, -1)
        physics.step(session)
        assert 0.5 <= abs(ball.dx) <= 2.0
        assert ball.dy == 1


class TestPaddle:

    def test_off_centre_bounce(self, physics, session):
        ball = free_ball(session, 405, 575, 0, 1)
        result = physics.step(session)

        assert ball.dy == -1
        assert ball.dx == pytest.approx(0.75)
        # Clamped to just above the paddle, then integrated
        assert ball.y == pytest.approx(573)
        assert result.of_kind(CollisionKind.PADDLE_BOUNCE)

    def test_centre_bounce_keeps_minimum_dx(self, physics, session):
        ball = free_ball(session, 400, 575, 0, 1)
        physics.step(session)
        assert ball.dx == pytest.approx(0.5)

    def test_upward_ball_in_paddle_zone_is_not_bounced(self, physics, session):
        ball = free_ball(session, 400, 580, 0, -1)
        result = physics.step(session)
        assert ball.dy == -1
        assert not result.of_kind(CollisionKind.PADDLE_BOUNCE)


class TestMiss:

    def test_miss_costs_a_life_and_resticks(self, physics, session):
        session.paddle.move_to(0)
        free_ball(session, 500, 589, 1, 2)

        result = physics.step(session)

        assert result.missed
        assert not result.lost
        assert result.lives_delta == -1
        assert session.lives == 2
        ball = session.ball
        assert ball.stuck_to_paddle
        assert session.paddle.x == 350
        assert ball.x == session.paddle.x + session.paddle.width / 2
        assert ball.y == 573
        assert (ball.dx, ball.dy) == (0, 0)
        # Burst where the ball fell, not where it was re-stuck
        lost = result.of_kind(CollisionKind.LIFE_LOST)[0]
        assert (lost.x, lost.y) == (500, 599)

    def test_last_life_loses(self, physics, session):
        session.lives = 1
        free_ball(session, 50, 589, 0, 2)

        result = physics.step(session)

        assert result.lost
        assert session.lives == 0
        assert session.outcome is Outcome.LOST
        assert physics.step(session).events == []
