import pytest

from neonbreaker.core.errors import RenderSurfaceError
from neonbreaker.core.events import Event, EventBus, EventType, launch_or_start_event, speed_changed_event
from neonbreaker.core.state import GameState
from neonbreaker.game.controller import LAUNCH_INSTRUCTION, BrickBreakerGame
from neonbreaker.game.policies import CheatMode, SpeedUpOnWin

from conftest import RecordingRenderSink, free_ball


def play_until_stuck(game):
    game.start()
    assert game.state is GameState.STUCK


def launched(game):
    play_until_stuck(game)
    assert game.launch()
    return game.session


def set_up_last_brick(game):
    """Leave only brick (0,0) standing with the ball about to hit it."""
    session = game.session
    target = session.bricks.at(0, 0)
    for brick in session.bricks:
        if brick is not target:
            game.physics.break_brick(session, brick)
    free_ball(session, 67.5, 58, 0, -1)


def set_up_miss(game):
    game.session.paddle.move_to(0)
    free_ball(game.session, 500, 589, 0, 2)


class TestConstruction:

    def test_missing_render_sink_raises(self, settings):
        with pytest.raises(RenderSurfaceError):
            BrickBreakerGame(None, settings=settings)

    def test_initial_idle_frame(self, game, render_sink, display_sink):
        assert game.state is GameState.IDLE
        assert len(render_sink.frames) == 1
        frame = render_sink.last
        assert len(frame.bricks) == 45
        assert frame.ball.stuck_to_paddle
        assert frame.instruction is None
        assert display_sink.scores[-1] == 0
        assert display_sink.lives[-1] == 3
        assert display_sink.times[-1] == 0


class TestStart:

    def test_start_enters_stuck_and_runs_frame_ticker(self, game, render_sink):
        assert game.start()
        assert game.state is GameState.STUCK
        assert game.frame_ticker.running
        assert not game.second_ticker.running
        assert render_sink.last.instruction == LAUNCH_INSTRUCTION

    def test_start_is_noop_while_playing(self, game):
        game.start()
        session = game.session
        assert not game.start()
        assert game.session is session
        assert game.frame_ticker.starts == 1

    def test_start_from_event_bus(self, game, bus):
        bus.emit(launch_or_start_event())
        assert game.state is GameState.STUCK
        bus.emit(launch_or_start_event())
        assert game.state is GameState.LAUNCHED


class TestLaunch:

    def test_launch_starts_timer_once(self, game):
        launched(game)
        assert game.state is GameState.LAUNCHED
        assert game.second_ticker.running

        set_up_miss(game)
        game.tick()
        assert game.state is GameState.STUCK
        assert game.session.lives == 2

        game.launch()
        assert game.second_ticker.starts == 1

    def test_launch_only_when_stuck(self, game):
        assert not game.launch()
        launched(game)
        assert not game.launch()

    def test_launch_emits_event_with_ball_position(self, game, bus):
        session = launched(game)
        event = bus.get_history(EventType.BALL_LAUNCHED)[-1]
        assert event.data["x"] == session.ball.x


class TestPointer:

    def test_pointer_moves_paddle_and_stuck_ball(self, game):
        game.pointer_move(200)
        assert game.session.paddle.x == 150
        assert game.session.ball.x == 200

    @pytest.mark.parametrize("x", [0, 800, -5, 900])
    def test_pointer_outside_field_is_ignored(self, game, x):
        game.pointer_move(x)
        assert game.session.paddle.x == 350

    def test_held_steer_survives_new_session(self, game, bus):
        bus.emit(Event(EventType.STEER, data={"direction": 1}))
        game.start()
        assert game.session.steer_direction == 1
        game.tick()
        assert game.session.paddle.x == 354
        assert game.session.ball.x == game.session.paddle.center_x

        game.reset(play=True)
        game.tick()
        assert game.session.paddle.x == 354

        game.steer(0)
        game.reset(play=True)
        game.tick()
        assert game.session.paddle.x == 350

    def test_pointer_ignored_after_game_over(self, game):
        launched(game)
        game.session.lives = 1
        set_up_miss(game)
        game.tick()
        paddle_x = game.session.paddle.x
        game.pointer_move(100)
        assert game.session.paddle.x == paddle_x


class TestSpeed:

    def test_speed_change_applies_to_next_session(self, game):
        assert game.change_speed("3")
        game.start()
        assert game.session.speed_level == 3
        assert game.session.base_speed == 3.0
        game.launch()
        assert game.session.ball.dy == -3.0

    def test_speed_ignored_while_playing(self, game, bus):
        game.start()
        bus.emit(speed_changed_event(3))
        assert game.speed_level == 1
        assert game.session.base_speed == 1.0

    @pytest.mark.parametrize("value", ["fast", None, 0, 7, "", "2.5"])
    def test_malformed_speed_falls_back_to_one(self, game, value):
        game.change_speed(2)
        game.change_speed(value)
        assert game.speed_level == 1


class TestTick:

    def test_trail_records_while_launched(self, game):
        launched(game)
        for _ in range(15):
            game.tick()
        assert len(game.effects.trail) == 10
        assert game.render_sink.frames[-1].instruction is None

    def test_trail_cleared_on_restick(self, game):
        launched(game)
        game.tick()
        assert len(game.effects.trail) == 1
        set_up_miss(game)
        game.tick()
        assert len(game.effects.trail) == 0

    def test_brick_break_updates_score_display(self, game, display_sink):
        launched(game)
        for row in range(1, 5):
            game.session.bricks.at(0, row).alive = False
        free_ball(game.session, 67.5, 58, 0, -1)
        game.tick()
        assert display_sink.scores[-1] == 1
        assert len(game.effects.particles) > 0

    def test_tick_is_noop_when_not_playing(self, game, render_sink):
        frames = len(render_sink.frames)
        game.tick()
        assert len(render_sink.frames) == frames

    def test_ticker_fires_tick(self, game):
        launched(game)
        y = game.session.ball.y
        game.frame_ticker.fire(3)
        assert game.session.ball.y == pytest.approx(y - 3)


class TestEndings:

    def test_lost_exactly_once(self, game, bus, display_sink):
        launched(game)
        game.session.lives = 1
        set_up_miss(game)

        game.tick()
        game.tick()

        assert game.state is GameState.LOST
        assert len(bus.get_history(EventType.GAME_LOST)) == 1
        assert display_sink.lives[-1] == 0
        assert not game.frame_ticker.running
        assert not game.second_ticker.running

    def test_last_brick_wins(self, game, bus, render_sink):
        launched(game)
        set_up_last_brick(game)

        game.tick()
        frames = len(render_sink.frames)
        game.frame_ticker.fire()
        game.tick()

        assert game.state is GameState.WON
        assert game.session.score == 45
        assert len(render_sink.frames) == frames
        assert not game.frame_ticker.running

        won = bus.get_history(EventType.GAME_WON)
        assert len(won) == 1
        assert won[0].data["score"] == 45
        assert "faster speed" in won[0].data["challenge"]
        assert won[0].data["next_speed"] is None

    def test_win_at_top_speed_has_no_challenge(self, game, bus):
        game.change_speed(3)
        launched(game)
        set_up_last_brick(game)
        game.tick()
        assert bus.get_history(EventType.GAME_WON)[-1].data["challenge"] is None

    def test_win_starts_confetti(self, game):
        launched(game)
        set_up_last_brick(game)
        game.tick()
        assert game.effects.confetti.active

    def test_restart_after_loss(self, game):
        launched(game)
        game.session.lives = 1
        set_up_miss(game)
        game.tick()

        assert game.launch_or_start()
        assert game.state is GameState.STUCK
        assert game.session.lives == 3
        assert game.session.bricks.alive_count == 45


class TestTimer:

    def test_seconds_count_up(self, game, display_sink):
        launched(game)
        game.second_ticker.fire(3)
        assert game.session.elapsed_seconds == 3
        assert display_sink.times[-1] == 3

    def test_seconds_ignored_when_not_playing(self, game):
        game.on_second()
        assert game.session.elapsed_seconds == 0


class TestResetAndLevels:

    def test_reset_to_idle(self, game):
        session = launched(game)
        session.score = 12
        game.reset()
        assert game.state is GameState.IDLE
        assert game.session.score == 0
        assert game.session.lives == 3
        assert not game.frame_ticker.running
        assert not game.second_ticker.running

    def test_reset_and_play(self, game, bus):
        launched(game)
        bus.emit(Event(EventType.RESET, data={"play": True}))
        assert game.state is GameState.STUCK
        assert game.frame_ticker.running

    def test_next_level_needs_speed_up_policy(self, game):
        launched(game)
        set_up_last_brick(game)
        game.tick()
        assert not game.next_level()
        assert game.state is GameState.WON

    def test_next_level_speeds_up(self, make_game, bus):
        game = make_game(progression=SpeedUpOnWin())
        launched(game)
        set_up_last_brick(game)
        game.tick()

        assert bus.get_history(EventType.GAME_WON)[-1].data["next_speed"] == 2
        assert game.next_level()
        assert game.state is GameState.STUCK
        assert game.session.speed_level == 2
        game.close()

    def test_next_level_only_after_win(self, make_game):
        game = make_game(progression=SpeedUpOnWin())
        game.start()
        assert not game.next_level()
        game.close()


class TestCheats:

    def test_disabled_by_default(self, game):
        game.start()
        for char in "clear":
            assert game.enter_cheat(char) is None
        assert game.session.bricks.alive_count == 45

    def test_clear_wins_on_next_free_tick(self, make_game, bus):
        game = make_game(cheats=CheatMode(enabled=True))
        game.start()
        results = [game.enter_cheat(c) for c in "clear"]
        assert results[-1] == "clear"
        assert game.session.bricks.alive_count == 0

        game.tick()
        assert game.state is GameState.STUCK

        game.launch()
        game.tick()
        assert game.state is GameState.WON
        assert len(bus.get_history(EventType.GAME_WON)) == 1
        game.close()

    def test_life_adds_a_life(self, make_game, display_sink):
        game = make_game(cheats=CheatMode(enabled=True))
        game.start()
        for c in "life":
            game.enter_cheat(c)
        assert game.session.lives == 4
        assert display_sink.lives[-1] == 4
        game.close()

    def test_cheats_ignored_when_idle(self, make_game):
        game = make_game(cheats=CheatMode(enabled=True))
        for c in "life":
            assert game.enter_cheat(c) is None
        assert game.session.lives == 3
        game.close()


class TestIndependence:

    def test_two_games_do_not_share_state(self, make_game):
        a = make_game()
        b = make_game(render_sink=RecordingRenderSink(), event_bus=EventBus())
        launched(a)
        a.session.score = 5

        assert b.state is GameState.IDLE
        assert b.session.score == 0
        assert b.session is not a.session
        a.close()
        b.close()
