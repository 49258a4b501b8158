"""Shared fixtures: recording sinks, manual tickers, deterministic rng."""

import random

import pytest

from neonbreaker.config.settings import Settings
from neonbreaker.core.events import EventBus
from neonbreaker.game.controller import BrickBreakerGame
from neonbreaker.game.entities import GameSession
from neonbreaker.game.physics import PhysicsEngine
from neonbreaker.hardware.base import DisplaySink, FrameSnapshot, RenderSink


class RecordingRenderSink(RenderSink):
    def __init__(self):
        self.frames: list[FrameSnapshot] = []

    def render(self, snapshot: FrameSnapshot) -> None:
        self.frames.append(snapshot)

    @property
    def last(self) -> FrameSnapshot:
        return self.frames[-1]


class RecordingDisplaySink(DisplaySink):
    def __init__(self):
        self.scores: list[int] = []
        self.times: list[int] = []
        self.lives: list[int] = []

    def set_score(self, score: int) -> None:
        self.scores.append(score)

    def set_time(self, seconds: int) -> None:
        self.times.append(seconds)

    def set_lives(self, lives: int) -> None:
        self.lives.append(lives)


class ManualTicker:
    """Ticker fake that only fires when the test says so."""

    def __init__(self, name, interval, callback, should_continue=None):
        self.name = name
        self.interval = interval
        self.callback = callback
        self.should_continue = should_continue
        self.running = False
        self.starts = 0

    def start(self) -> bool:
        if self.running:
            return False
        self.running = True
        self.starts += 1
        return True

    def stop(self) -> bool:
        was_running = self.running
        self.running = False
        return was_running

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if not self.running:
                return
            if self.should_continue is not None and not self.should_continue():
                self.running = False
                return
            self.callback()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def render_sink():
    return RecordingRenderSink()


@pytest.fixture
def display_sink():
    return RecordingDisplaySink()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def session(settings):
    return GameSession.create(
        settings.playfield,
        lives=settings.gameplay.initial_lives,
        speed_level=1,
        base_speed=settings.base_speed(1),
    )


@pytest.fixture
def physics(settings, rng):
    return PhysicsEngine(settings.playfield, settings.gameplay, rng)


@pytest.fixture
def make_game(settings, render_sink, display_sink, bus, rng):
    def factory(**overrides):
        kwargs = dict(
            render_sink=render_sink,
            display_sink=display_sink,
            settings=settings,
            event_bus=bus,
            ticker_factory=ManualTicker,
            rng=rng,
        )
        kwargs.update(overrides)
        return BrickBreakerGame(**kwargs)
    return factory


@pytest.fixture
def game(make_game):
    g = make_game()
    yield g
    g.close()


def free_ball(session, x, y, dx, dy):
    """Put the session ball in flight at a given position/velocity."""
    ball = session.ball
    ball.stuck_to_paddle = False
    ball.x, ball.y, ball.dx, ball.dy = x, y, dx, dy
    return ball
