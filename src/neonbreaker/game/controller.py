"""
Game controller: owns the session and drives the state machine.

Lifecycle:
    1. start() - fresh session, ball stuck to paddle, frame ticker running
    2. launch() - ball released, second ticker started on first launch
    3. tick() - one physics step, effects and render per frame
    4. WON / LOST - tickers stopped, last frame drawn, end hooks emitted
"""

import logging
import random
from typing import Any

from neonbreaker.animation.effects import EffectsSystem
from neonbreaker.config.settings import Settings, get_settings, parse_speed_level
from neonbreaker.core.errors import RenderSurfaceError
from neonbreaker.core.events import Event, EventBus, EventType
from neonbreaker.core.scheduler import TickerFactory, create_interval_task
from neonbreaker.core.state import GameState, StateMachine
from neonbreaker.game.entities import GameSession
from neonbreaker.game.physics import CollisionKind, PhysicsEngine, TickResult
from neonbreaker.game.policies import CheatMode, ProgressionPolicy, create_progression_policy
from neonbreaker.hardware.base import DisplaySink, FrameSnapshot, RenderSink

logger = logging.getLogger(__name__)

LAUNCH_INSTRUCTION = "CLICK or PRESS ANY KEY to LAUNCH"

EVENT_FOR_COLLISION: dict[CollisionKind, EventType] = {
    CollisionKind.BRICK_BROKEN: EventType.BRICK_BROKEN,
    CollisionKind.WALL_BOUNCE: EventType.WALL_BOUNCE,
    CollisionKind.PADDLE_BOUNCE: EventType.PADDLE_BOUNCE,
    CollisionKind.LIFE_LOST: EventType.LIFE_LOST,
}


class BrickBreakerGame:
    """One brick breaker game instance.

    All mutable game state lives on this object and its GameSession,
    so several games can run side by side.
    """

    def __init__(
        self,
        render_sink: RenderSink | None,
        display_sink: DisplaySink | None = None,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
        ticker_factory: TickerFactory = create_interval_task,
        frame_ticker_factory: TickerFactory | None = None,
        rng: random.Random | None = None,
        progression: ProgressionPolicy | None = None,
        cheats: CheatMode | None = None,
    ) -> None:
        if render_sink is None:
            raise RenderSurfaceError("No render surface available")

        self.settings = settings or get_settings()
        self.render_sink = render_sink
        self.display_sink = display_sink
        self.bus = event_bus or EventBus()

        self.state_machine = StateMachine()
        self.state_machine.add_listener(self._on_state_changed)

        playfield = self.settings.playfield
        self.physics = PhysicsEngine(playfield, self.settings.gameplay, rng)
        self.effects = EffectsSystem(
            self.settings.effects, (playfield.width, playfield.height), rng
        )
        self.effects.attach(self.bus)

        self.cheats = cheats or CheatMode(self.settings.gameplay.cheats_enabled)
        self.progression = progression or create_progression_policy(
            self.settings.gameplay.progression
        )

        self.speed_level = self.settings.gameplay.default_speed
        self.steer_direction = 0
        self.session = self._new_session()
        self._frame = 0

        fps = max(1, self.settings.simulator.fps)
        self._frame_ticker = (frame_ticker_factory or ticker_factory)(
            "frame-ticker", 1.0 / fps, self.tick, lambda: self.is_playing
        )
        self._second_ticker = ticker_factory(
            "second-ticker", 1.0, self.on_second, lambda: self.is_playing
        )

        self._unsubscribers = self._subscribe_inputs()

        self._refresh_display()
        self._render()
        logger.info("BrickBreakerGame initialized")

    # State

    @property
    def state(self) -> GameState:
        return self.state_machine.state

    @property
    def is_playing(self) -> bool:
        return self.state_machine.is_playing

    @property
    def frame_ticker(self):
        return self._frame_ticker

    @property
    def second_ticker(self):
        return self._second_ticker

    # Operations

    def start(self, speed_level: Any = None) -> bool:
        """Begin a new session. No-op while a session is already running."""
        if self.is_playing:
            logger.debug("start() ignored, game already running")
            return False
        if self.render_sink is None:
            raise RenderSurfaceError("No render surface available")

        if speed_level is not None:
            self.speed_level = parse_speed_level(speed_level)

        self._stop_tickers()
        self.session = self._new_session()
        self.cheats.clear()
        self._frame = 0

        self.bus.emit(Event(
            EventType.SESSION_STARTED,
            data={"speed_level": self.speed_level},
            source="game",
        ))
        self.state_machine.transition(GameState.STUCK)

        self._refresh_display()
        self._render()
        self._frame_ticker.start()
        logger.info(f"Session started at speed {self.speed_level}")
        return True

    def launch(self) -> bool:
        """Release the ball from the paddle."""
        if self.state is not GameState.STUCK:
            return False

        session = self.session
        if not self.physics.launch(session):
            return False

        self.state_machine.transition(GameState.LAUNCHED)
        logger.info(f"Ball launched, {session.lives} lives")
        self.bus.emit(Event(
            EventType.BALL_LAUNCHED,
            data={"x": session.ball.x, "y": session.ball.y},
            source="game",
        ))

        if not session.timer_started:
            session.timer_started = True
            self._second_ticker.start()
        return True

    def launch_or_start(self) -> bool:
        """Click / any key: launch when stuck, start when not playing."""
        state = self.state
        if state is GameState.STUCK:
            return self.launch()
        if state is GameState.LAUNCHED:
            return False
        return self.start()

    def pointer_move(self, x: float) -> None:
        """Centre the paddle on a pointer x in field coordinates."""
        if self.state_machine.is_over:
            return
        if not 0 < x < self.settings.playfield.width:
            return

        session = self.session
        session.paddle.center_on(x)
        if session.ball.stuck_to_paddle:
            session.ball.follow(session.paddle)

    def steer(self, direction: int) -> None:
        """Hold the paddle moving left (-1), right (1) or stop (0).

        The held direction outlives the session, so a key still down
        across start() or reset() keeps steering.
        """
        self.steer_direction = (direction > 0) - (direction < 0)
        self.session.steer_direction = self.steer_direction

    def change_speed(self, value: Any) -> bool:
        """Select the speed for the next session. Ignored while playing."""
        if self.is_playing:
            logger.debug(f"Speed change to {value!r} ignored while playing")
            return False

        self.speed_level = parse_speed_level(value)
        logger.info(f"Speed changed to {self.speed_level}")
        return True

    def tick(self) -> None:
        """Run one frame: physics, events, effects, render."""
        if not self.is_playing:
            return

        session = self.session
        result = self.physics.step(session)
        self._frame += 1
        self._publish(result)

        if result.score_delta and self.display_sink:
            self.display_sink.set_score(session.score)
        if result.lives_delta and self.display_sink:
            self.display_sink.set_lives(session.lives)

        if result.won:
            self._end_session(GameState.WON)
            return
        if result.lost:
            self._end_session(GameState.LOST)
            return

        if result.missed:
            self.state_machine.transition(GameState.STUCK)
        elif self.state is GameState.LAUNCHED:
            self.effects.record_ball(session.ball.x, session.ball.y)

        self.effects.update()
        self._render()

    def on_second(self) -> None:
        """Once-per-second elapsed time counter."""
        if not self.is_playing:
            return
        self.session.elapsed_seconds += 1
        if self.display_sink:
            self.display_sink.set_time(self.session.elapsed_seconds)

    def reset(self, play: bool = False) -> None:
        """Reinitialise everything into IDLE, or straight into a new session."""
        self._stop_tickers()
        self.session = self._new_session()
        self.cheats.clear()
        self._frame = 0

        self.bus.emit(Event(EventType.SESSION_RESET, data={"play": play}, source="game"))
        self.state_machine.reset(GameState.STUCK if play else GameState.IDLE)

        self._refresh_display()
        self._render()
        if play:
            self._frame_ticker.start()

    def next_level(self) -> bool:
        """After a win, start the session the progression policy offers."""
        if self.state is not GameState.WON:
            return False
        speed = self.progression.next_speed(self.session.speed_level)
        if speed is None:
            return False
        return self.start(speed)

    def enter_cheat(self, char: str) -> str | None:
        """Feed a typed character to the cheat buffer."""
        if not self.is_playing:
            return None

        cheat = self.cheats.feed(char)
        session = self.session
        if cheat == "clear":
            for brick in list(session.bricks.alive()):
                self.physics.break_brick(session, brick)
            if self.display_sink:
                self.display_sink.set_score(session.score)
        elif cheat == "life":
            session.lives += 1
            if self.display_sink:
                self.display_sink.set_lives(session.lives)
        return cheat

    def snapshot(self) -> FrameSnapshot:
        """Current frame for render sinks."""
        session = self.session
        playfield = self.settings.playfield
        return FrameSnapshot(
            width=playfield.width,
            height=playfield.height,
            state=self.state,
            bricks=list(session.bricks),
            ball=session.ball,
            paddle=session.paddle,
            trail=self.effects.trail.samples(),
            particles=list(self.effects.particles),
            instruction=LAUNCH_INSTRUCTION if self.state is GameState.STUCK else None,
            frame=self._frame,
        )

    def close(self) -> None:
        """Stop tickers and drop bus subscriptions."""
        self._stop_tickers()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.effects.detach()

    # Internals

    def _new_session(self) -> GameSession:
        session = GameSession.create(
            self.settings.playfield,
            lives=self.settings.gameplay.initial_lives,
            speed_level=self.speed_level,
            base_speed=self.settings.base_speed(self.speed_level),
        )
        session.steer_direction = self.steer_direction
        return session

    def _end_session(self, final_state: GameState) -> None:
        if not self.state_machine.transition(final_state):
            return

        self._stop_tickers()
        self._render()

        session = self.session
        won = final_state is GameState.WON
        data = {
            "score": session.score,
            "elapsed_seconds": session.elapsed_seconds,
            "speed_level": session.speed_level,
        }
        if won:
            data["challenge"] = self.progression.challenge_message(session.speed_level)
            data["next_speed"] = self.progression.next_speed(session.speed_level)

        logger.info(
            f"Game {'won' if won else 'lost'}: score={session.score} "
            f"time={session.elapsed_seconds}s"
        )
        self.bus.emit(Event(
            EventType.GAME_WON if won else EventType.GAME_LOST,
            data=data,
            source="game",
        ))

    def _publish(self, result: TickResult) -> None:
        for collision in result.events:
            self.bus.emit(Event(
                EVENT_FOR_COLLISION[collision.kind],
                data={
                    "x": collision.x,
                    "y": collision.y,
                    "color": collision.color,
                    "axis": collision.axis,
                },
                source="physics",
            ))

    def _stop_tickers(self) -> None:
        self._frame_ticker.stop()
        self._second_ticker.stop()

    def _refresh_display(self) -> None:
        if self.display_sink is None:
            return
        session = self.session
        self.display_sink.set_score(session.score)
        self.display_sink.set_time(session.elapsed_seconds)
        self.display_sink.set_lives(session.lives)

    def _render(self) -> None:
        self.render_sink.render(self.snapshot())

    def _on_state_changed(self, old_state: GameState, new_state: GameState) -> None:
        self.bus.emit(Event(
            EventType.STATE_CHANGED,
            data={"old": old_state, "new": new_state},
            source="state_machine",
        ))

    def _subscribe_inputs(self) -> list:
        bus = self.bus
        return [
            bus.subscribe(EventType.POINTER_MOVE, lambda e: self.pointer_move(e.data["x"])),
            bus.subscribe(EventType.LAUNCH_OR_START, lambda e: self.launch_or_start()),
            bus.subscribe(EventType.SPEED_CHANGED, lambda e: self.change_speed(e.data.get("level"))),
            bus.subscribe(EventType.STEER, lambda e: self.steer(e.data.get("direction", 0))),
            bus.subscribe(EventType.CHEAT_KEY, lambda e: self.enter_cheat(e.data.get("char", ""))),
            bus.subscribe(EventType.NEXT_LEVEL, lambda e: self.next_level()),
            bus.subscribe(EventType.RESET, lambda e: self.reset(e.data.get("play", False))),
        ]
