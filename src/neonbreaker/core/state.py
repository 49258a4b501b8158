"""
State machine for the brick breaker game flow.

States:
    IDLE: Bricks shown, ball resting on the paddle, no session running
    STUCK: Session running, ball follows the paddle awaiting launch
    LAUNCHED: Session running, ball moving freely, physics active
    LOST: Session over, no lives left
    WON: Session over, every brick destroyed
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Game states."""
    IDLE = auto()
    STUCK = auto()
    LAUNCHED = auto()
    LOST = auto()
    WON = auto()


PLAYING_STATES = frozenset({GameState.STUCK, GameState.LAUNCHED})
TERMINAL_STATES = frozenset({GameState.LOST, GameState.WON})

StateListener = Callable[[GameState, GameState], None]


class StateMachine:
    """
    Tracks the game state and validates transitions.

    Listeners are called with (old_state, new_state) after every
    accepted transition, including resets.
    """

    # Valid state transitions
    VALID_TRANSITIONS: list[tuple[GameState, GameState]] = [
        # start
        (GameState.IDLE, GameState.STUCK),
        (GameState.LOST, GameState.STUCK),
        (GameState.WON, GameState.STUCK),

        # launch
        (GameState.STUCK, GameState.LAUNCHED),

        # miss with lives remaining
        (GameState.LAUNCHED, GameState.STUCK),

        # session end
        (GameState.LAUNCHED, GameState.WON),
        (GameState.LAUNCHED, GameState.LOST),
    ]

    def __init__(self, initial_state: GameState = GameState.IDLE) -> None:
        self._state = initial_state
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> GameState:
        """Get current state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        """True while a session is running (stuck or launched)."""
        return self._state in PLAYING_STATES

    @property
    def is_over(self) -> bool:
        """True once a session has been won or lost."""
        return self._state in TERMINAL_STATES

    def can_transition(self, to_state: GameState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: GameState) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def reset(self, to_state: GameState = GameState.IDLE) -> None:
        """Force the machine into IDLE or STUCK regardless of the current state."""
        if to_state not in (GameState.IDLE, GameState.STUCK):
            raise ValueError(f"Cannot reset into {to_state.name}")

        old_state = self._state
        self._state = to_state
        logger.info(f"StateMachine reset: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, old_state: GameState, new_state: GameState) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state)
            except Exception:
                logger.exception("Error in state listener")
