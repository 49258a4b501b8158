"""
Event bus for Neon Breaker.

Provides synchronous pub/sub messaging between the input adapter,
the game controller and the cosmetic effects.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
from collections import defaultdict
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input intents
    POINTER_MOVE = auto()
    LAUNCH_OR_START = auto()
    SPEED_CHANGED = auto()
    STEER = auto()
    CHEAT_KEY = auto()
    NEXT_LEVEL = auto()
    RESET = auto()

    # Game flow
    STATE_CHANGED = auto()
    SESSION_STARTED = auto()
    SESSION_RESET = auto()
    BALL_LAUNCHED = auto()
    GAME_WON = auto()
    GAME_LOST = auto()

    # Collisions
    BRICK_BROKEN = auto()
    WALL_BOUNCE = auto()
    PADDLE_BOUNCE = auto()
    LIFE_LOST = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: Monotonic time of creation
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Handlers run synchronously in subscription order. A handler that
    raises is logged and skipped; the remaining handlers still run.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to every event. Returns an unsubscribe function."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event immediately."""
        self._add_to_history(event)

        handlers = list(self._handlers.get(event.type, [])) + self._global_handlers
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event.type}")

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]


# Convenience functions for creating input events
def pointer_move_event(x: float, source: str = "pointer") -> Event:
    """Create a pointer move event (x in field coordinates)."""
    return Event(EventType.POINTER_MOVE, data={"x": x}, source=source)


def launch_or_start_event(source: str = "input") -> Event:
    """Create a click/keypress launch-or-start event."""
    return Event(EventType.LAUNCH_OR_START, source=source)


def speed_changed_event(level: Any, source: str = "speed_selector") -> Event:
    """Create a speed selector event; level is parsed by the receiver."""
    return Event(EventType.SPEED_CHANGED, data={"level": level}, source=source)


def steer_event(direction: int, source: str = "keyboard") -> Event:
    """Create a keyboard steering event (-1 left, 0 stop, 1 right)."""
    return Event(EventType.STEER, data={"direction": direction}, source=source)
