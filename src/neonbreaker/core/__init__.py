"""Core framework components for Neon Breaker."""

from .state import GameState, StateMachine
from .events import EventBus, Event, EventType
from .scheduler import FrameTicker, IntervalTask
from .errors import NeonBreakerError, RenderSurfaceError

__all__ = [
    "GameState",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "FrameTicker",
    "IntervalTask",
    "NeonBreakerError",
    "RenderSurfaceError",
]
