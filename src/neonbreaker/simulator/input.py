"""
Input adapter: pygame mouse/keyboard events to game intents.

Mapping:
    Mouse move over the field: POINTER_MOVE (paddle follows)
    Mouse click on the field: LAUNCH_OR_START
    Any other key: LAUNCH_OR_START (and CHEAT_KEY for letters)
    LEFT/RIGHT or A/D: STEER while held
    1 / 2 / 3: SPEED_CHANGED
    N: NEXT_LEVEL
    BACKSPACE: RESET
"""

import logging

import pygame

from neonbreaker.core.events import (
    Event,
    EventBus,
    EventType,
    launch_or_start_event,
    pointer_move_event,
    speed_changed_event,
    steer_event,
)

logger = logging.getLogger(__name__)

LEFT_KEYS = frozenset({pygame.K_LEFT, pygame.K_a})
RIGHT_KEYS = frozenset({pygame.K_RIGHT, pygame.K_d})
SPEED_KEYS = {pygame.K_1: 1, pygame.K_2: 2, pygame.K_3: 3}


class InputAdapter:
    """Translates pygame events for a field drawn at `field_rect`."""

    def __init__(self, event_bus: EventBus, field_rect: pygame.Rect) -> None:
        self.event_bus = event_bus
        self.field_rect = field_rect
        self._left_held = False
        self._right_held = False

    def handle(self, event: pygame.event.Event) -> bool:
        """Process one pygame event. Returns True if it produced an intent."""
        if event.type == pygame.MOUSEMOTION:
            return self._handle_motion(event.pos)
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.field_rect.collidepoint(event.pos):
                self._emit(launch_or_start_event(source="mouse"))
                return True
            return False
        if event.type == pygame.KEYDOWN:
            return self._handle_keydown(event)
        if event.type == pygame.KEYUP:
            return self._handle_keyup(event)
        return False

    def _handle_motion(self, pos: tuple[int, int]) -> bool:
        relative_x = pos[0] - self.field_rect.x
        if not 0 < relative_x < self.field_rect.width:
            return False
        self._emit(pointer_move_event(relative_x, source="mouse"))
        return True

    def _handle_keydown(self, event: pygame.event.Event) -> bool:
        key = event.key

        if key in SPEED_KEYS:
            self._emit(speed_changed_event(SPEED_KEYS[key], source="keyboard"))
            return True
        if key == pygame.K_n:
            self._emit(Event(EventType.NEXT_LEVEL, source="keyboard"))
            return True
        if key == pygame.K_BACKSPACE:
            self._emit(Event(EventType.RESET, data={"play": False}, source="keyboard"))
            return True

        if key in LEFT_KEYS:
            self._left_held = True
            self._emit_steer()
        elif key in RIGHT_KEYS:
            self._right_held = True
            self._emit_steer()

        char = getattr(event, "unicode", "")
        if char and char.isalpha():
            self._emit(Event(EventType.CHEAT_KEY, data={"char": char}, source="keyboard"))

        # Any key releases the ball
        self._emit(launch_or_start_event(source="keyboard"))
        return True

    def _handle_keyup(self, event: pygame.event.Event) -> bool:
        if event.key in LEFT_KEYS:
            self._left_held = False
        elif event.key in RIGHT_KEYS:
            self._right_held = False
        else:
            return False
        self._emit_steer()
        return True

    def _emit_steer(self) -> None:
        direction = int(self._right_held) - int(self._left_held)
        self._emit(steer_event(direction))

    def _emit(self, event: Event) -> None:
        logger.debug(f"Input: {event.type.name} {event.data}")
        self.event_bus.emit(event)
