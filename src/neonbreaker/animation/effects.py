"""Cosmetic reactions to game events.

EffectsSystem listens on the event bus and turns collisions and state
changes into particle bursts and trail updates. It never writes back
into the physics.
"""

import logging
import random

from neonbreaker.animation.particles import ConfettiShower, ParticleSystem, Trail
from neonbreaker.config.settings import EffectsSettings
from neonbreaker.core.events import Event, EventBus, EventType
from neonbreaker.core.state import GameState

logger = logging.getLogger(__name__)

RELEASE_COLOR = (0, 229, 255)
MISS_COLOR = (255, 56, 96)


class EffectsSystem:
    """Particles, trail and confetti for one game."""

    def __init__(
        self,
        settings: EffectsSettings,
        field_size: tuple[int, int],
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings
        self.particles = ParticleSystem(settings.particle_burst, rng)
        self.trail = Trail(settings.trail_length)
        self.confetti = ConfettiShower(field_size[0], field_size[1], rng)
        self._unsubscribers: list = []

    def attach(self, bus: EventBus) -> None:
        """Subscribe to the events that drive effects."""
        self.detach()
        self._unsubscribers = [
            bus.subscribe(EventType.BRICK_BROKEN, self._on_brick_broken),
            bus.subscribe(EventType.LIFE_LOST, self._on_life_lost),
            bus.subscribe(EventType.BALL_LAUNCHED, self._on_ball_launched),
            bus.subscribe(EventType.STATE_CHANGED, self._on_state_changed),
            bus.subscribe(EventType.SESSION_STARTED, self._on_session_started),
            bus.subscribe(EventType.SESSION_RESET, self._on_session_started),
            bus.subscribe(EventType.GAME_WON, self._on_game_won),
        ]

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def record_ball(self, x: float, y: float) -> None:
        """Sample the free-flying ball position into the trail."""
        self.trail.record(x, y)

    def update(self) -> None:
        """Advance particles one frame."""
        self.particles.update()

    def clear(self) -> None:
        self.particles.clear()
        self.trail.clear()
        self.confetti.stop()

    def _on_brick_broken(self, event: Event) -> None:
        self.particles.burst(event.data["x"], event.data["y"], event.data["color"])

    def _on_life_lost(self, event: Event) -> None:
        self.particles.burst(event.data["x"], event.data["y"], MISS_COLOR)

    def _on_ball_launched(self, event: Event) -> None:
        self.particles.burst(event.data["x"], event.data["y"], RELEASE_COLOR)

    def _on_state_changed(self, event: Event) -> None:
        if event.data.get("new") is GameState.STUCK:
            self.trail.clear()

    def _on_session_started(self, event: Event) -> None:
        self.clear()

    def _on_game_won(self, event: Event) -> None:
        if self.settings.confetti:
            logger.debug("Starting confetti")
            self.confetti.start(self.settings.confetti_count)
