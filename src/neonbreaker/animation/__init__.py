"""Cosmetic animation for Neon Breaker."""

from neonbreaker.animation.particles import (
    ConfettiShower,
    Particle,
    ParticleSystem,
    Trail,
)
from neonbreaker.animation.effects import EffectsSystem

__all__ = [
    "ConfettiShower",
    "EffectsSystem",
    "Particle",
    "ParticleSystem",
    "Trail",
]
