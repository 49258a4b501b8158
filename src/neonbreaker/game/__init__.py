"""Brick breaker simulation: entities, physics, policies and controller."""

from neonbreaker.game.entities import Ball, Brick, BrickGrid, GameSession, Outcome, Paddle
from neonbreaker.game.physics import CollisionEvent, CollisionKind, PhysicsEngine, TickResult
from neonbreaker.game.policies import (
    CheatMode,
    ProgressionPolicy,
    SpeedUpOnWin,
    StayOnLevel,
    create_progression_policy,
)
from neonbreaker.game.controller import BrickBreakerGame

__all__ = [
    "Ball",
    "Brick",
    "BrickBreakerGame",
    "BrickGrid",
    "CheatMode",
    "CollisionEvent",
    "CollisionKind",
    "GameSession",
    "Outcome",
    "Paddle",
    "PhysicsEngine",
    "ProgressionPolicy",
    "SpeedUpOnWin",
    "StayOnLevel",
    "TickResult",
    "create_progression_policy",
]
