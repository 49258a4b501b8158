"""Simulated output devices for the desktop window."""

from .display import SimulatedField, SimulatedStatusBar

__all__ = [
    "SimulatedField",
    "SimulatedStatusBar",
]
