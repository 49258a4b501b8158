"""Neon Breaker: a neon arcade brick breaker."""

__version__ = "0.1.0"
