"""Exceptions raised by Neon Breaker."""


class NeonBreakerError(Exception):
    """Base class for all game errors."""


class RenderSurfaceError(NeonBreakerError):
    """No render surface is available, so a session cannot start."""
