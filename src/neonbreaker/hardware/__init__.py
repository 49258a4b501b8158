"""Output interfaces for Neon Breaker."""

from .base import DisplaySink, FrameSnapshot, RenderSink

__all__ = [
    "DisplaySink",
    "FrameSnapshot",
    "RenderSink",
]
