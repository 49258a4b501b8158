"""
Periodic callbacks for the game's two clocks.

The frame ticker runs one simulation step and render per display
refresh, so it is advanced by the window loop itself (FrameTicker).
The second ticker counts elapsed time on the asyncio event loop
(IntervalTask). Both are started and stopped only on state transitions.
"""

from typing import Callable, Protocol
import asyncio
import logging

logger = logging.getLogger(__name__)


class Ticker(Protocol):
    """Start/stop handle for a periodic callback."""

    @property
    def running(self) -> bool: ...

    def start(self) -> bool: ...

    def stop(self) -> bool: ...


TickerFactory = Callable[[str, float, Callable[[], None], Callable[[], bool] | None], Ticker]


class IntervalTask:
    """
    Runs a callback every `interval` seconds in a single asyncio task.

    start() and stop() are idempotent: at most one task exists per
    instance, so repeated calls never stack timers. When
    `should_continue` is given it is checked before every callback and
    the task ends itself once it returns False.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        callback: Callable[[], None],
        should_continue: Callable[[], bool] | None = None,
    ) -> None:
        self.name = name
        self.interval = interval
        self._callback = callback
        self._should_continue = should_continue
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        """True while the underlying task is alive."""
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """
        Start the periodic task on the running event loop.

        Returns:
            True if a task was started, False if one was already running

        Raises:
            RuntimeError: if there is no running event loop
        """
        if self.running:
            logger.debug(f"{self.name} already running")
            return False

        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name=self.name)
        logger.info(f"{self.name} started ({self.interval:.3f}s)")
        return True

    def stop(self) -> bool:
        """Cancel the task. Returns True if a running task was cancelled."""
        if not self.running:
            self._task = None
            return False

        self._task.cancel()
        self._task = None
        logger.info(f"{self.name} stopped")
        return True

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        # Deadlines are absolute so a late wake-up does not push later ones
        deadline = loop.time()
        while True:
            deadline += self.interval
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            if self._should_continue is not None and not self._should_continue():
                logger.debug(f"{self.name} exiting, condition no longer holds")
                return
            try:
                self._callback()
            except Exception:
                logger.exception(f"Error in {self.name} callback")


class FrameTicker:
    """
    Ticker advanced once per display frame by the window loop.

    start()/stop() are idempotent like IntervalTask; advance() runs the
    callback only while started and while `should_continue` holds,
    stopping itself once it no longer does.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        callback: Callable[[], None],
        should_continue: Callable[[], bool] | None = None,
    ) -> None:
        self.name = name
        self.interval = interval  # nominal; pacing comes from the display
        self._callback = callback
        self._should_continue = should_continue
        self._running = False
        self.frames = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> bool:
        if self._running:
            logger.debug(f"{self.name} already running")
            return False
        self._running = True
        logger.info(f"{self.name} started (display paced)")
        return True

    def stop(self) -> bool:
        if not self._running:
            return False
        self._running = False
        logger.info(f"{self.name} stopped")
        return True

    def advance(self) -> bool:
        """Run one frame. Returns True if the callback ran."""
        if not self._running:
            return False
        if self._should_continue is not None and not self._should_continue():
            logger.debug(f"{self.name} exiting, condition no longer holds")
            self._running = False
            return False
        try:
            self._callback()
        except Exception:
            logger.exception(f"Error in {self.name} callback")
        self.frames += 1
        return True


def create_frame_ticker(
    name: str,
    interval: float,
    callback: Callable[[], None],
    should_continue: Callable[[], bool] | None = None,
) -> FrameTicker:
    """Ticker factory for a frame clock driven by the window loop."""
    return FrameTicker(name, interval, callback, should_continue)


def create_interval_task(
    name: str,
    interval: float,
    callback: Callable[[], None],
    should_continue: Callable[[], bool] | None = None,
) -> IntervalTask:
    """Default ticker factory used by the game controller."""
    return IntervalTask(name, interval, callback, should_continue)
