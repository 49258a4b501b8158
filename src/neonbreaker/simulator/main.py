"""
Simulator entry point.

Runs Neon Breaker in a desktop pygame window.
"""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from neonbreaker.config.settings import get_settings
from neonbreaker.core.errors import RenderSurfaceError
from neonbreaker.core.events import Event, EventBus, EventType
from neonbreaker.core.scheduler import create_frame_ticker
from neonbreaker.game.controller import BrickBreakerGame
from neonbreaker.graphics.renderer import FieldRenderer
from neonbreaker.simulator.mock_hardware.display import SimulatedField, SimulatedStatusBar
from neonbreaker.simulator.window import SimulatorWindow, WindowConfig

logger = logging.getLogger(__name__)

# Emitted every mouse move or bounce; too chatty for the debug event log
QUIET_EVENTS = frozenset({EventType.POINTER_MOVE, EventType.WALL_BOUNCE, EventType.PADDLE_BOUNCE})


def setup_logging(debug: bool = False) -> None:
    """Configure logging for simulator with file output."""
    log_file = Path.cwd() / "simulator.log"

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )
    level = logging.DEBUG if debug else logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # File handler - truncate on each run for fresh logs
    file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Reduce noise from per-frame modules
    logging.getLogger("neonbreaker.simulator.input").setLevel(logging.INFO)
    logging.getLogger("neonbreaker.animation").setLevel(logging.INFO)

    logging.info(f"Logging to file: {log_file}")


class NeonBreakerSimulator:
    """Wires the game, its sinks and the window together."""

    def __init__(self):
        self.settings = get_settings()
        self.event_bus = EventBus()

        playfield = self.settings.playfield
        self.renderer = FieldRenderer(playfield.width, playfield.height)
        self.status_bar = SimulatedStatusBar()

        self.game = BrickBreakerGame(
            render_sink=self.renderer,
            display_sink=self.status_bar,
            settings=self.settings,
            event_bus=self.event_bus,
            frame_ticker_factory=create_frame_ticker,
        )

        sim = self.settings.simulator
        self.window = SimulatorWindow(
            field=SimulatedField(self.renderer),
            status_bar=self.status_bar,
            event_bus=self.event_bus,
            confetti=self.game.effects.confetti,
            config=WindowConfig(
                title=sim.title,
                fps=sim.fps,
                fullscreen=sim.fullscreen,
                status_bar_height=sim.status_bar_height,
                show_debug=self.settings.debug,
            ),
            on_frame=self.game.frame_ticker.advance,
        )

        if self.settings.debug:
            self.event_bus.subscribe_all(self._log_event)

        logger.info("NeonBreakerSimulator initialized")

    def _log_event(self, event: Event) -> None:
        if event.type in QUIET_EVENTS:
            return
        logger.debug(f"Event {event.type}: {event.data} from {event.source}")

    async def run(self) -> None:
        """Run the simulator."""
        logger.info("Starting Neon Breaker Simulator...")
        try:
            await self.window.run()
        finally:
            self.game.close()


async def run() -> None:
    simulator = NeonBreakerSimulator()
    await simulator.run()


def main() -> None:
    """Main entry point for simulator."""
    load_dotenv()
    setup_logging(get_settings().debug)

    logger.info("=" * 50)
    logger.info("Neon Breaker Starting")
    logger.info("=" * 50)
    logger.info("")
    logger.info("Controls:")
    logger.info("  MOUSE / ARROWS / A,D  - Move paddle")
    logger.info("  CLICK / ANY KEY       - Launch ball, start game")
    logger.info("  1 / 2 / 3             - Speed for the next game")
    logger.info("  N                     - Next level after a win")
    logger.info("  BACKSPACE             - Reset")
    logger.info("  F12                   - Screenshot")
    logger.info("  ESC                   - Quit")
    logger.info("")

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Simulator stopped by user")
    except RenderSurfaceError as e:
        logger.error(f"No render surface: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Simulator error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
