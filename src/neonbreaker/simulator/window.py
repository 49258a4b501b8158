"""
Main simulator window using pygame.

Hosts the playfield surface, the status bar above it and the
end-of-game overlay. Input is translated by InputAdapter; the game
advances one frame per loop iteration through `on_frame`, while its
second ticker runs on the same asyncio event loop.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable

import pygame

from neonbreaker.animation.particles import ConfettiShower
from neonbreaker.core.errors import RenderSurfaceError
from neonbreaker.core.events import Event, EventBus, EventType
from .input import InputAdapter
from .mock_hardware.display import SimulatedField, SimulatedStatusBar

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    title: str = "Neon Breaker"
    fps: int = 60
    fullscreen: bool = False
    status_bar_height: int = 40
    show_debug: bool = False
    debug_history: int = 5

    # Colors
    bg_color: tuple[int, int, int] = (10, 14, 23)
    panel_color: tuple[int, int, int] = (20, 27, 45)
    text_color: tuple[int, int, int] = (200, 220, 230)
    accent_color: tuple[int, int, int] = (0, 229, 255)
    heart_color: tuple[int, int, int] = (255, 56, 96)
    win_color: tuple[int, int, int] = (24, 255, 255)
    lose_color: tuple[int, int, int] = (255, 56, 96)


@dataclass
class EndBanner:
    """Text shown over the frozen field when a session ends."""
    title: str
    color: tuple[int, int, int]
    lines: list[str]


class SimulatorWindow:
    """
    Desktop window for the game.

    Keyboard Mapping:
        Mouse / LEFT / RIGHT / A / D: Move paddle
        Click or any key: Launch ball / start game
        1 / 2 / 3: Speed for the next game
        N: Next level after a win
        BACKSPACE: Reset to idle
        F1: Toggle debug overlay
        F12: Capture screenshot
        ESC: Exit simulator
    """

    def __init__(
        self,
        field: SimulatedField,
        status_bar: SimulatedStatusBar,
        event_bus: EventBus,
        confetti: ConfettiShower | None = None,
        config: WindowConfig | None = None,
        on_frame: Callable[[], object] | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.on_frame = on_frame
        self.field = field
        self.status_bar = status_bar
        self.event_bus = event_bus
        self.confetti = confetti

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = self.config.show_debug

        self._field_rect = pygame.Rect(
            0, self.config.status_bar_height, field.width, field.height
        )
        self.input = InputAdapter(event_bus, self._field_rect)

        # Fonts
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

        self._banner: EndBanner | None = None
        self._unsubscribers = [
            event_bus.subscribe(EventType.GAME_WON, self._on_game_won),
            event_bus.subscribe(EventType.GAME_LOST, self._on_game_lost),
            event_bus.subscribe(EventType.SESSION_STARTED, self._on_session_cleared),
            event_bus.subscribe(EventType.SESSION_RESET, self._on_session_cleared),
        ]

        logger.info("SimulatorWindow created")

    @property
    def size(self) -> tuple[int, int]:
        return self.field.width, self.field.height + self.config.status_bar_height

    @property
    def banner(self) -> EndBanner | None:
        return self._banner

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        try:
            pygame.init()
            pygame.display.set_caption(self.config.title)

            flags = pygame.DOUBLEBUF
            if self.config.fullscreen:
                flags |= pygame.SCALED | pygame.FULLSCREEN

            self._screen = pygame.display.set_mode(self.size, flags)
        except pygame.error as e:
            raise RenderSurfaceError(f"Cannot open game window: {e}") from e

        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont("DejaVu Sans", 20, bold=True)
        self._small_font = pygame.font.SysFont("DejaVu Sans", 16)
        self._title_font = pygame.font.SysFont("DejaVu Sans", 48, bold=True)

        logger.info(f"Pygame initialized: {self.size[0]}x{self.size[1]}")

    # Event hooks

    def _on_game_won(self, event: Event) -> None:
        data = event.data
        lines = [f"Score: {data.get('score', 0)}   Time: {data.get('elapsed_seconds', 0)}s"]
        if data.get("challenge"):
            lines.append(data["challenge"])
        lines.append("Click or press any key to play again")
        self._banner = EndBanner("YOU WIN!", self.config.win_color, lines)

    def _on_game_lost(self, event: Event) -> None:
        data = event.data
        lines = [
            f"Score: {data.get('score', 0)}   Time: {data.get('elapsed_seconds', 0)}s",
            "Click or press any key to try again",
        ]
        self._banner = EndBanner("GAME OVER", self.config.lose_color, lines)

    def _on_session_cleared(self, event: Event) -> None:
        self._banner = None

    # Input

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_F1:
                self._show_debug = not self._show_debug
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_F12:
                self._capture_screenshot()
            else:
                self.input.handle(event)

    # Rendering

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)
        self._render_status_bar()
        self._screen.blit(self.field.render(), self._field_rect.topleft)
        self._render_instruction()
        self._render_confetti()
        self._render_banner()
        if self._show_debug:
            self._render_debug_panel()

        pygame.display.flip()

    def _render_status_bar(self) -> None:
        rect = pygame.Rect(0, 0, self.field.width, self.config.status_bar_height)
        pygame.draw.rect(self._screen, self.config.panel_color, rect)
        pygame.draw.line(
            self._screen, self.config.accent_color,
            (0, rect.bottom - 1), (rect.right, rect.bottom - 1)
        )
        if not self._font:
            return

        score, hearts, elapsed = self.status_bar.segments()
        score_surf = self._font.render(score, True, self.config.text_color)
        hearts_surf = self._font.render(hearts, True, self.config.heart_color)
        time_surf = self._font.render(elapsed, True, self.config.text_color)

        y = rect.centery
        self._screen.blit(score_surf, score_surf.get_rect(midleft=(15, y)))
        self._screen.blit(hearts_surf, hearts_surf.get_rect(center=(rect.centerx, y)))
        self._screen.blit(time_surf, time_surf.get_rect(midright=(rect.right - 15, y)))

    def _render_instruction(self) -> None:
        snapshot = self.field.renderer.last_snapshot
        if not snapshot or not snapshot.instruction or not self._small_font:
            return
        text = self._small_font.render(snapshot.instruction, True, self.config.accent_color)
        center = (self._field_rect.centerx, self._field_rect.bottom - 150)
        self._screen.blit(text, text.get_rect(center=center))

    def _render_confetti(self) -> None:
        if not self.confetti or not self.confetti.active:
            return
        self.confetti.update()
        ox, oy = self._field_rect.topleft
        for piece in self.confetti.pieces:
            rect = pygame.Rect(0, 0, piece.size, piece.size * 0.6)
            rect.center = (int(ox + piece.x), int(oy + piece.y))
            pygame.draw.rect(self._screen, piece.color, rect)

    def _render_banner(self) -> None:
        banner = self._banner
        if banner is None or not self._title_font or not self._small_font:
            return

        shade = pygame.Surface(self._field_rect.size, pygame.SRCALPHA)
        shade.fill((0, 0, 0, 150))
        self._screen.blit(shade, self._field_rect.topleft)

        cx, cy = self._field_rect.center
        title = self._title_font.render(banner.title, True, banner.color)
        self._screen.blit(title, title.get_rect(center=(cx, cy - 60)))

        y = cy
        for line in banner.lines:
            text = self._small_font.render(line, True, self.config.text_color)
            self._screen.blit(text, text.get_rect(center=(cx, y)))
            y += 28

    def debug_lines(self) -> list[str]:
        """Text for the debug overlay: loop stats and the latest bus events."""
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            "",
            "---- EVENTS ----",
        ]
        for event in self.event_bus.get_history(limit=self.config.debug_history):
            name = getattr(event.type, "name", event.type)
            lines.append(f"{name} ({event.source})")
        return lines

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        if not self._small_font:
            return

        lines = self.debug_lines()
        line_height = 18
        rect = pygame.Rect(
            self._field_rect.right - 270, self._field_rect.top + 10,
            260, line_height * len(lines) + 16,
        )
        panel = pygame.Surface(rect.size, pygame.SRCALPHA)
        panel.fill((*self.config.panel_color, 200))
        self._screen.blit(panel, rect.topleft)

        y = rect.top + 8
        for line in lines:
            if line:
                text = self._small_font.render(line, True, self.config.text_color)
                self._screen.blit(text, (rect.left + 10, y))
            y += line_height

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    # Loop

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()
            self._advance_frame()
            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)
            self._frame_count += 1

            # Yield to the second ticker and other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _advance_frame(self) -> None:
        """Step the game one frame, ahead of drawing it."""
        if self.on_frame is not None:
            self.on_frame()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
