"""
Desktop window using pygame.

Hosts the animation controller: owns the display surface and the clock,
turns clock frames into TICK events and repaints when asked.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..animation.controller import AnimationController
from ..config.settings import Settings
from ..core.events import EventType, Event, tick_event
from ..graphics.surface import PygameSurface

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Window configuration."""
    width: int = 800
    height: int = 600
    title: str = "Waving Indian Flag"
    fps: int = 40
    show_debug: bool = False

    # Debug overlay colors
    debug_color: tuple[int, int, int] = (200, 200, 220)
    debug_bg_color: tuple[int, int, int] = (40, 40, 50)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        return cls(
            fps=settings.fps,
            show_debug=settings.debug,
        )


class FlagWindow:
    """
    Main window running the tick loop.

    The only input handled is the window close button.
    """

    def __init__(
        self,
        controller: AnimationController,
        config: WindowConfig | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.controller = controller
        self.event_bus = controller.event_bus

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._surface: PygameSurface | None = None
        self._clock: pygame.time.Clock | None = None
        self._small_font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._dirty = True

        self.event_bus.subscribe(EventType.TICK, self.controller.on_tick)
        self.event_bus.subscribe(EventType.REDRAW, self._on_redraw)
        self.event_bus.subscribe(EventType.PHASE_CHANGED, self._on_phase_changed)

        logger.info("FlagWindow created")

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def running(self) -> bool:
        return self._running

    def _on_redraw(self, event: Event) -> None:
        self._dirty = True

    def _on_phase_changed(self, event: Event) -> None:
        logger.debug(f"Phase changed at frame {self._frame_count}: {event.data['to'].name}")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            pygame.DOUBLEBUF
        )
        self._clock = pygame.time.Clock()
        self._surface = PygameSurface(self._screen)

        pygame.font.init()
        if self.config.show_debug:
            self._small_font = pygame.font.SysFont("monospace", 12)

        self._dirty = True
        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

    async def step(self) -> None:
        """Run a single frame: events, tick, repaint."""
        self._handle_events()
        if not self._running:
            return

        delta = self._clock.get_time() / 1000.0 if self._clock else 0.0
        self.event_bus.emit(tick_event(delta, self._frame_count))

        # Deliver what the tick queued (REDRAW, PHASE_CHANGED)
        await self.event_bus.process_queue()

        if self._dirty:
            self._render()

        self._frame_count += 1

    def _render(self) -> None:
        """Let the controller paint the frame, then flip."""
        if not self._surface:
            return

        self.controller.render(self._surface)
        if self.config.show_debug:
            self._render_debug_overlay()

        pygame.display.flip()
        self._dirty = False

    def _render_debug_overlay(self) -> None:
        """Render FPS, frame and phase in the top-right corner."""
        if not self._small_font:
            return

        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"Phase: {self.controller.phase.name}",
        ]

        rect = pygame.Rect(self.config.width - 170, 10, 160, 18 * len(lines) + 8)
        pygame.draw.rect(self._screen, self.config.debug_bg_color, rect, border_radius=5)

        y = rect.y + 4
        for line in lines:
            text_surface = self._small_font.render(line, True, self.config.debug_color)
            self._screen.blit(text_surface, (rect.x + 8, y))
            y += 18

    async def run(self, max_frames: Optional[int] = None) -> None:
        """Main loop. Runs until the window is closed or max_frames is reached."""
        self._init_pygame()
        self._running = True

        logger.info("Animation started")

        try:
            while self._running:
                await self.step()

                # Frame timing
                if self._clock:
                    self._clock.tick(self.config.fps)

                if max_frames is not None and self._frame_count >= max_frames:
                    self._running = False

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info(f"Window closed after {self._frame_count} frames")

    def stop(self) -> None:
        """Stop the loop after the current frame."""
        self._running = False
