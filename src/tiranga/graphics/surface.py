"""
Drawing surfaces the animation renders onto.

``DrawingSurface`` is the contract; ``BufferSurface`` draws into a numpy
buffer (headless, used by tests) and ``PygameSurface`` draws into a pygame
window surface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging

import numpy as np
import pygame
from numpy.typing import NDArray

from tiranga.graphics.primitives import (
    Color, Point, FONT_HEIGHT, clear, draw_circle, draw_line, draw_text
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontSpec:
    """Font request: family name and point size."""
    name: str = "monospace"
    size: int = 12


class DrawingSurface(ABC):
    """Abstract base class for anything the controller can draw onto."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Surface width in pixels."""
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        """Surface height in pixels."""
        ...

    @abstractmethod
    def clear(self, color: Color = (0, 0, 0)) -> None:
        """Fill the whole surface with color."""
        ...

    @abstractmethod
    def draw_line(self, p1: Point, p2: Point, color: Color, width: int = 1) -> None:
        """Draw a line segment, endpoints inclusive."""
        ...

    @abstractmethod
    def draw_filled_circle(self, center: Point, radius: int, color: Color) -> None:
        """Draw a solid disk."""
        ...

    @abstractmethod
    def draw_circle_outline(
        self, center: Point, radius: int, color: Color, width: int = 1
    ) -> None:
        """Draw a circle outline with the given stroke width."""
        ...

    @abstractmethod
    def draw_text(self, text: str, position: Point, font: FontSpec, color: Color) -> None:
        """
        Draw a single line of text.

        Args:
            text: Text to draw
            position: Left end of the text baseline
            font: Requested font
            color: RGB color tuple
        """
        ...


class BufferSurface(DrawingSurface):
    """
    Surface backed by a numpy (height, width, 3) uint8 buffer.

    Text is drawn with the built-in bitmap font, scaled to roughly match
    the requested point size.
    """

    def __init__(self, width: int, height: int) -> None:
        self._width = max(0, width)
        self._height = max(0, height)
        self._buffer = np.zeros((self._height, self._width, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self, color: Color = (0, 0, 0)) -> None:
        clear(self._buffer, color)

    def draw_line(self, p1: Point, p2: Point, color: Color, width: int = 1) -> None:
        draw_line(self._buffer, p1[0], p1[1], p2[0], p2[1], color, thickness=width)

    def draw_filled_circle(self, center: Point, radius: int, color: Color) -> None:
        draw_circle(self._buffer, center[0], center[1], radius, color, filled=True)

    def draw_circle_outline(
        self, center: Point, radius: int, color: Color, width: int = 1
    ) -> None:
        draw_circle(
            self._buffer, center[0], center[1], radius, color,
            filled=False, thickness=width
        )

    def draw_text(self, text: str, position: Point, font: FontSpec, color: Color) -> None:
        scale = max(1, font.size // 10)
        x, baseline = position
        draw_text(self._buffer, text, x, baseline - FONT_HEIGHT * scale, color, scale=scale)

    def get_buffer(self) -> NDArray[np.uint8]:
        """Get copy of current buffer."""
        return self._buffer.copy()


class PygameSurface(DrawingSurface):
    """Surface that draws straight onto a pygame.Surface."""

    def __init__(self, surface: pygame.Surface) -> None:
        self._surface = surface
        self._fonts: dict[FontSpec, pygame.font.Font] = {}

    @property
    def width(self) -> int:
        return self._surface.get_width()

    @property
    def height(self) -> int:
        return self._surface.get_height()

    def clear(self, color: Color = (0, 0, 0)) -> None:
        self._surface.fill(color)

    def draw_line(self, p1: Point, p2: Point, color: Color, width: int = 1) -> None:
        # pygame only antialiases hairlines
        if width <= 1:
            pygame.draw.aaline(self._surface, color, p1, p2)
        else:
            pygame.draw.line(self._surface, color, p1, p2, width)

    def draw_filled_circle(self, center: Point, radius: int, color: Color) -> None:
        pygame.draw.circle(self._surface, color, center, radius)

    def draw_circle_outline(
        self, center: Point, radius: int, color: Color, width: int = 1
    ) -> None:
        pygame.draw.circle(self._surface, color, center, radius, width)

    def draw_text(self, text: str, position: Point, font: FontSpec, color: Color) -> None:
        if not text:
            return
        pg_font = self._get_font(font)
        # pygame can't render tabs
        text_surface = pg_font.render(text.expandtabs(4), True, color)
        x, baseline = position
        self._surface.blit(text_surface, (x, baseline - pg_font.get_ascent()))

    def _get_font(self, font: FontSpec) -> pygame.font.Font:
        """Resolve and cache a system font."""
        cached = self._fonts.get(font)
        if cached is None:
            if not pygame.font.get_init():
                pygame.font.init()
            cached = pygame.font.SysFont(font.name, font.size)
            self._fonts[font] = cached
            logger.debug(f"Loaded font {font.name} {font.size}pt")
        return cached
