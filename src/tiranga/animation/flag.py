"""Flag geometry and the three flag draw routines."""

from dataclasses import dataclass
import math

from tiranga.graphics.primitives import Color
from tiranga.graphics.surface import DrawingSurface

FLAG_WIDTH = 600
FLAG_HEIGHT = 400

SAFFRON: Color = (255, 153, 51)
WHITE: Color = (255, 255, 255)
GREEN: Color = (19, 136, 8)
NAVY_BLUE: Color = (0, 0, 128)

STRIPE_COLORS: tuple[Color, Color, Color] = (SAFFRON, WHITE, GREEN)

WAVE_AMPLITUDE = 15.0
WAVE_FREQUENCY = 0.02  # radians per column

# Ashoka Chakra
SPOKE_COUNT = 24
SPOKE_STEP_DEGREES = 15
HUB_RADIUS = 5
EMBLEM_STROKE = 2


@dataclass(frozen=True)
class FlagLayout:
    """Where the flag sits on a surface."""
    start_x: int
    start_y: int
    width: int = FLAG_WIDTH
    height: int = FLAG_HEIGHT

    @classmethod
    def centered(
        cls,
        surface_width: int,
        surface_height: int,
        width: int = FLAG_WIDTH,
        height: int = FLAG_HEIGHT,
    ) -> "FlagLayout":
        """Center a flag of the given size on a surface."""
        return cls(
            start_x=(surface_width - width) // 2,
            start_y=(surface_height - height) // 2,
            width=width,
            height=height,
        )

    @property
    def stripe_height(self) -> int:
        return self.height // 3

    @property
    def center(self) -> tuple[int, int]:
        return self.start_x + self.width // 2, self.start_y + self.height // 2

    @property
    def emblem_radius(self) -> int:
        return self.stripe_height // 2 - 5


def wave_offset(x: float, phase: float) -> float:
    """Vertical cloth displacement at column x for the given wave phase."""
    return WAVE_AMPLITUDE * math.sin(WAVE_FREQUENCY * (x + phase))


def _draw_column(surface: DrawingSurface, layout: FlagLayout, x: int, y_offset: int) -> None:
    """Draw one column of all three stripes."""
    column = layout.start_x + x
    stripe = layout.stripe_height
    top = layout.start_y + y_offset
    for i, color in enumerate(STRIPE_COLORS):
        surface.draw_line((column, top + i * stripe), (column, top + (i + 1) * stripe), color)


def draw_stripes_progressively(
    surface: DrawingSurface, layout: FlagLayout, progress_columns: int
) -> None:
    """
    Paint the stripes up to progress_columns, left to right.

    The emblem appears once every column is painted.
    """
    for x in range(min(progress_columns, layout.width)):
        _draw_column(surface, layout, x, 0)

    if progress_columns >= layout.width:
        draw_emblem(surface, layout.center, layout.emblem_radius)


def draw_waving_flag(surface: DrawingSurface, layout: FlagLayout, phase: float) -> None:
    """Draw the whole flag with every column shifted by the wave."""
    for x in range(layout.width):
        _draw_column(surface, layout, x, int(wave_offset(x, phase)))

    cx, cy = layout.center
    emblem_offset = int(wave_offset(layout.width // 2, phase))
    draw_emblem(surface, (cx, cy + emblem_offset), layout.emblem_radius)


def draw_emblem(surface: DrawingSurface, center: tuple[int, int], radius: int) -> None:
    """Draw the navy wheel: rim, 24 spokes and a solid hub."""
    cx, cy = center
    surface.draw_circle_outline(center, radius, NAVY_BLUE, EMBLEM_STROKE)

    for i in range(SPOKE_COUNT):
        angle = math.radians(i * SPOKE_STEP_DEGREES)
        end = (int(cx + math.cos(angle) * radius), int(cy + math.sin(angle) * radius))
        surface.draw_line(center, end, NAVY_BLUE, EMBLEM_STROKE)

    surface.draw_filled_circle(center, HUB_RADIUS, NAVY_BLUE)
