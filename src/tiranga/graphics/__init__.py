"""Graphics module for tiranga rendering."""

from tiranga.graphics.primitives import (
    clear,
    draw_circle,
    draw_line,
    draw_text,
)
from tiranga.graphics.surface import (
    DrawingSurface,
    BufferSurface,
    PygameSurface,
    FontSpec,
)

__all__ = [
    # Surfaces
    "DrawingSurface",
    "BufferSurface",
    "PygameSurface",
    "FontSpec",
    # Primitives
    "draw_circle",
    "draw_line",
    "draw_text",
    "clear",
]
