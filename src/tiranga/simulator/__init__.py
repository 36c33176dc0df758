"""Desktop host for the animation."""

from .window import FlagWindow, WindowConfig

__all__ = ["FlagWindow", "WindowConfig"]
