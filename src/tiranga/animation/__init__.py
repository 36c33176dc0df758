"""Animation module for tiranga."""

from tiranga.animation.controller import AnimationController
from tiranga.animation.flag import FlagLayout, wave_offset
from tiranga.animation.listing import load_listing

__all__ = [
    "AnimationController",
    "FlagLayout",
    "wave_offset",
    "load_listing",
]
