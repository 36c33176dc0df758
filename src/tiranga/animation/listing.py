"""The static text shown before the flag: the controller's own listing."""

import inspect
import logging

logger = logging.getLogger(__name__)

FALLBACK_LISTING: tuple[str, ...] = (
    "# tiranga",
    "# source listing unavailable, unfurling the flag anyway",
)


def load_listing() -> tuple[str, ...]:
    """
    Read the animation controller's source as a tuple of lines.

    Falls back to a short banner when the package ships without sources.
    """
    from tiranga.animation import controller

    try:
        source = inspect.getsource(controller)
    except OSError as e:
        logger.warning(f"Source listing unavailable: {e}")
        return FALLBACK_LISTING

    return tuple(source.splitlines())
