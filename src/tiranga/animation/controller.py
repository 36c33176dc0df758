"""Animation controller: the tick-driven state machine and its renderer."""

from typing import Callable, Optional, Sequence
import logging

from tiranga.core.events import Event, EventBus, EventType
from tiranga.core.state import AnimationState, Phase, advance, can_transition
from tiranga.animation.flag import (
    FLAG_WIDTH, FLAG_HEIGHT, FlagLayout,
    draw_stripes_progressively, draw_waving_flag,
)
from tiranga.graphics.primitives import Color
from tiranga.graphics.surface import DrawingSurface, FontSpec

logger = logging.getLogger(__name__)

BACKGROUND: Color = (0, 0, 0)
TEXT_COLOR: Color = (0, 255, 0)
TEXT_FONT = FontSpec("monospace", 12)

LINE_HEIGHT = 15
TOP_MARGIN = 20
LEFT_MARGIN = 20

PhaseListener = Callable[[Phase, Phase, AnimationState], None]


def max_visible_lines(surface_height: int, line_height: int = LINE_HEIGHT,
                      top_margin: int = TOP_MARGIN) -> int:
    """How many text lines fit between the top and bottom margins."""
    if line_height <= 0 or surface_height <= 0:
        return 0
    return max(0, (surface_height - 2 * top_margin) // line_height)


def visible_range(state: AnimationState, surface_height: int) -> range:
    """Indices of the listing lines visible for a snapshot on a surface this tall."""
    revealed = state.text.revealed_lines
    capacity = max_visible_lines(surface_height)
    start = revealed - capacity if revealed > capacity else 0
    return range(start, revealed)


class AnimationController:
    """
    Drives the three-phase flag animation.

    Each ``on_tick`` moves exactly one counter forward and queues a REDRAW
    on the event bus. ``render`` reads one snapshot, so drawing twice
    without a tick in between produces the same picture.
    """

    def __init__(
        self,
        lines: Optional[Sequence[str]] = None,
        event_bus: Optional[EventBus] = None,
        flag_width: int = FLAG_WIDTH,
        flag_height: int = FLAG_HEIGHT,
    ) -> None:
        if lines is None:
            from tiranga.animation.listing import load_listing
            lines = load_listing()

        self._lines: tuple[str, ...] = tuple(lines)
        self._event_bus = event_bus or EventBus()
        self._flag_width = max(0, flag_width)
        self._flag_height = max(0, flag_height)
        self._state = AnimationState()
        self._listeners: list[PhaseListener] = []

        logger.info(
            f"AnimationController created: {len(self._lines)} lines, "
            f"flag {self._flag_width}x{self._flag_height}"
        )

    @property
    def state(self) -> AnimationState:
        """Current immutable snapshot."""
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    @property
    def flag_width(self) -> int:
        return self._flag_width

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def on_tick(self, event: Optional[Event] = None) -> None:
        """Advance one step and queue a redraw.

        Accepts the TICK event so it can be subscribed to the event bus
        directly; the payload is not used, every tick is one step.
        """
        old = self._state
        new = advance(old, len(self._lines), self._flag_width)
        self._state = new

        if new.phase is not old.phase:
            self._notify_phase_change(old.phase, new.phase)

        self._event_bus.queue_event(Event(EventType.REDRAW, source="controller"))

    def _notify_phase_change(self, old: Phase, new: Phase) -> None:
        if not can_transition(old, new):
            # advance() never produces this
            logger.error(f"Invalid phase transition: {old.name} -> {new.name}")
            return

        logger.info(f"Phase transition: {old.name} -> {new.name}")

        for listener in self._listeners:
            try:
                listener(old, new, self._state)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        self._event_bus.queue_event(Event(
            EventType.PHASE_CHANGED,
            data={"from": old, "to": new},
            source="controller",
        ))

    def visible_window(self, surface_height: int) -> range:
        """Indices of the listing lines currently visible on a surface this tall."""
        return visible_range(self._state, surface_height)

    def render(self, surface: DrawingSurface) -> None:
        """Draw the current snapshot. Never mutates state."""
        state = self._state
        surface.clear(BACKGROUND)

        if surface.width <= 0 or surface.height <= 0:
            return

        if state.phase is Phase.DISPLAYING_TEXT:
            self._draw_source_text(surface, state)
            return

        layout = FlagLayout.centered(
            surface.width, surface.height, self._flag_width, self._flag_height
        )
        if state.phase is Phase.DRAWING_FLAG:
            draw_stripes_progressively(surface, layout, state.flag.progress_columns)
        else:
            draw_waving_flag(surface, layout, state.wave.phase)

    def _draw_source_text(self, surface: DrawingSurface, state: AnimationState) -> None:
        """Draw the revealed lines, scrolled so the newest is last."""
        for row, index in enumerate(visible_range(state, surface.height)):
            y = TOP_MARGIN + row * LINE_HEIGHT
            surface.draw_text(self._lines[index], (LEFT_MARGIN, y), TEXT_FONT, TEXT_COLOR)
