"""
Animation state for the flag sequence.

Phases:
    DISPLAYING_TEXT: Source listing scrolls up one line per tick, then pauses
    DRAWING_FLAG: Stripes are painted left to right, 10 columns per tick
    WAVING_FLAG: The finished flag ripples forever (terminal)

State snapshots are immutable. ``advance`` maps one snapshot to the next,
so the only mutation in the program is swapping the current snapshot.
"""

from enum import Enum, auto
from dataclasses import dataclass, field, replace
import logging

logger = logging.getLogger(__name__)

# Ticks to linger on the fully revealed listing
PAUSE_THRESHOLD = 60

# Columns painted per tick
DRAW_STEP = 10

# Wave phase added per tick
WAVE_STEP = 5.0


class Phase(Enum):
    """Animation phases, in the only order they can occur."""
    DISPLAYING_TEXT = auto()
    DRAWING_FLAG = auto()
    WAVING_FLAG = auto()


@dataclass(frozen=True)
class TextDisplayState:
    """Progress through the source listing."""
    revealed_lines: int = 0
    pause_ticks: int = 0


@dataclass(frozen=True)
class FlagDrawState:
    """Progress of the left-to-right paint reveal."""
    progress_columns: int = 0


@dataclass(frozen=True)
class WaveState:
    """Accumulated wave phase. Grows without bound."""
    phase: float = 0.0


@dataclass(frozen=True)
class AnimationState:
    """Snapshot of the whole animation."""
    phase: Phase = Phase.DISPLAYING_TEXT
    text: TextDisplayState = field(default_factory=TextDisplayState)
    flag: FlagDrawState = field(default_factory=FlagDrawState)
    wave: WaveState = field(default_factory=WaveState)


# Valid phase transitions
VALID_TRANSITIONS: frozenset[tuple[Phase, Phase]] = frozenset({
    (Phase.DISPLAYING_TEXT, Phase.DRAWING_FLAG),
    (Phase.DRAWING_FLAG, Phase.WAVING_FLAG),
})


def can_transition(from_phase: Phase, to_phase: Phase) -> bool:
    """Check if a phase change is allowed."""
    return (from_phase, to_phase) in VALID_TRANSITIONS


def advance(state: AnimationState, total_lines: int, flag_width: int) -> AnimationState:
    """
    Compute the state one tick later.

    Exactly one counter moves per call. Counters of phases already left
    behind keep their final values.

    Args:
        state: Current snapshot
        total_lines: Number of lines in the static listing
        flag_width: Flag width in columns

    Returns:
        The next snapshot
    """
    if state.phase is Phase.DISPLAYING_TEXT:
        text = state.text
        if text.revealed_lines < total_lines:
            return replace(state, text=replace(text, revealed_lines=text.revealed_lines + 1))

        text = replace(text, pause_ticks=text.pause_ticks + 1)
        if text.pause_ticks > PAUSE_THRESHOLD:
            return replace(state, text=text, phase=Phase.DRAWING_FLAG)
        return replace(state, text=text)

    if state.phase is Phase.DRAWING_FLAG:
        progress = state.flag.progress_columns
        if progress < flag_width:
            progress = min(progress + DRAW_STEP, flag_width)
            state = replace(state, flag=FlagDrawState(progress_columns=progress))
        if progress >= flag_width:
            return replace(state, phase=Phase.WAVING_FLAG)
        return state

    return replace(state, wave=WaveState(phase=state.wave.phase + WAVE_STEP))
