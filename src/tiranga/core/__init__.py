"""Core framework components for tiranga."""

from .state import Phase, AnimationState, advance
from .events import EventBus, Event, EventType

__all__ = ["Phase", "AnimationState", "advance", "EventBus", "Event", "EventType"]
