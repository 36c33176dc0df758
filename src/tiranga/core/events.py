"""
Event bus for tiranga.

The window emits TICK synchronously every frame. The controller queues
REDRAW and PHASE_CHANGED, and the window drains the queue once per frame
before painting, so awaited handlers can take part too.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
from collections import defaultdict, deque
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event types used by the animation."""
    TICK = auto()           # One frame of the clock
    REDRAW = auto()         # Controller state changed, repaint wanted
    PHASE_CHANGED = auto()  # data: {"from": Phase, "to": Phase}
    SHUTDOWN = auto()       # Window loop finished


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """
    Routes events from their source to subscribed handlers.

    ``emit`` delivers at once to plain handlers. ``queue_event`` defers
    delivery to the next ``process_queue``, which also awaits coroutine
    handlers.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._pending: asyncio.Queue[Event] = asyncio.Queue()
        self._history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Register a handler for one event type.

        Returns:
            A function that removes the handler again
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver to plain handlers now. Coroutine handlers are skipped."""
        self._history.append(event)
        for handler in list(self._handlers[event.type]):
            if inspect.iscoroutinefunction(handler):
                continue
            self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        """Hold an event until the next process_queue."""
        self._pending.put_nowait(event)

    @property
    def pending(self) -> int:
        """Number of queued events not yet delivered."""
        return self._pending.qsize()

    async def process_queue(self) -> None:
        """Deliver every queued event, in order, awaiting coroutine handlers."""
        while not self._pending.empty():
            event = self._pending.get_nowait()
            self._history.append(event)

            awaiting = []
            for handler in list(self._handlers[event.type]):
                if inspect.iscoroutinefunction(handler):
                    awaiting.append(handler(event))
                else:
                    self._call(handler, event)

            for result in await asyncio.gather(*awaiting, return_exceptions=True):
                if isinstance(result, Exception):
                    logger.error(f"Error in async handler for {event.type.name}: {result}")

            self._pending.task_done()

    @staticmethod
    def _call(handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Error in handler for {event.type.name}: {e}")

    def get_history(self, event_type: EventType | None = None, limit: int = 10) -> list[Event]:
        """Most recent delivered events, oldest first."""
        history = [e for e in self._history if event_type is None or e.type is event_type]
        return history[-limit:]


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame}, source="clock")
