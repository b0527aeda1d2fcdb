"""
MemFS Event Loop

A cooperative timer scheduler. Deferred callbacks are kept in a
heap and run by ``run_pending()``, which a host calls from its own
loop. Hosts without a loop can call ``start()`` to tick from a
background thread instead.

Author: YSNRFD
Version: 1.0.0
"""

import heapq
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, List

from memfs.logger import get_logger


class EventPriority(Enum):
    """Tie-break order for events due at the same time."""
    CRITICAL = 0
    HIGH = 10
    NORMAL = 20
    LOW = 30


@dataclass(order=True)
class Event:
    """
    A scheduled event.

    Events sort by due time, then priority, then scheduling order.
    """
    scheduled_time: float
    priority: int
    event_id: int
    callback: Callable = field(compare=False, default=lambda: None)
    data: Any = field(compare=False, default=None)
    cancelled: bool = field(compare=False, default=False)

    def execute(self) -> Any:
        if self.data is not None:
            return self.callback(self.data)
        return self.callback()


class EventLoop:
    """
    Timer event loop.

    Example:
        >>> loop = EventLoop()
        >>> event_id = loop.schedule_timer(my_callback, delay=0.005)
        >>> loop.cancel_event(event_id)
        True
        >>> loop.run_pending()
        0
    """

    def __init__(
        self,
        clock: Optional[Callable[[], float]] = None,
        poll_interval: float = 0.001
    ):
        self._logger = get_logger('event_loop')
        self._clock = clock or time.monotonic
        self._poll_interval = poll_interval

        self._timer_queue: List[Event] = []  # heapq
        self._pending: dict[int, Event] = {}
        self._event_counter = 0
        self._lock = threading.RLock()

        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._shutdown_event = threading.Event()

        self._events_processed = 0
        self._events_cancelled = 0

    @property
    def running(self) -> bool:
        return self._running

    def now(self) -> float:
        """Current time on the loop's clock."""
        return self._clock()

    def start(self) -> None:
        """Run ``run_pending`` from a background thread."""
        if self._running:
            return

        self._running = True
        self._shutdown_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop, name='memfs-event-loop', daemon=True
        )
        self._thread.start()
        self._logger.info("Event loop started")

    def stop(self) -> None:
        """Stop the background thread, if any. Pending events are kept."""
        if not self._running:
            return

        self._running = False
        self._shutdown_event.set()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=2.0)
        self._thread = None

        self._logger.info(
            "Event loop stopped",
            context={'events_processed': self._events_processed}
        )

    def _run_loop(self) -> None:
        self._logger.debug("Event loop thread started")

        while not self._shutdown_event.wait(self._poll_interval):
            self.run_pending()

        self._logger.debug("Event loop thread exiting")

    def _next_event_id(self) -> int:
        with self._lock:
            self._event_counter += 1
            return self._event_counter

    def schedule_timer(
        self,
        callback: Callable,
        delay: float,
        priority: EventPriority = EventPriority.NORMAL,
        data: Any = None
    ) -> int:
        """
        Schedule a callback to run after ``delay`` seconds.

        Args:
            callback: Function to call when the event fires
            delay: Delay in seconds before the event fires
            priority: Order among events due at the same time
            data: Passed to the callback when not None

        Returns:
            Event ID for cancellation
        """
        with self._lock:
            event = Event(
                scheduled_time=self._clock() + delay,
                priority=priority.value,
                event_id=self._next_event_id(),
                callback=callback,
                data=data,
            )
            heapq.heappush(self._timer_queue, event)
            self._pending[event.event_id] = event
        return event.event_id

    def cancel_event(self, event_id: int) -> bool:
        """
        Cancel a scheduled event.

        Returns:
            True if the event was pending, False if it already ran,
            was already cancelled, or never existed
        """
        with self._lock:
            event = self._pending.pop(event_id, None)
            if event is None:
                return False
            # Lazily dropped from the heap by run_pending.
            event.cancelled = True
            self._events_cancelled += 1
            return True

    def _pop_due(self) -> Optional[Event]:
        with self._lock:
            now = self._clock()
            while self._timer_queue and self._timer_queue[0].scheduled_time <= now:
                event = heapq.heappop(self._timer_queue)
                if event.cancelled:
                    continue
                del self._pending[event.event_id]
                return event
            return None

    def run_pending(self) -> int:
        """
        Execute every event that is due.

        Callbacks run outside the lock, so they may schedule or
        cancel further events. Events a callback schedules run in
        the same call if they are already due.

        Returns:
            Number of events executed
        """
        executed = 0
        while True:
            event = self._pop_due()
            if event is None:
                return executed
            self._execute_event(event)
            executed += 1

    def _execute_event(self, event: Event) -> None:
        try:
            event.execute()
        except Exception as e:
            self._logger.exception(
                f"Error executing event: {e}",
                exc=e,
                context={'event_id': event.event_id}
            )
        finally:
            self._events_processed += 1

    def next_deadline(self) -> Optional[float]:
        """Due time of the earliest pending event, or None."""
        with self._lock:
            deadlines = [e.scheduled_time for e in self._timer_queue if not e.cancelled]
            return min(deadlines) if deadlines else None

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def get_stats(self) -> dict[str, Any]:
        """Get event loop statistics."""
        return {
            'running': self._running,
            'events_processed': self._events_processed,
            'events_cancelled': self._events_cancelled,
            'pending_timers': self.pending_count(),
        }
