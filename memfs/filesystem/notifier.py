"""
Change Notifier Module

Buffers change events and delivers them to subscribers as one
batch once mutations have been quiet for a short period.

Every ``record`` call restarts the quiet period, so a burst of
operations produces a single batch. No events are merged or
dropped: a batch holds every recorded event in recording order.

Author: YSNRFD
Version: 1.0.0
"""

import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, List, Optional

from memfs.core.event_loop import EventLoop
from memfs.logger import get_logger


class FileChangeType(Enum):
    """Kinds of change event."""
    CREATED = 1
    CHANGED = 2
    DELETED = 3


@dataclass(frozen=True)
class FileChangeEvent:
    """A single change to the entry at ``path``."""
    type: FileChangeType
    path: str


ChangeListener = Callable[[List[FileChangeEvent]], Any]


class Disposable:
    """
    Handle that releases a registration when disposed.

    Disposing twice is harmless. Usable as a context manager.
    """

    def __init__(self, on_dispose: Optional[Callable[[], None]] = None):
        self._on_dispose = on_dispose
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        if self._on_dispose is not None:
            self._on_dispose()

    def __enter__(self) -> 'Disposable':
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()


class NotifierState(Enum):
    """Whether a flush is scheduled."""
    IDLE = auto()
    PENDING = auto()


class ChangeNotifier:
    """
    Debounced batch delivery of change events.

    Example:
        >>> notifier = ChangeNotifier(loop, quiet_period=0.005)
        >>> notifier.subscribe(print)
        >>> notifier.record(FileChangeEvent(FileChangeType.CREATED, '/a'))
        >>> loop.run_pending()  # once 5 ms have passed
        [FileChangeEvent(type=<FileChangeType.CREATED: 1>, path='/a')]
    """

    def __init__(self, event_loop: EventLoop, quiet_period: float = 0.005):
        self._logger = get_logger('notifier')
        self._loop = event_loop
        self._quiet_period = quiet_period

        self._buffer: List[FileChangeEvent] = []
        self._listeners: List[ChangeListener] = []
        self._flush_handle: Optional[int] = None
        self._lock = threading.Lock()

        self._batches_delivered = 0

    @property
    def state(self) -> NotifierState:
        if self._flush_handle is None:
            return NotifierState.IDLE
        return NotifierState.PENDING

    @property
    def quiet_period(self) -> float:
        return self._quiet_period

    def pending_events(self) -> List[FileChangeEvent]:
        """Copy of the events waiting for the next flush."""
        with self._lock:
            return list(self._buffer)

    def subscribe(self, listener: ChangeListener) -> Disposable:
        """
        Register ``listener`` to receive each batch.

        Returns:
            Disposable that unsubscribes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return Disposable(unsubscribe)

    def record(self, *events: FileChangeEvent) -> None:
        """
        Buffer ``events`` and restart the quiet period.

        Calling with no events leaves the state unchanged.
        """
        if not events:
            return

        with self._lock:
            self._buffer.extend(events)
            if self._flush_handle is not None:
                self._loop.cancel_event(self._flush_handle)
            self._flush_handle = self._loop.schedule_timer(
                self.flush, delay=self._quiet_period
            )

    def flush(self) -> None:
        """Deliver all buffered events as one batch and return to idle."""
        with self._lock:
            if self._flush_handle is not None:
                self._loop.cancel_event(self._flush_handle)
                self._flush_handle = None
            batch = self._buffer
            self._buffer = []
            listeners = list(self._listeners)

        if not batch:
            return

        self._batches_delivered += 1
        self._logger.debug(
            "Delivering change batch",
            context={'events': len(batch), 'listeners': len(listeners)}
        )

        for listener in listeners:
            try:
                listener(list(batch))
            except Exception as e:
                self._logger.exception(
                    f"Change listener raised {type(e).__name__}: {e}",
                    exc=e
                )

    def dispose(self) -> None:
        """Cancel any scheduled flush and drop events and listeners."""
        with self._lock:
            if self._flush_handle is not None:
                self._loop.cancel_event(self._flush_handle)
                self._flush_handle = None
            self._buffer.clear()
            self._listeners.clear()

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                'state': self.state.name,
                'pending_events': len(self._buffer),
                'listeners': len(self._listeners),
                'batches_delivered': self._batches_delivered,
            }
