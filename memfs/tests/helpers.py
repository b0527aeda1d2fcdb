"""Shared fixtures for the MemFS test suite."""

from memfs.core.config_loader import Config
from memfs.core.event_loop import EventLoop
from memfs.filesystem.memfs import MemFS


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_fs(quiet_period_ms: int = 5):
    """Build a MemFS driven by a fake clock.

    Returns:
        Tuple of (fs, loop, clock, batches) where ``batches`` collects
        every delivered change batch.
    """
    clock = FakeClock()
    loop = EventLoop(clock=clock)
    config = Config()
    config.notifier.quiet_period_ms = quiet_period_ms
    fs = MemFS(event_loop=loop, config=config)
    batches = []
    fs.on_did_change_file(batches.append)
    return fs, loop, clock, batches


def settle(loop: EventLoop, clock: FakeClock, seconds: float = 0.05) -> int:
    """Let the quiet period pass and run whatever became due."""
    clock.advance(seconds)
    return loop.run_pending()
