"""
Watcher Poller - one polling loop per watcher.

Each poller runs its watcher's check with a bounded deadline. Success
puts a liveness event on the shared queue and sleeps a full period;
failure withholds the event and sleeps an exponential backoff capped at
the period. Polling never stops on its own.
"""

import logging
import queue
import threading
import time
from typing import Callable, Optional

from watchers.base import Deadline, Watcher

from .events import LivenessEvent

logger = logging.getLogger(__name__)

BASE_BACKOFF_SECONDS = 1.0


class Backoff:
    """
    Exponential retry delay owned by a single poller.

    After N consecutive failures current == min(base * 2**N, cap).
    """

    def __init__(self, cap: float, base: float = BASE_BACKOFF_SECONDS):
        self.base = base
        self.cap = cap
        self.current = min(base, cap)

    def reset(self) -> None:
        self.current = min(self.base, self.cap)

    def failure(self) -> float:
        """Record a failure. Returns the delay to sleep before retrying."""
        delay = self.current
        self.current = min(self.current * 2, self.cap)
        return delay


class WatcherPoller:
    """
    Polls one watcher forever on a daemon thread.

    Usage:
        events = queue.Queue(maxsize=10)
        poller = WatcherPoller(watcher, events)
        poller.start()
    """

    def __init__(
        self,
        watcher: Watcher,
        events: queue.Queue,
        clock: Callable[[], float] = time.monotonic,
        log: Optional[logging.Logger] = None
    ):
        self.watcher = watcher
        self.events = events
        self.backoff = Backoff(cap=watcher.period)
        self._clock = clock
        self._log = log or logger
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run,
            name=f"poller-{self.watcher.name}",
            daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = None) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=timeout)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run(self) -> None:
        while not self._stop.is_set():
            delay = self.poll_once()
            if self._stop.wait(delay):
                break

    def poll_once(self) -> float:
        """Run a single check. Returns how long to sleep before the next one."""
        name = self.watcher.name
        deadline = Deadline.after(self.watcher.timeout)
        try:
            self.watcher.check(deadline)
            if deadline.expired():
                raise TimeoutError(f"check overran its {self.watcher.timeout:g}s timeout")
        except Exception as e:
            delay = self.backoff.failure()
            self._log.error(f"{name}: error: {e}")
            self._log.error(f"{name}: backoff for {delay:g}s")
            return delay

        self._publish(LivenessEvent(name, self._clock()))
        self._log.info(f"{name}: good")
        self.backoff.reset()
        return self.watcher.period

    def _publish(self, event: LivenessEvent) -> None:
        # Never drops: blocks until the aggregator makes room.
        while True:
            try:
                self.events.put(event, timeout=1.0)
                return
            except queue.Full:
                if self._stop.is_set():
                    return
                self._log.warning(f"{event.watcher}: event queue full, waiting")
