"""
Health Aggregator - decides when the watchdog may be fed.

A single thread owns every WatcherState and the bad counter. It consumes
liveness events from the pollers and its own clock, one at a time, so the
transition logic needs no locks.

Per watcher state machine (initial state BAD):
    BAD  -> GOOD   liveness event, due_at = now + 2 * period
    GOOD -> GOOD   liveness event, due_at = now + 2 * period
    GOOD -> BAD    clock tick finds due_at in the past

Feeding:
    - a liveness event that brings the bad count to zero feeds at once
    - a clock tick with a zero bad count rescans for stale watchers and
      feeds if the count is still zero
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

from core.exceptions import ConfigurationError
from core.logging_setup import NOTICE
from core.watchdog import Watchdog
from watchers.base import Watcher

from .events import ALL_WATCHERS, LivenessEvent, TransitionEvent, TransitionKind

logger = logging.getLogger(__name__)

GRACE_PERIODS = 2
DEFAULT_QUEUE_SIZE = 10
STOP_POLL_SECONDS = 1.0


@dataclass
class WatcherState:
    """Freshness of one watcher."""
    period: float
    due_at: float
    healthy: bool = False


@dataclass(frozen=True)
class HealthSnapshot:
    """Point in time copy of the aggregate health."""
    bad_count: int
    watchers: Dict[str, WatcherState]

    @property
    def all_healthy(self) -> bool:
        return self.bad_count == 0


class HealthAggregator:
    """
    Serialized event loop over liveness events and clock ticks.

    Usage:
        events = queue.Queue(maxsize=10)
        aggregator = HealthAggregator(watchdog, watchers, events)
        aggregator.run()   # raises if the watchdog cannot be fed
    """

    def __init__(
        self,
        watchdog: Watchdog,
        watchers: List[Watcher],
        events: queue.Queue = None,
        clock: Callable[[], float] = time.monotonic,
        on_transition: Callable[[TransitionEvent], None] = None,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize aggregator. Every watcher starts BAD.

        Args:
            watchdog: Watchdog to feed, already initialized
            watchers: Watchers in the order they are scanned
            events: Queue the pollers publish liveness events on
            clock: Monotonic time source
            on_transition: Sink for structured transition events
            log: Logger for human readable messages
        """
        self.watchdog = watchdog
        self.events = events if events is not None else queue.Queue(maxsize=DEFAULT_QUEUE_SIZE)
        self.on_transition = on_transition
        self._clock = clock
        self._log = log or logger

        self.tick_interval = watchdog.period / 2
        if self.tick_interval <= 0:
            raise ConfigurationError(
                f"Watchdog period must be positive, got {watchdog.period}"
            )

        now = clock()
        self._order: List[str] = []
        self._states: Dict[str, WatcherState] = {}
        for watcher in watchers:
            if watcher.name in self._states:
                raise ConfigurationError(f"Duplicate watcher name: {watcher.name}")
            self._order.append(watcher.name)
            self._states[watcher.name] = WatcherState(period=watcher.period, due_at=now)

        self._bad_count = len(self._order)
        self.feed_count = 0
        self._stop = threading.Event()

    @property
    def bad_count(self) -> int:
        return self._bad_count

    @property
    def watcher_names(self) -> List[str]:
        return list(self._order)

    def snapshot(self) -> HealthSnapshot:
        return HealthSnapshot(
            bad_count=self._bad_count,
            watchers={name: replace(self._states[name]) for name in self._order}
        )

    def handle_liveness(self, watcher: str, now: float) -> bool:
        """
        Apply a liveness event.

        Returns:
            True if the watchdog was fed
        """
        state = self._states.get(watcher)
        if state is None:
            self._log.warning(f"Liveness event from unknown watcher: {watcher}")
            return False

        state.due_at = now + GRACE_PERIODS * state.period
        if state.healthy:
            return False

        state.healthy = True
        self._bad_count -= 1
        self._emit(watcher, TransitionKind.BAD_TO_GOOD, now)

        if self._bad_count == 0:
            # Feed at once: the hardware timer kept counting while unhealthy.
            self._emit(ALL_WATCHERS, TransitionKind.ALL_BAD_TO_GOOD, now)
            self._feed(now)
            return True
        return False

    def handle_tick(self, now: float) -> bool:
        """
        Apply a clock tick.

        Returns:
            True if the watchdog was fed
        """
        if self._bad_count != 0:
            return False

        for name in self._order:
            state = self._states[name]
            if state.healthy and state.due_at < now:
                state.healthy = False
                self._bad_count += 1
                self._emit(name, TransitionKind.GOOD_TO_BAD, now)
                if self._bad_count == 1:
                    self._emit(ALL_WATCHERS, TransitionKind.ALL_GOOD_TO_BAD, now)

        if self._bad_count == 0:
            self._feed(now)
            return True
        return False

    def run(self) -> None:
        """Process events and ticks until stop(). Watchdog errors propagate."""
        self._stop.clear()
        if not self._order:
            self._log.warning("No watchers configured, watchdog will be fed unconditionally")

        next_tick = self._clock() + self.tick_interval
        while not self._stop.is_set():
            now = self._clock()
            if now >= next_tick:
                self.handle_tick(now)
                next_tick += self.tick_interval
                if next_tick <= now:
                    next_tick = now + self.tick_interval
                continue

            try:
                event = self.events.get(timeout=min(next_tick - now, STOP_POLL_SECONDS))
            except queue.Empty:
                continue
            if isinstance(event, LivenessEvent):
                self.handle_liveness(event.watcher, event.timestamp)

    def stop(self) -> None:
        """Ask run() to return. Safe to call from a signal handler."""
        self._stop.set()

    def _feed(self, now: float) -> None:
        self._log.debug("Pinging watchdog")
        try:
            self.watchdog.ping()
        except Exception as e:
            self._log.critical(f"Error pinging watchdog: {e}")
            raise
        self.feed_count += 1
        self._emit(ALL_WATCHERS, TransitionKind.FEED, now)

    def _emit(self, watcher: str, kind: TransitionKind, now: float) -> None:
        event = TransitionEvent(watcher, kind, now, self._bad_count)
        level = logging.DEBUG if kind is TransitionKind.FEED else NOTICE
        self._log.log(level, str(event))

        if self.on_transition:
            try:
                self.on_transition(event)
            except Exception as e:
                self._log.error(f"Transition callback failed: {e}")
