"""
Supervisor - wires watchers, pollers, the aggregator and the watchdog.
"""

import logging
import queue
import time
from typing import Callable, List, Optional

from core.exceptions import WatcherInitializationError
from core.watchdog import Watchdog
from watchers.base import Watcher

from .aggregator import DEFAULT_QUEUE_SIZE, HealthAggregator
from .events import TransitionEvent
from .poller import WatcherPoller

logger = logging.getLogger(__name__)


class Supervisor:
    """
    Keeps a watchdog fed while every watcher is healthy.

    Usage:
        supervisor = Supervisor(watchdog, watchers)
        supervisor.initialize()
        supervisor.run()   # blocks; raises on watchdog failure
    """

    def __init__(
        self,
        watchdog: Watchdog,
        watchers: List[Watcher],
        queue_size: int = DEFAULT_QUEUE_SIZE,
        clock: Callable[[], float] = time.monotonic,
        on_transition: Callable[[TransitionEvent], None] = None,
        log: Optional[logging.Logger] = None
    ):
        self.watchdog = watchdog
        self.watchers = list(watchers)
        self.events: queue.Queue = queue.Queue(maxsize=queue_size)
        self._log = log or logger

        self.aggregator = HealthAggregator(
            watchdog,
            self.watchers,
            self.events,
            clock=clock,
            on_transition=on_transition,
            log=self._log
        )
        self.pollers = [
            WatcherPoller(watcher, self.events, clock=clock, log=self._log)
            for watcher in self.watchers
        ]

    def initialize(self) -> None:
        """Arm the watchdog and validate every watcher. Errors are fatal."""
        self._log.info("Creating watchdog...")
        self.watchdog.initialize()

        for watcher in self.watchers:
            try:
                watcher.initialize()
            except WatcherInitializationError:
                raise
            except Exception as e:
                raise WatcherInitializationError(
                    f"Error initializing watcher {watcher.name}: {e}"
                ) from e
            self._log.info(f"Initialized watcher: {watcher!r}")

    def run(self) -> None:
        self._log.debug("Starting watchers...")
        for poller in self.pollers:
            poller.start()
        try:
            self.aggregator.run()
        finally:
            for poller in self.pollers:
                poller.stop(timeout=0)

    def stop(self) -> None:
        self.aggregator.stop()
