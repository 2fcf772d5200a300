"""
Watchdog capability and the software-only dummy watchdog.
"""

import logging
from abc import ABC, abstractmethod

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Watchdog(ABC):
    """
    Reset timer that must be pinged within its period.

    The supervisor calls initialize() once, reads period to size its
    clock, and calls ping() only while every watcher is healthy.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Open and arm the watchdog."""

    @property
    @abstractmethod
    def period(self) -> float:
        """Seconds the watchdog waits for a ping before resetting."""

    @abstractmethod
    def ping(self) -> None:
        """Feed the watchdog. Raises WatchdogError on failure."""


class DummyWatchdog(Watchdog):
    """Watchdog without hardware. Always succeeds."""

    def __init__(self, period: float = 60):
        if period <= 0:
            raise ConfigurationError(f"Dummy watchdog period must be positive, got {period}")
        self._period = float(period)
        self.ping_count = 0

    def initialize(self) -> None:
        logger.info(f"Dummy watchdog armed with period {self._period:g}s")

    @property
    def period(self) -> float:
        return self._period

    def ping(self) -> None:
        self.ping_count += 1
        logger.debug("Ping!")
