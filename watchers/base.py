"""
Watcher capability - an independent health check polled on its own period.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_PERIOD_SECONDS = 30.0
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Deadline:
    """Absolute monotonic instant by which a check must finish."""
    at: float

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(time.monotonic() + seconds)

    def remaining(self) -> float:
        return self.at - time.monotonic()

    def expired(self) -> bool:
        return self.remaining() <= 0


@dataclass
class WatcherConfig:
    """Settings shared by every watcher. Zero or unset means the default."""
    period: float = DEFAULT_PERIOD_SECONDS
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        if not self.period:
            self.period = DEFAULT_PERIOD_SECONDS
        if not self.timeout:
            self.timeout = DEFAULT_TIMEOUT_SECONDS


class Watcher(ABC):
    """
    Health check contract.

    check() must return normally on success and raise on failure. It is
    called repeatedly forever and must give up by the deadline it is
    handed, killing anything it spawned.
    """

    kind = "watcher"

    def __init__(self, config: WatcherConfig = None, name: str = None):
        self.config = config or WatcherConfig()
        self._name = name or self.kind

    @property
    def name(self) -> str:
        return self._name

    @property
    def period(self) -> float:
        return float(self.config.period)

    @property
    def timeout(self) -> float:
        return float(self.config.timeout)

    def initialize(self) -> None:
        """Validate the watcher before polling starts."""

    @abstractmethod
    def check(self, deadline: Deadline) -> None:
        """Run the check once. Raises on failure."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, period={self.period:g}, timeout={self.timeout:g})"
