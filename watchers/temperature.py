"""
Temperature Watcher - fails when a sensor file reads above a threshold.

The sensor file holds an integer in millidegrees, as exposed by
/sys/class/thermal/thermal_zone*/temp.
"""

import logging
from pathlib import Path

from core.exceptions import CheckFailure, WatcherInitializationError

from .base import Deadline, Watcher, WatcherConfig

logger = logging.getLogger(__name__)

DEFAULT_SENSOR_PATH = "/sys/class/thermal/thermal_zone0/temp"


class TemperatureWatcher(Watcher):
    """Checks a sensor reading stays at or below failure_over."""

    kind = "temperature"

    def __init__(
        self,
        path: str = DEFAULT_SENSOR_PATH,
        failure_over: int = 80000,
        config: WatcherConfig = None,
        name: str = None
    ):
        super().__init__(config, name)
        self.path = Path(path)
        self.failure_over = int(failure_over)

    def initialize(self) -> None:
        if not self.path.exists():
            raise WatcherInitializationError(f"Path does not exist: {self.path}")

    def read(self) -> int:
        try:
            text = self.path.read_text()
        except OSError as e:
            raise CheckFailure(f"Cannot read {self.path}: {e}", watcher=self.name) from e
        try:
            return int(text.strip())
        except ValueError as e:
            raise CheckFailure(f"Bad sensor value in {self.path}: {text.strip()!r}", watcher=self.name) from e

    def check(self, deadline: Deadline) -> None:
        value = self.read()
        logger.debug(f"Read temperature: {value}")
        if value > self.failure_over:
            raise CheckFailure(
                f"value {value / 1000:.1f} > threshold {self.failure_over / 1000:.1f}",
                watcher=self.name
            )
