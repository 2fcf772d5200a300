"""
Watchers Module - Health checks polled by the supervisor.
"""

from .base import (
    Deadline,
    Watcher,
    WatcherConfig,
    DEFAULT_PERIOD_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
)
from .temperature import TemperatureWatcher
from .url import UrlWatcher, kill_process_tree


__all__ = [
    'Deadline',
    'Watcher',
    'WatcherConfig',
    'DEFAULT_PERIOD_SECONDS',
    'DEFAULT_TIMEOUT_SECONDS',
    'TemperatureWatcher',
    'UrlWatcher',
    'kill_process_tree',
]
