"""
Health Monitoring Module - Watcher polling and health aggregation.
"""

from .events import (
    LivenessEvent,
    TransitionEvent,
    TransitionKind,
    ALL_WATCHERS,
)

from .poller import (
    Backoff,
    WatcherPoller,
    BASE_BACKOFF_SECONDS,
)

from .aggregator import (
    HealthAggregator,
    HealthSnapshot,
    WatcherState,
    GRACE_PERIODS,
)

from .supervisor import Supervisor


__all__ = [
    'LivenessEvent',
    'TransitionEvent',
    'TransitionKind',
    'ALL_WATCHERS',
    'Backoff',
    'WatcherPoller',
    'BASE_BACKOFF_SECONDS',
    'HealthAggregator',
    'HealthSnapshot',
    'WatcherState',
    'GRACE_PERIODS',
    'Supervisor',
]
