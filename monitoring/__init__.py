"""
Monitoring Module - Liveness supervision of the host.
"""

from .health import (
    HealthAggregator,
    HealthSnapshot,
    Supervisor,
    TransitionEvent,
    TransitionKind,
    WatcherPoller,
)


__all__ = [
    'HealthAggregator',
    'HealthSnapshot',
    'Supervisor',
    'TransitionEvent',
    'TransitionKind',
    'WatcherPoller',
]
