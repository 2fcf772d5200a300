"""
Health events exchanged between pollers, the aggregator and log sinks.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TransitionKind(Enum):
    """Health transitions reported by the aggregator."""
    BAD_TO_GOOD = "BAD->GOOD"
    GOOD_TO_BAD = "GOOD->BAD"
    ALL_BAD_TO_GOOD = "ALL BAD->GOOD"
    ALL_GOOD_TO_BAD = "ALL GOOD->BAD"
    FEED = "FEED"


ALL_WATCHERS = "ALL"


@dataclass(frozen=True)
class LivenessEvent:
    """
    Emitted by a poller each time its watcher's check succeeds.

    timestamp is the success time on the clock shared with the aggregator;
    the grace window is counted from it.
    """
    watcher: str
    timestamp: float = field(default_factory=time.monotonic)


@dataclass(frozen=True)
class TransitionEvent:
    """Structured transition record handed to the transition sink."""
    watcher: str
    kind: TransitionKind
    timestamp: float
    bad_count: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.watcher}: {self.kind.value}"
