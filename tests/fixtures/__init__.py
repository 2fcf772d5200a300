"""
Test Fixtures - Mock objects for testing.
"""

from .mock_smbus import (
    MockSMBus,
    PIWATCHER_ADDRESS,
    unavailable_bus,
)

from .fake_watchers import (
    FakeClock,
    FakeWatchdog,
    ScriptedWatcher,
)


__all__ = [
    'MockSMBus',
    'PIWATCHER_ADDRESS',
    'unavailable_bus',
    'FakeClock',
    'FakeWatchdog',
    'ScriptedWatcher',
]
