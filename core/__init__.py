"""
Core Module - Exceptions, logging, configuration and watchdog devices.
"""

from .exceptions import (
    PiWatchdogError,
    ConfigurationError,
    CheckFailure,
    WatcherInitializationError,
    WatchdogError,
    DeviceUnavailable,
    ConfigurationRejected,
    InvalidParameter,
)

from .logging_setup import (
    NOTICE,
    configure_logging,
    parse_level,
)

from .watchdog import (
    Watchdog,
    DummyWatchdog,
)

from .piwatcher import (
    PiWatcher,
    PiWatcherConfig,
    PiWatcherStatus,
    encode_wake,
    decode_wake,
)


__all__ = [
    # Exceptions
    'PiWatchdogError',
    'ConfigurationError',
    'CheckFailure',
    'WatcherInitializationError',
    'WatchdogError',
    'DeviceUnavailable',
    'ConfigurationRejected',
    'InvalidParameter',

    # Logging
    'NOTICE',
    'configure_logging',
    'parse_level',

    # Watchdogs
    'Watchdog',
    'DummyWatchdog',
    'PiWatcher',
    'PiWatcherConfig',
    'PiWatcherStatus',
    'encode_wake',
    'decode_wake',
]
