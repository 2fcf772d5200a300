"""
Core Exceptions for the watchdog supervisor.

Custom exceptions for handling various error conditions.
"""


class PiWatchdogError(Exception):
    """Base exception for all supervisor errors."""
    pass


class ConfigurationError(PiWatchdogError):
    """Invalid configuration."""
    pass


class CheckFailure(PiWatchdogError):
    """A watcher check failed or ran past its deadline."""

    def __init__(self, message: str, watcher: str = None):
        super().__init__(message)
        self.watcher = watcher


class WatcherInitializationError(PiWatchdogError):
    """A watcher could not be initialized."""
    pass


class WatchdogError(PiWatchdogError):
    """Watchdog device error. Always fatal."""
    pass


class DeviceUnavailable(WatchdogError):
    """Watchdog transport could not be opened or read."""
    pass


class ConfigurationRejected(WatchdogError):
    """Watchdog refused a configuration write."""

    def __init__(self, message: str, register: int = None):
        super().__init__(message)
        self.register = register


class InvalidParameter(WatchdogError):
    """Value cannot be encoded into the watchdog registers."""
    pass
