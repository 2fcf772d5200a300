"""
PiWatcher Device Protocol - I2C reset timer board.

Register layout:
    0x00  status   bit5 button boot, bit6 timer boot, bit7 button pressed
    0x01  watch    seconds without a ping before the board cuts power (byte)
    0x02  wake     seconds before power is restored, little endian 16-bit,
                   stored in units of 2 seconds

The board only stores half the wake value, so this module owns the
halving/doubling and refuses values that would silently round.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from smbus2 import SMBus

from .exceptions import (
    ConfigurationRejected,
    DeviceUnavailable,
    InvalidParameter,
)
from .watchdog import Watchdog

logger = logging.getLogger(__name__)

I2C_ADDRESS = 0x62
I2C_BUS = 1

REG_STATUS = 0x00
REG_WATCH = 0x01
REG_WAKE = 0x02

STATUS_BUTTON_BOOT = 1 << 5
STATUS_TIMER_BOOT = 1 << 6
STATUS_BUTTON_PRESSED = 1 << 7
STATUS_CLEAR = 0xFF

MAX_WATCH_SECONDS = 0xFF
MAX_WAKE_SECONDS = 0xFFFF * 2  # 131070


def encode_wake(seconds: int) -> Tuple[int, int]:
    """
    Encode a wake delay into the (low, high) register pair.

    Raises:
        InvalidParameter: value is odd, negative or above 131070
    """
    if seconds < 0:
        raise InvalidParameter(f"wake must not be negative, got {seconds}")
    if seconds & 1:
        raise InvalidParameter(f"wake must be a multiple of 2, got {seconds}")
    if seconds > MAX_WAKE_SECONDS:
        raise InvalidParameter(
            f"wake must not be greater than {MAX_WAKE_SECONDS}, got {seconds}"
        )
    value = seconds >> 1
    return value & 0xFF, value >> 8


def decode_wake(low: int, high: int) -> int:
    """Decode the wake register pair into seconds."""
    return (low | (high << 8)) * 2


@dataclass(frozen=True)
class PiWatcherStatus:
    """Decoded status register. Flags are independent and may combine."""
    raw: int

    @property
    def button_boot(self) -> bool:
        return bool(self.raw & STATUS_BUTTON_BOOT)

    @property
    def timer_boot(self) -> bool:
        return bool(self.raw & STATUS_TIMER_BOOT)

    @property
    def button_pressed(self) -> bool:
        return bool(self.raw & STATUS_BUTTON_PRESSED)

    def flags(self) -> List[str]:
        names = []
        if self.button_boot:
            names.append("BUTTON_BOOT")
        if self.timer_boot:
            names.append("TIMER_BOOT")
        if self.button_pressed:
            names.append("BUTTON_PRESSED")
        return names

    def __str__(self) -> str:
        return " ".join(["OK"] + self.flags())


@dataclass
class PiWatcherConfig:
    """PiWatcher timer configuration."""
    watch: int = 60
    wake: int = 0
    bus: int = I2C_BUS
    address: int = I2C_ADDRESS


class PiWatcher(Watchdog):
    """
    PiWatcher board driven over SMBus.

    Usage:
        piwatcher = PiWatcher(PiWatcherConfig(watch=60, wake=10))
        piwatcher.initialize()

        piwatcher.ping()
        print(piwatcher.status())
    """

    def __init__(
        self,
        config: PiWatcherConfig = None,
        bus_factory: Callable[[int], SMBus] = SMBus
    ):
        """
        Initialize PiWatcher driver. The bus is opened in initialize().

        Args:
            config: Timer and bus configuration
            bus_factory: Opens the I2C bus for a bus number
        """
        self.config = config or PiWatcherConfig()
        self._bus_factory = bus_factory
        self._bus: Optional[SMBus] = None

    def open(self) -> None:
        """Open the I2C bus without touching the timer registers."""
        if self._bus is not None:
            return
        try:
            self._bus = self._bus_factory(self.config.bus)
        except OSError as e:
            raise DeviceUnavailable(
                f"Cannot open I2C bus {self.config.bus}: {e}"
            ) from e

    def initialize(self) -> None:
        self.open()

        logger.info(f"Setting wake to {self.config.wake}")
        self.set_wake(self.config.wake)

        logger.info(f"Setting watch to {self.config.watch}")
        self.set_watch(self.config.watch)

    @property
    def period(self) -> float:
        return float(self.config.watch)

    def status(self) -> PiWatcherStatus:
        return PiWatcherStatus(self._read_byte(REG_STATUS))

    def ping(self) -> None:
        # Reading status is what resets the board's timer.
        self.status()

    def set_watch(self, watch: int) -> None:
        if not 0 <= watch <= MAX_WATCH_SECONDS:
            raise InvalidParameter(
                f"watch must be between 0 and {MAX_WATCH_SECONDS}, got {watch}"
            )
        self._write(REG_WATCH, [watch])

    def get_watch(self) -> int:
        return self._read_byte(REG_WATCH)

    def set_wake(self, wake: int) -> None:
        low, high = encode_wake(wake)
        self._write(REG_WAKE, [low, high])

    def get_wake(self) -> int:
        low, high = self._read_block(REG_WAKE, 2)
        return decode_wake(low, high)

    def reset(self) -> None:
        """Clear the latched boot flags."""
        self._write(REG_STATUS, [STATUS_CLEAR])

    def close(self) -> None:
        if self._bus is not None:
            self._bus.close()
            self._bus = None

    def _require_bus(self) -> SMBus:
        if self._bus is None:
            raise DeviceUnavailable("PiWatcher bus is not open")
        return self._bus

    def _read_byte(self, register: int) -> int:
        bus = self._require_bus()
        try:
            return bus.read_byte_data(self.config.address, register)
        except OSError as e:
            raise DeviceUnavailable(
                f"Error reading register {register:#04x}: {e}"
            ) from e

    def _read_block(self, register: int, length: int) -> List[int]:
        bus = self._require_bus()
        try:
            return bus.read_i2c_block_data(self.config.address, register, length)
        except OSError as e:
            raise DeviceUnavailable(
                f"Error reading registers {register:#04x}+{length}: {e}"
            ) from e

    def _write(self, register: int, data: List[int]) -> None:
        bus = self._require_bus()
        try:
            if len(data) == 1:
                bus.write_byte_data(self.config.address, register, data[0])
            else:
                bus.write_i2c_block_data(self.config.address, register, data)
        except OSError as e:
            raise ConfigurationRejected(
                f"Error writing register {register:#04x}: {e}",
                register=register
            ) from e
