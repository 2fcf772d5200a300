"""
Mock SMBus - Simulates a PiWatcher board behind smbus2.SMBus.

Keeps a small register file and mimics the board's write-one-to-clear
status register, without requiring I2C hardware.
"""

import errno
from typing import List, Tuple

PIWATCHER_ADDRESS = 0x62


class MockSMBus:
    """Register level stand-in for smbus2.SMBus."""

    def __init__(self, bus: int = 1, address: int = PIWATCHER_ADDRESS, size: int = 8):
        self.bus = bus
        self.address = address
        self.registers: List[int] = [0] * size
        self.writes: List[Tuple[int, List[int]]] = []
        self.reads: List[int] = []
        self.closed = False
        self.fail_reads = False
        self.fail_writes = False

    def _check(self, address: int, failing: bool) -> None:
        if self.closed:
            raise OSError(errno.EBADF, "Bus closed")
        if address != self.address or failing:
            raise OSError(errno.EREMOTEIO, "Remote I/O error")

    def read_byte_data(self, i2c_addr: int, register: int) -> int:
        self._check(i2c_addr, self.fail_reads)
        self.reads.append(register)
        return self.registers[register]

    def write_byte_data(self, i2c_addr: int, register: int, value: int) -> None:
        self._check(i2c_addr, self.fail_writes)
        self.writes.append((register, [value]))
        if register == 0:
            # Status flags are cleared by writing ones.
            self.registers[0] &= ~value & 0xFF
        else:
            self.registers[register] = value & 0xFF

    def read_i2c_block_data(self, i2c_addr: int, register: int, length: int) -> List[int]:
        self._check(i2c_addr, self.fail_reads)
        self.reads.append(register)
        return list(self.registers[register:register + length])

    def write_i2c_block_data(self, i2c_addr: int, register: int, data: List[int]) -> None:
        self._check(i2c_addr, self.fail_writes)
        self.writes.append((register, list(data)))
        for offset, value in enumerate(data):
            self.registers[register + offset] = value & 0xFF

    def close(self) -> None:
        self.closed = True

    # Helpers for tests

    def set_status(self, value: int) -> None:
        self.registers[0] = value & 0xFF

    def factory(self):
        """bus_factory for PiWatcher that hands out this bus."""
        def _open(bus: int) -> "MockSMBus":
            self.bus = bus
            self.closed = False
            return self
        return _open


def unavailable_bus(bus: int):
    """bus_factory that behaves like a missing /dev/i2c-N."""
    raise FileNotFoundError(errno.ENOENT, f"No such file or directory: '/dev/i2c-{bus}'")
