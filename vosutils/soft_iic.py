"""Bit-banged I2C master driven by user-supplied line functions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

_LOW = 0
_HIGH = 1
_ACK_TIMEOUT = 250
_HALF_PERIOD_US = 2

LineOut = Callable[[int], object]
LineIn = Callable[[], int]
Delay = Callable[[int], object]


class I2CError(Exception):
    """The addressed device did not acknowledge a transfer."""


def _check_byte(name: str, value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} out of byte range: {value}")
    return value


def _check_addr(addr: int) -> int:
    if not 0 <= addr <= 0x7F:
        raise ValueError(f"7-bit address out of range: {addr}")
    return addr


class SoftI2C:
    """An I2C master toggling SCL and SDA through callables.

    ``scl_out(level)`` and ``sda_out(level)`` drive the lines with 0 or 1,
    ``sda_in()`` samples SDA, and ``delay(us)`` waits; without ``delay`` no
    pause is made between edges.
    """

    def __init__(
        self,
        scl_out: LineOut,
        sda_out: LineOut,
        sda_in: LineIn,
        delay: Optional[Delay] = None,
    ) -> None:
        if scl_out is None or sda_out is None or sda_in is None:
            raise ValueError("scl_out, sda_out and sda_in are required")
        self._scl = scl_out
        self._sda = sda_out
        self._sda_in = sda_in
        self._delay_fn = delay

    def _delay(self, us: int = _HALF_PERIOD_US) -> None:
        if self._delay_fn is not None:
            self._delay_fn(us)

    def start(self) -> None:
        """Generate a START condition."""
        self._sda(_HIGH)
        self._scl(_HIGH)
        self._delay()
        self._sda(_LOW)
        self._delay()
        self._scl(_LOW)

    def stop(self) -> None:
        """Generate a STOP condition."""
        self._scl(_LOW)
        self._sda(_LOW)
        self._delay()
        self._scl(_HIGH)
        self._sda(_HIGH)
        self._delay()

    def wait_ack(self) -> bool:
        """Clock the acknowledge bit; return False (after a STOP) if none came."""
        waited = 0
        self._sda(_HIGH)
        self._delay()
        self._scl(_HIGH)
        self._delay()
        while self._sda_in():
            waited += 1
            if waited > _ACK_TIMEOUT:
                self.stop()
                return False
        self._scl(_LOW)
        return True

    def ack(self) -> None:
        """Send an acknowledge bit."""
        self._scl(_LOW)
        self._sda(_LOW)
        self._delay()
        self._scl(_HIGH)
        self._delay()
        self._scl(_LOW)

    def nack(self) -> None:
        """Send a not-acknowledge bit."""
        self._scl(_LOW)
        self._sda(_HIGH)
        self._delay()
        self._scl(_HIGH)
        self._delay()
        self._scl(_LOW)

    def send_byte(self, data: int) -> None:
        """Shift out one byte, most significant bit first."""
        _check_byte("data", data)
        self._scl(_LOW)
        for shift in range(7, -1, -1):
            self._sda((data >> shift) & 1)
            self._scl(_HIGH)
            self._delay()
            self._scl(_LOW)
            self._delay()

    def receive_byte(self, ack: bool) -> int:
        """Shift in one byte, then send ACK if ``ack`` is true, else NACK."""
        received = 0
        for _ in range(8):
            self._scl(_LOW)
            self._delay()
            self._scl(_HIGH)
            received = ((received << 1) | (1 if self._sda_in() else 0)) & 0xFF
            self._delay()
        if ack:
            self.ack()
        else:
            self.nack()
        return received

    def _address_register(self, addr: int, reg: int) -> None:
        self.start()
        self.send_byte(addr << 1)
        if not self.wait_ack():
            self.stop()
            raise I2CError(f"device 0x{addr:02x} did not acknowledge its address")
        self.send_byte(reg)
        self.wait_ack()

    def write_one_byte(self, addr: int, reg: int, data: int) -> None:
        """Write ``data`` to register ``reg`` of device ``addr``."""
        _check_addr(addr)
        _check_byte("reg", reg)
        _check_byte("data", data)
        self._address_register(addr, reg)
        self.send_byte(data)
        if not self.wait_ack():
            self.stop()
            raise I2CError(f"device 0x{addr:02x} did not acknowledge data")
        self.stop()

    def write_bytes(self, addr: int, reg: int, data: bytes | bytearray) -> None:
        """Write up to 255 bytes starting at register ``reg`` of device ``addr``."""
        _check_addr(addr)
        _check_byte("reg", reg)
        payload = bytes(data)
        if len(payload) > 0xFF:
            raise ValueError("at most 255 bytes can be written at once")
        self._address_register(addr, reg)
        for byte in payload:
            self.send_byte(byte)
            if not self.wait_ack():
                self.stop()
                raise I2CError(f"device 0x{addr:02x} did not acknowledge data")
        self.stop()

    def read_bytes(self, addr: int, reg: int, length: int) -> bytes:
        """Read ``length`` (at most 255) bytes starting at register ``reg``."""
        _check_addr(addr)
        _check_byte("reg", reg)
        if not 0 <= length <= 0xFF:
            raise ValueError("length must be between 0 and 255")
        self._address_register(addr, reg)
        self.start()
        self.send_byte((addr << 1) | 1)
        self.wait_ack()
        out = bytearray()
        for remaining in range(length, 0, -1):
            out.append(self.receive_byte(remaining != 1))
        self.stop()
        return bytes(out)