"""Fixed-capacity ring queue storing fixed-size units of bytes."""

from __future__ import annotations


class RingQueue:
    """A circular buffer of ``capacity`` units, each ``unit_bytes`` bytes wide."""

    def __init__(self, capacity: int, unit_bytes: int = 1) -> None:
        if capacity <= 0 or unit_bytes <= 0:
            raise ValueError("capacity and unit_bytes must be positive")
        self.capacity = capacity
        self.unit_bytes = unit_bytes
        self._buf = bytearray(capacity * unit_bytes)
        self._rd = 0
        self._wr = 0

    def reset(self) -> None:
        """Discard all queued data."""
        self._rd = 0
        self._wr = 0

    def used(self) -> int:
        """Number of units currently queued."""
        return self._wr - self._rd

    def remain_space(self) -> int:
        """Number of units that can still be added."""
        return self.capacity - self.used()

    def is_empty(self) -> bool:
        return self.used() == 0

    def is_full(self) -> bool:
        return self.remain_space() == 0

    def __len__(self) -> int:
        return self.used()

    def _check_units(self, units: int) -> None:
        if units < 0:
            raise ValueError("units must not be negative")

    def add(self, data: bytes | bytearray) -> int:
        """Append whole units from ``data``; return how many units were stored."""
        data = bytes(data)
        if len(data) % self.unit_bytes:
            raise ValueError("data length is not a multiple of unit_bytes")
        units = min(len(data) // self.unit_bytes, self.remain_space())
        if units == 0:
            return 0
        ub = self.unit_bytes
        index = self._wr % self.capacity
        tail = min(units, self.capacity - index)
        self._buf[index * ub:(index + tail) * ub] = data[:tail * ub]
        if units > tail:
            self._buf[:(units - tail) * ub] = data[tail * ub:units * ub]
        self._wr += units
        return units

    def _copy_out(self, units: int) -> bytes:
        ub = self.unit_bytes
        index = self._rd % self.capacity
        tail = min(units, self.capacity - index)
        out = bytes(self._buf[index * ub:(index + tail) * ub])
        if units > tail:
            out += bytes(self._buf[:(units - tail) * ub])
        return out

    def get(self, units: int) -> bytes:
        """Remove and return up to ``units`` units."""
        self._check_units(units)
        units = min(units, self.used())
        out = self._copy_out(units)
        self._rd += units
        return out

    def peek(self, units: int) -> bytes:
        """Return up to ``units`` units without removing them."""
        self._check_units(units)
        return self._copy_out(min(units, self.used()))

    def advance_rd(self, units: int) -> None:
        """Drop up to ``units`` queued units."""
        self._check_units(units)
        self._rd += min(units, self.used())

    def advance_wr(self, units: int) -> None:
        """Mark up to ``units`` units as written without copying data."""
        self._check_units(units)
        self._wr += min(units, self.remain_space())