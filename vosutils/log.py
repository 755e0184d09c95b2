"""Buffered, level- and module-filtered logging to a byte sink."""

from __future__ import annotations

import struct
from collections.abc import Callable
from enum import IntEnum
from typing import Optional

from vosutils.ring_queue import RingQueue

MAX_LOG_LENGTH = 256
TOTAL_FRAME_COUNT = 8
LOG_BUFFER_SIZE = MAX_LOG_LENGTH * TOTAL_FRAME_COUNT
MAX_MODULES = 32

_HEADER = struct.Struct("<II")  # entry length, module mask

LogWrite = Callable[[bytes], object]


class LogLevel(IntEnum):
    """Severity levels; messages below the current level are dropped."""

    ALL = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    NONE = 5


_LEVEL_NAMES = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARN: "WARN",
    LogLevel.ERROR: "ERROR",
}


def _lowest_bit(mask: int) -> Optional[int]:
    if mask <= 0:
        return None
    return (mask & -mask).bit_length() - 1


class SysLog:
    """Formats log lines into a bounded queue and flushes them from :meth:`task`."""

    def __init__(self, write: LogWrite, period_ms: int = 0) -> None:
        if write is None:
            raise ValueError("a write function is required")
        self.write: Optional[LogWrite] = write
        self.period_ms = period_ms
        self.level = LogLevel.INFO
        self.module_mask = 0
        self._modules: list[Optional[str]] = [None] * MAX_MODULES
        self._module_count = 0
        self._queue = RingQueue(LOG_BUFFER_SIZE)

    def allocate_mask(self, module_name: str) -> int:
        """Register a module and return its one-bit mask; the 33rd reuses the last bit."""
        if self._module_count >= MAX_MODULES:
            self._module_count = MAX_MODULES - 1
        mask = 1 << self._module_count
        self.module_mask |= mask
        self._modules[self._module_count] = module_name
        self._module_count += 1
        return mask

    def enable_all_mask(self) -> None:
        """Enable output of every registered module."""
        self.module_mask |= (1 << self._module_count) - 1

    def module_names(self, limit: Optional[int] = None) -> list[str]:
        """Registered module names, ordered by mask bit, at most ``limit`` of them."""
        count = self._module_count if limit is None else min(limit, self._module_count)
        return [name for name in self._modules[:count]]

    def set_output(self, write: Optional[LogWrite]) -> None:
        """Replace the output function; None silences the log."""
        self.write = write

    def log(self, mask: int, level: LogLevel, line: int, message: str) -> int:
        """Queue one log line; return the number of bytes queued (0 if dropped)."""
        if self.write is None or level < self.level:
            return 0
        index = _lowest_bit(mask)
        if index is None or index >= self._module_count:
            return 0
        level_name = _LEVEL_NAMES.get(level, "XXXXX")
        module = self._modules[index] or ""
        text = f"[{level_name:<5}] [{module:<10}] [{line:<4}] : {message}"
        payload = text.encode("utf-8")[: MAX_LOG_LENGTH - 1]
        if self._queue.remain_space() < len(payload) + _HEADER.size:
            return 0
        self._queue.add(_HEADER.pack(len(payload), mask & 0xFFFFFFFF))
        self._queue.add(payload)
        return len(payload)

    def task(self) -> None:
        """Flush queued lines whose module is enabled to the output function."""
        if self.write is None:
            return
        while not self._queue.is_empty():
            length, mask = _HEADER.unpack(self._queue.get(_HEADER.size))
            if length == 0 or length > MAX_LOG_LENGTH:
                return
            payload = self._queue.get(length)
            if self.module_mask & mask:
                self.write(payload)