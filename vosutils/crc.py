"""CRC-16/MODBUS checksum (reflected polynomial 0xA001)."""

from __future__ import annotations

from collections.abc import Iterable

_POLY = 0xA001


def _build_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ _POLY if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _build_table()


def crc16_update(crc: int, data: int) -> int:
    """Fold one byte into a running CRC-16/MODBUS value."""
    if not 0 <= data <= 0xFF:
        raise ValueError(f"byte out of range: {data}")
    crc &= 0xFFFF
    return (crc >> 8) ^ _TABLE[(crc ^ data) & 0xFF]


def crc16_update_bytes(crc: int, data: bytes | bytearray | Iterable[int]) -> int:
    """Fold a sequence of bytes into a running CRC-16/MODBUS value."""
    crc &= 0xFFFF
    for byte in bytes(data):
        crc = (crc >> 8) ^ _TABLE[(crc ^ byte) & 0xFF]
    return crc