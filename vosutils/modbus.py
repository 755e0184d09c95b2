"""Modbus constants and frame field helpers."""

from __future__ import annotations

from enum import IntEnum

FUN_RD_REG_MUL = 0x03
FUN_WR_REG_MUL = 0x10

RESP_ERR_NONE = 0x00
RESP_ERR_FUNC = 0x01
RESP_ERR_REG_ADDR = 0x02
RESP_ERR_DATA = 0x03
RESP_ERR_DEV = 0x04
RESP_ERR_PENDING = 0x05
RESP_ERR_BUSY = 0x06

FRAME_BYTES_MAX = 256

MAX_READ_REG_NUM = 125
MAX_WRITE_REG_NUM = 123

ADDR_BYTES_NUM = 1
FUNC_BYTES_NUM = 1
REG_BYTES_NUM = 2
REG_LEN_BYTES_NUM = 2
CRC_BYTES_NUM = 2


class SerialDirection(IntEnum):
    """Which way a half-duplex serial line is currently used."""

    ALL_UNUSE = 0
    RX_ONLY = 1
    TX_ONLY = 2


def func_check_valid(func: int) -> bool:
    """True for the supported function codes (read/write multiple registers)."""
    return func in (FUN_RD_REG_MUL, FUN_WR_REG_MUL)


def check_reg_num_valid(reg_num: int, func: int) -> bool:
    """True if ``reg_num`` registers may be transferred with ``func``."""
    if func == FUN_RD_REG_MUL:
        return reg_num <= MAX_READ_REG_NUM
    if func == FUN_WR_REG_MUL:
        return reg_num <= MAX_WRITE_REG_NUM
    return False


def check_reg_range(reg: int, num: int, start: int, end: int, func: int) -> bool:
    """True if registers ``reg .. reg+num`` fit inside ``[start, end)`` for ``func``."""
    return start <= reg < end and check_reg_num_valid(num, func) and reg + num <= end


def combine_u8_to_u16(high: int, low: int) -> int:
    return ((high << 8) & 0xFFFF) | (low & 0xFFFF)


def combine_u16_to_u32(high: int, low: int) -> int:
    return ((high << 16) & 0xFFFFFFFF) | (low & 0xFFFFFFFF)


def high_byte(value: int) -> int:
    return (value >> 8) & 0xFF


def low_byte(value: int) -> int:
    return value & 0xFF