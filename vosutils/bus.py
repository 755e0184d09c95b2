"""CAN frame and I2C message types."""

from __future__ import annotations

from dataclasses import dataclass, field

CAN_MAX_DLEN = 8

CAN_STANDARD_ID_MASK = 0x000007FF
CAN_EXTENDED_ID_MASK = 0x1FFFFFFF
CAN_ERR_FLAG = 0x20000000
CAN_RTR_FLAG = 0x40000000
CAN_EXT_FLAG = 0x80000000

I2C_FLAG_WRITE = 0x00
I2C_FLAG_READ = 0x01


@dataclass
class CanFrame:
    """A CAN frame: 32-bit id word (identifier plus flag bits) and up to 8 data bytes."""

    can_id: int
    data: bytes = b""

    def __post_init__(self) -> None:
        if not 0 <= self.can_id <= 0xFFFFFFFF:
            raise ValueError(f"can_id out of 32-bit range: {self.can_id}")
        self.data = bytes(self.data)
        if len(self.data) > CAN_MAX_DLEN:
            raise ValueError(f"CAN data holds at most {CAN_MAX_DLEN} bytes")

    @property
    def dlc(self) -> int:
        """Data length code."""
        return len(self.data)

    def identifier(self) -> int:
        """The 11- or 29-bit identifier without flag bits."""
        mask = CAN_EXTENDED_ID_MASK if self.is_extended() else CAN_STANDARD_ID_MASK
        return self.can_id & mask

    def is_extended(self) -> bool:
        return bool(self.can_id & CAN_EXT_FLAG)

    def is_remote(self) -> bool:
        return bool(self.can_id & CAN_RTR_FLAG)

    def is_error(self) -> bool:
        return bool(self.can_id & CAN_ERR_FLAG)


@dataclass
class I2CMessage:
    """One I2C transfer to a 7-bit address."""

    addr: int
    buf: bytearray = field(default_factory=bytearray)
    flags: int = I2C_FLAG_WRITE

    def __post_init__(self) -> None:
        if not 0 <= self.addr <= 0x7F:
            raise ValueError(f"7-bit address out of range: {self.addr}")
        self.buf = bytearray(self.buf)

    @property
    def length(self) -> int:
        return len(self.buf)

    def is_read(self) -> bool:
        return bool(self.flags & I2C_FLAG_READ)