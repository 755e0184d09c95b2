import pytest

from vosutils.bus import (
    CAN_EXT_FLAG,
    CAN_ERR_FLAG,
    CAN_RTR_FLAG,
    I2C_FLAG_READ,
    I2C_FLAG_WRITE,
    CanFrame,
    I2CMessage,
)


def test_standard_frame_identifier():
    frame = CanFrame(0x123, b"\x01\x02")
    assert frame.identifier() == 0x123
    assert frame.is_extended() is False
    assert frame.dlc == 2


def test_extended_frame_identifier_strips_flags():
    frame = CanFrame(CAN_EXT_FLAG | 0x1ABCDEF)
    assert frame.is_extended() is True
    assert frame.identifier() == 0x1ABCDEF


def test_standard_identifier_masked_to_11_bits():
    frame = CanFrame(0x7FF | 0x800)
    assert frame.identifier() == 0x7FF


def test_remote_and_error_flags():
    frame = CanFrame(CAN_RTR_FLAG | CAN_ERR_FLAG | 0x10)
    assert frame.is_remote() is True
    assert frame.is_error() is True
    assert CanFrame(0x10).is_remote() is False


def test_data_too_long_rejected():
    with pytest.raises(ValueError):
        CanFrame(0x1, bytes(9))


def test_can_id_range_checked():
    with pytest.raises(ValueError):
        CanFrame(1 << 32)


def test_i2c_message_direction():
    assert I2CMessage(0x50, b"\x00", I2C_FLAG_READ).is_read() is True
    assert I2CMessage(0x50, b"\x00", I2C_FLAG_WRITE).is_read() is False


def test_i2c_message_length():
    message = I2CMessage(0x20, b"abc")
    assert message.length == 3
    assert bytes(message.buf) == b"abc"


def test_i2c_message_address_range():
    with pytest.raises(ValueError):
        I2CMessage(0x80)