"""Cooperative embedded-style building blocks: CRC, queues, lists, hashing, trees, state machines, buttons, logging, shell, scheduler, I2C, CAN and Modbus helpers."""

__version__ = "0.1.0"