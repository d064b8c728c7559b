#!/usr/bin/env python
# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Created Date: 2026-10-19
# ----------------------------------------------------------------------------
"""The serial port capability shared by the mock and the native driver."""
# ----------------------------------------------------------------------------
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union


def truncate_data(data: bytes, max_len: int = 30) -> bytes:
    """Truncate data if it exceeds the maximum length."""
    if len(data) > max_len:
        return data[:max_len] + b"..."
    return data


def to_bytes(data: Union[str, bytes, bytearray, memoryview, list, tuple]) -> bytes:
    """Normalise writable/response data to an immutable bytes copy."""
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, int):
        raise TypeError(f"expected bytes-like data, got int {data!r}")
    return bytes(data)


def to_byte_value(value: Union[int, bytes, bytearray], name: str = "stop_byte") -> int:
    """Normalise an int or single byte (``b"#"``) to an int in 0..255."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 1:
            raise ValueError(f"{name} must be a single byte, got {value!r}")
        return value[0]
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an int or a single byte, got {value!r}")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in range 0..255, got {value}")
    return value


@dataclass(frozen=True)
class PortSettings:
    """Immutable port configuration, shared by every handle opened from a port.

    ``stop_byte`` accepts an int or a single byte (``b"#"``) and is stored as
    an int. ``baudrate`` and ``read_chunk_size`` are kept for parity with a
    real port but never change read behaviour.
    """

    port: str
    baudrate: int = 9600
    stop_byte: int = 0x0A
    read_chunk_size: int = 1

    def __post_init__(self) -> None:
        stop_byte = to_byte_value(self.stop_byte)
        if self.baudrate < 0:
            raise ValueError(f"baudrate must be non-negative, got {self.baudrate}")
        if self.read_chunk_size < 0:
            raise ValueError(f"read_chunk_size must be non-negative, got {self.read_chunk_size}")
        object.__setattr__(self, "stop_byte", stop_byte)


class SerialPort(ABC):
    """Abstract base class for a byte-at-a-time serial port.

    Client code written against ``open``/``write``/``read`` can be handed
    either a :class:`~mockable_serial.NativeSerial` or a
    :class:`~mockable_serial.MockableSerial`.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = 9600,
        stop_byte: int = 0x0A,
        read_chunk_size: int = 1,
    ) -> None:
        self.settings = PortSettings(port, baudrate, stop_byte, read_chunk_size)

    @property
    def port(self) -> str:
        return self.settings.port

    @property
    def baudrate(self) -> int:
        return self.settings.baudrate

    @property
    def stop_byte(self) -> int:
        return self.settings.stop_byte

    @property
    def read_chunk_size(self) -> int:
        return self.settings.read_chunk_size

    @abstractmethod
    def open(self) -> "SerialPort":
        """Return a handle ready for reading and writing."""

    @abstractmethod
    def write(self, data: Union[str, bytes]) -> None:
        pass

    @abstractmethod
    def read(self, buffer: bytearray) -> None:
        """Read one byte into ``buffer[0]``."""

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(port={self.port!r}, baudrate={self.baudrate}, "
            f"stop_byte=0x{self.stop_byte:02x}, read_chunk_size={self.read_chunk_size})"
        )
