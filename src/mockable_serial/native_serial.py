#!/usr/bin/env python
# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Created Date: 2026-10-19
# ----------------------------------------------------------------------------
"""A pyserial-backed port with the same interface as MockableSerial."""
# ----------------------------------------------------------------------------
import logging
from typing import Optional, Union

import serial

from .port import SerialPort, to_bytes, truncate_data

logger = logging.getLogger(__name__)


class NativeSerial(SerialPort):
    """A real serial port read one byte at a time.

    Constructing a ``NativeSerial`` performs no I/O; :meth:`open` connects and
    returns a new handle sharing the same settings.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = 9600,
        stop_byte: int = 0x0A,
        read_chunk_size: int = 1,
        timeout: float = 1.0,
    ) -> None:
        super().__init__(port, baudrate, stop_byte, read_chunk_size)
        self.timeout = timeout
        self.serial: Optional[serial.Serial] = None

    def open(self) -> "NativeSerial":
        """Connect to the configured port and return the connected handle."""
        handle = type(self).__new__(type(self))
        handle.settings = self.settings
        handle.timeout = self.timeout
        try:
            handle.serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                timeout=self.timeout,
            )
        except serial.SerialException as e:
            logger.error("Failed to connect to %s: %s", self.port, e)
            raise
        logger.info("Connected to %s at %d baud", self.port, self.baudrate)
        return handle

    def _require_open(self) -> serial.Serial:
        if self.serial is None or not self.serial.is_open:
            raise serial.PortNotOpenError()
        return self.serial

    def write(self, data: Union[str, bytes]) -> None:
        """Blocking write to the serial port."""
        port = self._require_open()
        data = to_bytes(data)
        port.write(data)
        logger.debug("SENT %d bytes to %s: %s", len(data), self.port, truncate_data(data))

    def read(self, buffer: bytearray) -> None:
        """Read one byte into ``buffer[0]``, waiting at most ``timeout`` seconds."""
        port = self._require_open()
        data = port.read(1)
        if not data:
            raise serial.SerialTimeoutException(f"Read timed out on {self.port}")
        buffer[0] = data[0]

    @property
    def is_open(self) -> bool:
        return self.serial is not None and self.serial.is_open

    def close(self) -> None:
        if self.serial and self.serial.is_open:
            self.serial.close()
            logger.info("Serial connection closed for %s", self.port)

    def __enter__(self) -> "NativeSerial":
        return self

    def __exit__(self, exc_type: type, exc_value: Exception, traceback: object) -> None:
        self.close()
