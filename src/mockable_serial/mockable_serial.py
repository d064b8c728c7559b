#!/usr/bin/env python
# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Created Date: 2026-10-19
# ----------------------------------------------------------------------------
"""A scriptable in-memory serial port for testing framed protocols."""
# ----------------------------------------------------------------------------
import logging
from collections import deque
from typing import Iterable, Optional, Union

import serial

from .exceptions import NoResponseError
from .port import SerialPort, to_bytes, truncate_data

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An error"


class MockableSerial(SerialPort):
    """An in-memory serial port that replays scripted response frames.

    Responses are queued with :meth:`add_response` and delivered one byte per
    :meth:`read` call. The frame currently being delivered is the active
    frame; once its stop byte has been read the next queued frame becomes
    active on the following read.

    Read outcomes can be scripted as well: :meth:`add_outcome` and
    :meth:`fail_next` queue per-call results which are consumed in order,
    falling back to ``default_outcome`` when the queue is empty. A failed
    read still delivers its byte and advances the frame, then raises
    ``serial.SerialException``.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = 9600,
        stop_byte: int = 0x0A,
        read_chunk_size: int = 1,
    ) -> None:
        super().__init__(port, baudrate, stop_byte, read_chunk_size)
        self.is_open = False
        self.default_outcome = True

        self.active_frame = bytearray()
        self.read_cursor = 0
        self.frame_queue: deque[bytes] = deque()
        self.outcome_queue: deque[tuple[bool, str]] = deque()

    def open(self) -> "MockableSerial":
        """Open an independent handle on this mock.

        The handle shares the immutable settings and starts from a copy of
        the current frames, cursor and outcomes. Nothing read from or queued
        on the handle is visible on this port, and vice versa.
        """
        handle = type(self).__new__(type(self))
        handle.settings = self.settings
        handle.is_open = True
        handle.default_outcome = self.default_outcome
        handle.active_frame = bytearray(self.active_frame)
        handle.read_cursor = self.read_cursor
        handle.frame_queue = deque(self.frame_queue)
        handle.outcome_queue = deque(self.outcome_queue)
        logger.info("Opened mock port %s at %d baud", self.port, self.baudrate)
        return handle

    def write(self, data: Union[str, bytes]) -> None:
        """Accept and discard ``data``."""
        data = to_bytes(data)
        logger.debug("SENT %d bytes to %s: %s", len(data), self.port, truncate_data(data))

    def add_response(self, data: Union[str, bytes, Iterable[int]]) -> None:
        """Queue a copy of ``data`` as the next unstarted response frame."""
        frame = to_bytes(data)
        if not frame:
            logger.warning("Empty response frame queued on %s; reading it raises NoResponseError", self.port)
        self.frame_queue.append(frame)

    def add_outcome(self, success: bool, message: str = DEFAULT_ERROR_MESSAGE) -> None:
        """Queue the outcome of the next read not already scripted."""
        self.outcome_queue.append((bool(success), message))

    def fail_next(self, count: int = 1, message: str = DEFAULT_ERROR_MESSAGE) -> None:
        """Make the next ``count`` unscripted reads raise ``SerialException``."""
        for _ in range(count):
            self.add_outcome(False, message)

    def read(self, buffer: bytearray) -> None:
        """Deliver the next byte of the active frame into ``buffer[0]``.

        Raises:
            NoResponseError: no frame is active and none is queued.
            serial.SerialException: the outcome for this read is a failure.
        """
        if not self.active_frame and self.frame_queue:
            self.active_frame.extend(self.frame_queue.popleft())
            self.read_cursor = 0

        if not self.active_frame:
            raise NoResponseError(f"No response queued on {self.port}")

        value = self.active_frame[self.read_cursor]
        buffer[0] = value

        if value == self.stop_byte:
            logger.debug("RECVD frame end 0x%02x from %s", value, self.port)
            self._finish_frame()
        else:
            self.read_cursor += 1
            # An unterminated frame runs straight on into the next one.
            if self.read_cursor >= len(self.active_frame):
                logger.debug("Frame without stop byte exhausted on %s", self.port)
                self._finish_frame()

        success, message = self._next_outcome()
        if not success:
            logger.debug("Injected read failure on %s: %s", self.port, message)
            raise serial.SerialException(message)

    def _finish_frame(self) -> None:
        self.active_frame.clear()
        self.read_cursor = 0

    def _next_outcome(self) -> tuple[bool, str]:
        if self.outcome_queue:
            return self.outcome_queue.popleft()
        return self.default_outcome, DEFAULT_ERROR_MESSAGE

    def clear(self) -> None:
        """Drop the active frame, all queued frames and all queued outcomes."""
        self._finish_frame()
        self.frame_queue.clear()
        self.outcome_queue.clear()

    @property
    def pending_responses(self) -> tuple[bytes, ...]:
        """Queued frames that have not started being read, front first."""
        return tuple(self.frame_queue)

    @property
    def in_waiting(self) -> int:
        """Number of bytes left to read across the active and queued frames.

        Bytes after a stop byte in the same frame are dropped by ``read`` and
        are not counted.
        """
        remaining = self._readable_length(self.active_frame, self.read_cursor)
        return remaining + sum(self._readable_length(frame) for frame in self.frame_queue)

    def _readable_length(self, frame: Union[bytes, bytearray], start: int = 0) -> int:
        end = frame.find(self.stop_byte, start)
        if end == -1:
            return len(frame) - start
        return end + 1 - start

    def close(self) -> None:
        if self.is_open:
            self.is_open = False
            logger.info("Mock port closed for %s", self.port)

    def __enter__(self) -> "MockableSerial":
        return self

    def __exit__(self, exc_type: type, exc_value: Exception, traceback: object) -> None:
        self.close()


def build_mockable_serial(
    port: str,
    baudrate: int = 9600,
    stop_byte: int = 0x0A,
    read_chunk_size: int = 1,
    initial_responses: Optional[Iterable[Union[str, bytes, Iterable[int]]]] = None,
) -> MockableSerial:
    """Create a :class:`MockableSerial` with ``initial_responses`` already queued."""
    mock = MockableSerial(port, baudrate, stop_byte, read_chunk_size)
    if initial_responses is not None:
        for response in initial_responses:
            mock.add_response(response)
    return mock
