import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from .exceptions import FrameTooLongError
from .port import SerialPort, to_byte_value, truncate_data

logger = logging.getLogger(__name__)


class FrameReader(ABC):
    """Abstract base class for frame readers."""

    def __init__(self, port: SerialPort) -> None:
        self.port = port

    @abstractmethod
    def read_frame(self) -> bytes:
        pass

    def read_frames(self, count: int) -> list[bytes]:
        """Read ``count`` consecutive frames."""
        return [self.read_frame() for _ in range(count)]


class DelimitedFrameReader(FrameReader):
    """Reads byte by byte until the stop byte, returning the frame with it."""

    def __init__(
        self,
        port: SerialPort,
        stop_byte: Optional[Union[int, bytes]] = None,
        max_length: Optional[int] = None,
    ) -> None:
        super().__init__(port)
        self.stop_byte = port.stop_byte if stop_byte is None else to_byte_value(stop_byte)
        self.max_length = max_length

    def read_frame(self) -> bytes:
        frame = bytearray()
        buffer = bytearray(1)
        while True:
            self.port.read(buffer)
            frame.append(buffer[0])
            if buffer[0] == self.stop_byte:
                break
            if self.max_length is not None and len(frame) >= self.max_length:
                raise FrameTooLongError(
                    f"No stop byte 0x{self.stop_byte:02x} within {self.max_length} bytes"
                )
        logger.debug("RECVD frame of %d bytes: %s", len(frame), truncate_data(bytes(frame)))
        return bytes(frame)
