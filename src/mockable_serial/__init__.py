from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("python-mockable-serial")
except PackageNotFoundError:
    __version__ = "0.0.0"

from .exceptions import MockableSerialError, NoResponseError, FrameTooLongError
from .port import PortSettings, SerialPort, truncate_data
from .mockable_serial import MockableSerial, build_mockable_serial
from .native_serial import NativeSerial
from .frame_reader import FrameReader, DelimitedFrameReader
