import pytest
from unittest.mock import MagicMock, patch

import serial

from mockable_serial import MockableSerial, NativeSerial, build_mockable_serial


@pytest.fixture
def mock_port():
    """An opened mock port using '#' as the stop byte."""
    return MockableSerial("/dev/null", 115200, 0x23, 1).open()


@pytest.fixture
def two_frame_port():
    return build_mockable_serial(
        "/dev/null", 115200, 0x23, 1, initial_responses=[b"test1#", b"test2#"]
    ).open()


@pytest.fixture
def mock_serial():
    """Create a mock serial.Serial instance."""
    mock = MagicMock(spec=serial.Serial)
    mock.is_open = True
    mock.read.return_value = b""
    mock.write.return_value = None
    return mock


@pytest.fixture
def native_port(mock_serial):
    """Open a NativeSerial against a mocked serial.Serial."""
    with patch("mockable_serial.native_serial.serial.Serial", return_value=mock_serial):
        port = NativeSerial("/dev/ttyTEST", 9600, 0x23, 1).open()
        yield port
