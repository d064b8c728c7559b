"""Tests for scripted read outcomes (per-call queue plus persistent default)."""

import pytest

import serial

from mockable_serial import MockableSerial, NoResponseError


@pytest.fixture
def port():
    mock = MockableSerial("/dev/null", 115200, 0x23, 1).open()
    mock.add_response(b"abcdef#")
    return mock


def read_outcomes(port, count):
    """Return True/False per read depending on whether it raised."""
    results = []
    buf = bytearray(1)
    for _ in range(count):
        try:
            port.read(buf)
            results.append(True)
        except serial.SerialException:
            results.append(False)
    return results


class TestDefaultOutcome:
    def test_success_by_default(self, port):
        assert read_outcomes(port, 3) == [True, True, True]

    def test_default_failure_persists(self, port):
        port.default_outcome = False
        assert read_outcomes(port, 3) == [False, False, False]

    def test_default_failure_message(self, port):
        port.default_outcome = False
        with pytest.raises(serial.SerialException, match="An error"):
            port.read(bytearray(1))

    def test_failure_is_generic_io_error(self, port):
        port.default_outcome = False
        with pytest.raises(OSError):
            port.read(bytearray(1))


class TestOutcomeQueue:
    def test_fail_next_hits_exactly_one_read(self, port):
        port.fail_next()
        assert read_outcomes(port, 3) == [False, True, True]

    def test_fail_next_count(self, port):
        port.fail_next(2)
        assert read_outcomes(port, 4) == [False, False, True, True]

    def test_mixed_outcomes_consumed_fifo(self, port):
        port.add_outcome(True)
        port.add_outcome(False)
        port.add_outcome(True)
        port.add_outcome(False)
        assert read_outcomes(port, 5) == [True, False, True, False, True]

    def test_queue_overrides_default(self, port):
        port.default_outcome = False
        port.add_outcome(True)
        assert read_outcomes(port, 2) == [True, False]

    def test_custom_message(self, port):
        port.fail_next(message="framing error")
        with pytest.raises(serial.SerialException, match="framing error"):
            port.read(bytearray(1))

    def test_failed_read_still_delivers_byte(self, port):
        port.fail_next()
        buf = bytearray(1)
        with pytest.raises(serial.SerialException):
            port.read(buf)
        assert buf == b"a"
        assert port.read_cursor == 1
        port.read(buf)
        assert buf == b"b"

    def test_failure_on_stop_byte_still_completes_frame(self):
        mock = MockableSerial("/dev/null", 115200, 0x23, 1)
        mock.add_response(b"#")
        mock.add_response(b"x#")
        mock.fail_next()
        with pytest.raises(serial.SerialException):
            mock.read(bytearray(1))
        assert len(mock.active_frame) == 0
        assert mock.read_cursor == 0
        assert mock.pending_responses == (b"x#",)

    def test_no_response_does_not_consume_outcome(self):
        mock = MockableSerial("/dev/null", 115200, 0x23, 1)
        mock.fail_next()
        with pytest.raises(NoResponseError):
            mock.read(bytearray(1))
        assert len(mock.outcome_queue) == 1
