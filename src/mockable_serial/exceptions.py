"""Exceptions raised by mockable_serial outside the normal serial I/O path.

Injected read failures are reported as ``serial.SerialException`` so client
code sees the same error type a real port would raise. The classes here
cover misuse of the mock and framing problems, and are deliberately not
``OSError`` subclasses.
"""


class MockableSerialError(LookupError):
    """Base exception for mockable_serial errors."""
    pass


class NoResponseError(MockableSerialError):
    """Raised when ``read`` is called with no active frame and an empty queue.

    This is a precondition violation by the test: it never scripted a
    response for this read.
    """
    pass


class FrameTooLongError(MockableSerialError):
    """Raised when a frame exceeds the reader's maximum length without a stop byte."""
    pass
