"""Exception hierarchy shared by the codec, transport, and CLI layers."""

from __future__ import annotations


class ZnpFrameError(Exception):
    """Base class for every error this package raises."""


class UsageError(ZnpFrameError, ValueError):
    """Malformed or missing command-line input."""


class HexParseError(UsageError):
    """A token is not a two-digit hexadecimal byte."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Could not parse hex value from {token!r}")
        self.token = token


class TransportError(ZnpFrameError):
    """Base class for serial transport failures."""


class TransportOpenError(TransportError, ConnectionError):
    """The serial device could not be opened."""


class TransportIOError(TransportError, IOError):
    """A read or write on the transport failed, or the stream ended."""


class FrameError(ZnpFrameError, ValueError):
    """An incoming frame is malformed."""


class DesyncError(FrameError):
    """A byte other than SOF was found where a frame should start."""

    def __init__(self, found: int) -> None:
        super().__init__(f"Unexpected byte ({found:02x}) found in place of SOF")
        self.found = found


class ChecksumError(FrameError):
    """The FCS byte does not match the XOR of the frame contents."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"FCS byte contained incorrect XOR value. "
            f"Expected {expected:02x}, but found {actual:02x}"
        )
        self.expected = expected
        self.actual = actual
