"""Serial UART connection to a ZNP coordinator module.

The module is reached through a tty (e.g. ``/dev/tty.zigbee``) opened with
pyserial. Reads block indefinitely: the port is opened with ``timeout=None``
so a one-byte read waits until the module says something.
"""

from __future__ import annotations

import logging
from typing import BinaryIO

import serial

from ..config import DEFAULT_BAUDRATE, DEFAULT_TTY
from ..errors import TransportIOError, TransportOpenError

logger = logging.getLogger(__name__)


class SerialConnection:
    """Manages the serial link to the coordinator.

    Usage::

        conn = SerialConnection("/dev/ttyACM0")
        conn.open()
        conn.write(frame_bytes)
        header = read_exact(conn, 3)
        conn.close()
    """

    def __init__(self, tty: str = DEFAULT_TTY, baudrate: int = DEFAULT_BAUDRATE) -> None:
        self._tty = tty
        self._baudrate = baudrate
        self._serial: serial.Serial | None = None

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> SerialConnection:
        """Open the tty.

        Returns:
            ``self``, so the call can be chained from an opener.

        Raises:
            TransportOpenError: If the device cannot be opened.
        """
        try:
            self._serial = serial.Serial(self._tty, self._baudrate, timeout=None)
        except (serial.SerialException, OSError) as e:
            raise TransportOpenError(f"Unable to open {self._tty}: {e}") from e

        logger.info("Opened %s at %d baud", self._tty, self._baudrate)
        return self

    def close(self) -> None:
        """Close the tty. Closing an already closed connection is a no-op."""
        if self._serial is None:
            return

        try:
            self._serial.close()
        except (serial.SerialException, OSError) as e:
            logger.warning("Error closing %s: %s", self._tty, e)
        finally:
            self._serial = None
            logger.info("Closed %s", self._tty)

    def write(self, data: bytes) -> int:
        """Write raw bytes to the module.

        Raises:
            TransportIOError: If not connected or the write fails.
        """
        port = self._require_open()
        try:
            written = port.write(data)
            port.flush()
        except (serial.SerialException, OSError) as e:
            raise TransportIOError(f"Write to {self._tty} failed: {e}") from e

        logger.debug("Wrote %d bytes: %s", len(data), data.hex(" "))
        return written

    def read_available(self, size: int) -> bytes:
        """Block until data is readable, then return up to ``size`` bytes.

        When nothing is buffered this waits on a single-byte read; otherwise
        it returns what the driver already holds, so callers must expect
        short reads.

        Raises:
            TransportIOError: If not connected or the read fails.
        """
        port = self._require_open()
        try:
            waiting = port.in_waiting
            if waiting == 0:
                return port.read(1)
            return port.read(min(size, waiting))
        except (serial.SerialException, OSError) as e:
            raise TransportIOError(f"Read from {self._tty} failed: {e}") from e

    def _require_open(self) -> serial.Serial:
        if self._serial is None:
            raise TransportIOError(f"{self._tty} is not open")
        return self._serial


class StdoutSink:
    """Write-only stand-in for the serial link used by ``--stdout`` mode."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def write(self, data: bytes) -> int:
        written = self._stream.write(data)
        self._stream.flush()
        return written

    def close(self) -> None:
        # The sink does not own the underlying stream.
        pass
