"""Blocking exact-count reads over a byte stream that may return short reads."""

from __future__ import annotations

import logging
from typing import Protocol

from ..errors import TransportIOError

logger = logging.getLogger(__name__)


class ByteStream(Protocol):
    """Anything that can hand back whatever bytes are currently readable."""

    def read_available(self, size: int) -> bytes:
        """Block until at least one byte is readable, return up to ``size`` bytes."""
        ...


def read_exact(stream: ByteStream, n: int) -> bytes:
    """Read exactly ``n`` bytes from ``stream``.

    A single read on a serial port may return fewer bytes than asked for, so
    this keeps reading, requesting only what is still missing, until the
    buffer is full.

    Args:
        stream: Source implementing ``read_available(size)``.
        n: Number of bytes required.

    Returns:
        ``n`` bytes in arrival order.

    Raises:
        TransportIOError: If the stream ends before ``n`` bytes arrive.
    """
    buf = bytearray()
    while len(buf) < n:
        chunk = stream.read_available(n - len(buf))
        if not chunk:
            raise TransportIOError(
                f"Unexpected end of stream while reading {n} bytes "
                f"({len(buf)} received)"
            )
        buf += chunk
    if n:
        logger.debug("Read %d bytes: %s", n, buf.hex(" "))
    return bytes(buf)
