"""Re-synchronise the serial link after a module reset command.

After a reset the module needs the tty closed for a while and a wake byte
before it will talk framed protocol again.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

from .commands import WAKE_BYTE

logger = logging.getLogger(__name__)


class Transport(Protocol):
    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...


Opener = Callable[[], Transport]


class ResetSequencer:
    """Close, wait, wake, and reopen the transport.

    Args:
        opener: Returns a freshly opened transport each time it is called.
        delay: Seconds to wait with the transport closed.
        sleep: Sleep function, replaceable in tests.
    """

    def __init__(
        self,
        opener: Opener,
        delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._opener = opener
        self._delay = delay
        self._sleep = sleep

    def resync(self, transport: Transport) -> Transport:
        """Run the sequence on a transport the reset frame was just written to.

        Returns:
            The reopened transport, ready for response matching.
        """
        transport.close()

        logger.info("Waiting %s s for the module to reset", self._delay)
        self._sleep(self._delay)

        waker = self._opener()
        try:
            waker.write(bytes([WAKE_BYTE]))
        finally:
            waker.close()
        logger.info("Sent wake byte 0x%02X", WAKE_BYTE)

        return self._opener()
