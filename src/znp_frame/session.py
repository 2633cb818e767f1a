"""One request/response exchange with the coordinator.

``FrameSession.run`` writes the request, runs the reset sequence when the
request is the module reset command, then reads frames until the reply
arrives. In stdout mode the encoded frame is emitted and nothing is read.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import BinaryIO, Callable

from .config import FrameConfig
from .protocol.commands import describe, is_reset_request
from .protocol.framing import Frame
from .protocol.matcher import FrameCallback, match_response
from .protocol.reset import ResetSequencer
from .transport.serial_connection import SerialConnection, StdoutSink

logger = logging.getLogger(__name__)


def print_frame(frame: Frame) -> None:
    print(frame.format(), flush=True)


class FrameSession:
    """Owns the transport for the duration of one exchange.

    Args:
        config: Device and mode options.
        opener: Returns an opened transport; defaults to a
            :class:`SerialConnection` built from ``config``.
        output: Binary stream for stdout mode; defaults to ``sys.stdout.buffer``.
        sleep: Sleep function used by the reset sequence.
        on_frame: Called with every decoded frame; defaults to printing it.
    """

    def __init__(
        self,
        config: FrameConfig,
        opener: Callable[[], SerialConnection] | None = None,
        output: BinaryIO | None = None,
        sleep: Callable[[float], None] = time.sleep,
        on_frame: FrameCallback | None = print_frame,
    ) -> None:
        self._config = config
        self._opener = opener or self._open_serial
        self._output = output
        self._sleep = sleep
        self._on_frame = on_frame

    def _open_serial(self) -> SerialConnection:
        return SerialConnection(self._config.tty, self._config.baudrate).open()

    def run(self, request: Frame) -> Frame | None:
        """Send ``request`` and return its matched response.

        Returns:
            The response frame, or ``None`` in stdout mode.
        """
        wire = request.to_bytes()
        logger.info("Request %s: %s", describe(request), wire.hex(" "))

        if self._config.stdout:
            StdoutSink(self._output or sys.stdout.buffer).write(wire)
            return None

        transport = self._opener()
        try:
            transport.write(wire)

            if is_reset_request(request):
                sequencer = ResetSequencer(self._opener, self._config.delay, self._sleep)
                transport = sequencer.resync(transport)

            return match_response(transport, request, self._on_frame)
        finally:
            transport.close()
