"""Runtime configuration for a single request/response run."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

from .errors import UsageError

DEFAULT_TTY = "COM3" if sys.platform == "win32" else "/dev/tty.zigbee"
DEFAULT_BAUDRATE = 115200


@dataclass
class FrameConfig:
    """Options threaded from the CLI into :class:`~znp_frame.session.FrameSession`.

    Attributes:
        tty: Serial device path of the coordinator.
        baudrate: UART baud rate.
        delay: Seconds to wait before reopening the tty after a reset command.
        stdout: Write the encoded frame to stdout instead of the tty.
    """

    tty: str = DEFAULT_TTY
    baudrate: int = DEFAULT_BAUDRATE
    delay: float = 0.0
    stdout: bool = False

    def validate(self) -> FrameConfig:
        if not math.isfinite(self.delay) or self.delay < 0:
            raise UsageError(f"Delay must be a finite number of seconds >= 0, got {self.delay}")
        if self.baudrate <= 0:
            raise UsageError(f"Baud rate must be positive, got {self.baudrate}")
        return self
