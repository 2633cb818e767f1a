"""ZNP UART frame builder and reader.

Frame layout::

    +------+--------+-----------+---------+----------------+-------+
    | SOF  | Length | Subsystem | Command |    Payload     |  FCS  |
    | 0xFE | 1 byte |  1 byte   | 1 byte  | Length-2 bytes | 1 byte|
    +------+--------+-----------+---------+----------------+-------+

- Length: number of bytes in (subsystem + command + payload), 2-255
- Subsystem: message type in the high 3 bits, subsystem id in the low 5 bits
- FCS: XOR of Length, Subsystem, Command and every payload byte
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import reduce
from typing import Sequence

from ..errors import ChecksumError, DesyncError, FrameError, HexParseError, UsageError
from ..transport.reader import ByteStream, read_exact

logger = logging.getLogger(__name__)

SOF = 0xFE
HEADER_SIZE = 2  # subsystem + command, counted by the length byte
MAX_LENGTH = 0xFF
MAX_PAYLOAD = MAX_LENGTH - HEADER_SIZE

TYPE_MASK = 0xE0
SUBSYSTEM_MASK = 0x1F

_HEX_BYTE = re.compile(r"[0-9A-Fa-f]{2}")


@dataclass(frozen=True)
class Frame:
    """A decoded (or to-be-encoded) ZNP frame."""

    subsystem_byte: int
    command_id: int
    payload: bytes = b""

    def __post_init__(self) -> None:
        for name in ("subsystem_byte", "command_id"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} must be a single byte, got {value}")
        if len(self.payload) > MAX_PAYLOAD:
            raise ValueError(
                f"Payload must be at most {MAX_PAYLOAD} bytes, got {len(self.payload)}"
            )
        object.__setattr__(self, "payload", bytes(self.payload))

    @property
    def length(self) -> int:
        return HEADER_SIZE + len(self.payload)

    @property
    def message_type(self) -> int:
        return self.subsystem_byte & TYPE_MASK

    @property
    def subsystem(self) -> int:
        return self.subsystem_byte & SUBSYSTEM_MASK

    def to_bytes(self) -> bytes:
        return build_frame(self.subsystem_byte, self.command_id, self.payload)

    def format(self) -> str:
        """Render the frame as ``"21 02 01 02"``: subsystem, command, payload."""
        return bytes([self.subsystem_byte, self.command_id]).hex(" ") + (
            " " + self.payload.hex(" ") if self.payload else ""
        )

    def __repr__(self) -> str:
        return (
            f"Frame(subsystem_byte=0x{self.subsystem_byte:02X}, "
            f"command_id=0x{self.command_id:02X}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def compute_fcs(data: bytes) -> int:
    """XOR every byte of ``data`` together."""
    return reduce(lambda acc, b: acc ^ b, data, 0)


def build_frame(subsystem_byte: int, command_id: int, payload: bytes = b"") -> bytes:
    """Encode a request into its wire form.

    Args:
        subsystem_byte: Message type and subsystem id.
        command_id: Command id within the subsystem.
        payload: Command-specific bytes, at most 253.

    Returns:
        ``SOF | length | subsystem | command | payload | fcs``.
    """
    if len(payload) > MAX_PAYLOAD:
        raise ValueError(f"Payload must be at most {MAX_PAYLOAD} bytes, got {len(payload)}")
    body = bytes([HEADER_SIZE + len(payload), subsystem_byte, command_id]) + payload
    return bytes([SOF]) + body + bytes([compute_fcs(body)])


def parse_hex_byte(token: str) -> int:
    """Parse a two-digit hexadecimal token such as ``"2f"`` or ``"A0"``."""
    if not _HEX_BYTE.fullmatch(token):
        raise HexParseError(token)
    return int(token, 16)


def parse_request(tokens: Sequence[str]) -> Frame:
    """Build a request frame from ``subSysId cmdId [hex...]`` tokens.

    Raises:
        UsageError: If fewer than two tokens are given or the payload is too long.
        HexParseError: If any token is not a two-digit hex byte.
    """
    if len(tokens) < HEADER_SIZE:
        raise UsageError("A subsystem id and a command id are required")
    if len(tokens) - HEADER_SIZE > MAX_PAYLOAD:
        raise UsageError(
            f"At most {MAX_PAYLOAD} payload bytes are allowed, "
            f"got {len(tokens) - HEADER_SIZE}"
        )
    values = [parse_hex_byte(token) for token in tokens]
    return Frame(subsystem_byte=values[0], command_id=values[1], payload=bytes(values[2:]))


def read_frame(stream: ByteStream) -> Frame:
    """Read and validate one frame from ``stream``.

    There is no resynchronisation: a stray byte where SOF should be is fatal.

    Raises:
        DesyncError: If the first byte is not SOF (only that byte is consumed).
        FrameError: If the length byte is smaller than the header.
        ChecksumError: If the FCS does not match.
        TransportIOError: If the stream ends mid-frame.
    """
    sof = read_exact(stream, 1)[0]
    if sof != SOF:
        raise DesyncError(sof)

    header = read_exact(stream, 3)
    length, subsystem_byte, command_id = header
    if length < HEADER_SIZE:
        raise FrameError(f"Frame length {length} is shorter than the {HEADER_SIZE}-byte header")
    xor = compute_fcs(header)

    payload = read_exact(stream, length - HEADER_SIZE)
    xor ^= compute_fcs(payload)

    fcs = read_exact(stream, 1)[0]
    if xor != fcs:
        raise ChecksumError(expected=xor, actual=fcs)

    frame = Frame(subsystem_byte=subsystem_byte, command_id=command_id, payload=payload)
    logger.debug("Decoded %r", frame)
    return frame
