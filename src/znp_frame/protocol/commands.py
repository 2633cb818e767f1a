"""Message type and subsystem constants, plus the few commands the tool treats specially.

The subsystem byte of every frame packs a message type into its high
3 bits and a subsystem id into its low 5 bits.
"""

from __future__ import annotations

from enum import IntEnum

from .framing import Frame


class MessageType(IntEnum):
    """Message type tags carried in the high bits of the subsystem byte."""

    PLAIN = 0x00
    SYNC_RESPONSE = 0x20
    ASYNC = 0x40


class Subsystem(IntEnum):
    """Subsystem identifiers carried in the low 5 bits of the subsystem byte."""

    RPC_ERROR = 0x00
    SYS = 0x01
    MAC = 0x02
    NWK = 0x03
    AF = 0x04
    ZDO = 0x05
    SAPI = 0x06
    UTIL = 0x07
    DEBUG = 0x08
    APP = 0x09


RESET_SUBSYSTEM_BYTE = MessageType.ASYNC | Subsystem.SYS  # 0x41
RESET_COMMAND_ID = 0x00
WAKE_BYTE = 0xEF


def is_reset_request(frame: Frame) -> bool:
    """Whether ``frame`` is the module reset command (``41 00``)."""
    return frame.subsystem_byte == RESET_SUBSYSTEM_BYTE and frame.command_id == RESET_COMMAND_ID


def describe(frame: Frame) -> str:
    """Human-readable type/subsystem summary used in log messages."""
    try:
        type_name = MessageType(frame.message_type).name
    except ValueError:
        type_name = f"0x{frame.message_type:02X}"
    try:
        subsystem_name = Subsystem(frame.subsystem).name
    except ValueError:
        subsystem_name = f"0x{frame.subsystem:02X}"
    return f"{type_name}/{subsystem_name} cmd=0x{frame.command_id:02X}"
