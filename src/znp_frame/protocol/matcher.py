"""Find the reply to an outstanding request among incoming frames.

The protocol carries no sequence numbers, so a reply is recognised only by
its subsystem byte: either identical to the request's, or the request's with
the synchronous-response bit set. Anything else (asynchronous indications,
for instance) is handed to the caller and skipped.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..transport.reader import ByteStream
from .commands import MessageType, describe
from .framing import Frame, read_frame

logger = logging.getLogger(__name__)

FrameCallback = Callable[[Frame], None]


def is_response_to(request: Frame, frame: Frame) -> bool:
    return frame.subsystem_byte in (
        request.subsystem_byte,
        request.subsystem_byte | MessageType.SYNC_RESPONSE,
    )


def match_response(
    stream: ByteStream,
    request: Frame,
    on_frame: FrameCallback | None = None,
) -> Frame:
    """Read frames until one answers ``request``.

    Blocks for as long as the stream does; there is no iteration limit.

    Args:
        stream: Source of incoming frames.
        request: The request that was sent.
        on_frame: Called with every decoded frame, matching or not.

    Returns:
        The first frame for which :func:`is_response_to` holds.
    """
    while True:
        frame = read_frame(stream)
        if on_frame is not None:
            on_frame(frame)
        if is_response_to(request, frame):
            logger.debug("Matched response %s", describe(frame))
            return frame
        logger.debug("Skipping unrelated frame %s", describe(frame))
