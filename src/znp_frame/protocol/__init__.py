"""Protocol layer: frame codec, response matching, and reset handling."""

from .framing import Frame, build_frame, parse_request, read_frame
from .commands import MessageType, Subsystem, is_reset_request
from .matcher import is_response_to, match_response
from .reset import ResetSequencer
