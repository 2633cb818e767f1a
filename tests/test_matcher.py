"""Tests for response matching."""

from fakes import FakeStream
from znp_frame.protocol.framing import Frame, build_frame
from znp_frame.protocol.matcher import is_response_to, match_response


def test_is_response_to():
    request = Frame(0x21, 0x02)
    assert is_response_to(request, Frame(0x21, 0x02))
    assert is_response_to(request, Frame(0x21, 0x99))
    assert not is_response_to(request, Frame(0x41, 0x80))
    assert not is_response_to(request, Frame(0x61, 0x02))

    plain = Frame(0x01, 0x02)
    assert is_response_to(plain, Frame(0x21, 0x02))
    assert is_response_to(plain, Frame(0x01, 0x02))


def test_match_skips_unrelated_frames():
    """Two unrelated frames are reported and skipped; the third matches."""
    request = Frame(0x21, 0x02)
    stream = FakeStream(
        build_frame(0x41, 0x80, b"\x00")
        + build_frame(0x41, 0x81)
        + build_frame(0x21 | 0x20, 0x02, b"\x05")
        + build_frame(0x45, 0xC0)
    )
    seen = []

    response = match_response(stream, request, seen.append)

    assert response == Frame(0x21, 0x02, b"\x05")
    assert [f.subsystem_byte for f in seen] == [0x41, 0x41, 0x21]
    # Nothing past the matching frame is read.
    assert stream.remaining == build_frame(0x45, 0xC0)


def test_match_without_callback():
    stream = FakeStream(build_frame(0x67, 0x00, b"\x01"))
    assert match_response(stream, Frame(0x47, 0x00)).payload == b"\x01"
