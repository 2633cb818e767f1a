"""Tests for the command-line entry point."""

from unittest.mock import MagicMock, patch

import serial

from znp_frame.cli import EXIT_FATAL, EXIT_OK, EXIT_USAGE, main
from znp_frame.protocol.framing import build_frame


def _serial_port(incoming: bytes) -> MagicMock:
    """Mock port that delivers ``incoming`` one byte per read."""
    port = MagicMock()
    port.is_open = True
    port.in_waiting = 0
    port.read.side_effect = [bytes([b]) for b in incoming]
    return port


def test_stdout_mode(capsysbinary):
    assert main(["--stdout", "21", "02", "01", "02"]) == EXIT_OK
    assert capsysbinary.readouterr().out == build_frame(0x21, 0x02, b"\x01\x02")


def test_too_few_tokens(capsys):
    assert main(["21"]) == EXIT_USAGE
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "subSysId" in err
    assert "--tty" in err
    assert "--delay" in err


def test_bad_hex_token(capsys):
    assert main(["--stdout", "21", "0g"]) == EXIT_USAGE
    assert "'0g'" in capsys.readouterr().err


def test_negative_delay(capsys):
    assert main(["--stdout", "--delay", "-1", "21", "02"]) == EXIT_USAGE


def test_open_failure(capsys):
    with patch("serial.Serial", side_effect=serial.SerialException("busy")):
        assert main(["--tty", "/dev/ttyUSB9", "21", "02"]) == EXIT_FATAL
    assert "Unable to open /dev/ttyUSB9" in capsys.readouterr().err


def test_prints_every_decoded_frame(capsys):
    """An unrelated indication is printed before the matching response."""
    incoming = build_frame(0x45, 0xC1, b"\xaa") + build_frame(0x21, 0x02, b"\x01\x02")
    port = _serial_port(incoming)
    with patch("serial.Serial", return_value=port):
        assert main(["21", "02"]) == EXIT_OK

    assert capsys.readouterr().out == "45 c1 aa\n21 02 01 02\n"
    port.write.assert_called_once_with(build_frame(0x21, 0x02))


def test_desync_is_fatal(capsys):
    port = _serial_port(b"\x00")
    with patch("serial.Serial", return_value=port):
        assert main(["21", "02"]) == EXIT_FATAL
    assert "in place of SOF" in capsys.readouterr().err


def test_non_finite_delay(capsys):
    """NaN and infinite delays are rejected before the tty is opened."""
    for value in ("nan", "inf"):
        with patch("serial.Serial", side_effect=AssertionError("tty must not be opened")):
            assert main(["--delay", value, "41", "00"]) == EXIT_USAGE
        assert "finite" in capsys.readouterr().err
