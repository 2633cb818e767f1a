"""Command-line entry point.

usage: znp-frame [options] subSysId cmdId [hex ...]

Writes one ZNP request frame to the coordinator tty and prints every frame
read back, one per line, until the response to the request arrives. The
printed line holds the bytes between (but not including) the length and
FCS bytes. With ``--stdout`` the full encoded frame is written to stdout
instead and the tty is not touched.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import DEFAULT_BAUDRATE, DEFAULT_TTY, FrameConfig
from .errors import UsageError, ZnpFrameError
from .protocol.framing import parse_request
from .session import FrameSession

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="znp-frame",
        usage="%(prog)s {options} [subSysId] [cmdId] [hex...]",
        description="Write a ZNP request frame to a UART and print the response frames.",
    )
    parser.add_argument(
        "tokens",
        nargs="*",
        metavar="hex",
        help="subsystem id, command id and payload bytes as two-digit hex",
    )
    parser.add_argument("--tty", default=DEFAULT_TTY, help="the tty device to use (default: %(default)s)")
    parser.add_argument(
        "--baud",
        type=int,
        default=DEFAULT_BAUDRATE,
        help="UART baud rate (default: %(default)s)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="write the frame to stdout instead of to the tty",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="seconds to wait before re-opening the tty after a reset command",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log protocol traffic to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = FrameConfig(
            tty=args.tty,
            baudrate=args.baud,
            delay=args.delay,
            stdout=args.stdout,
        ).validate()
        request = parse_request(args.tokens)
    except UsageError as e:
        parser.print_help(sys.stderr)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        FrameSession(config).run(request)
    except ZnpFrameError as e:
        logger.debug("Fatal error", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FATAL

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
