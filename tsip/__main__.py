"""
Command line receiver monitor.

Usage:
    python -m tsip HOST [PORT]
    python -m tsip --serial /dev/ttyUSB0 [--baud 9600]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from tsip import __version__
from tsip.exceptions import TSIPError
from tsip.monitor import MonitorSettings, run_monitor
from tsip.protocol.constants import OverflowPolicy, ProtocolConstants

logger = logging.getLogger("tsip")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsip-monitor",
        description="Print decoded TSIP reports from a GPS timing receiver",
    )
    parser.add_argument("host", nargs="?", help="Serial-to-network bridge address")
    parser.add_argument(
        "port",
        nargs="?",
        type=int,
        default=ProtocolConstants.DEFAULT_TCP_PORT,
        help=f"Bridge TCP port (default: {ProtocolConstants.DEFAULT_TCP_PORT})",
    )
    parser.add_argument("--serial", metavar="DEVICE", help="Read from a local serial port instead")
    parser.add_argument(
        "--baud",
        type=int,
        default=ProtocolConstants.DEFAULT_BAUD_RATE,
        help=f"Serial baud rate (default: {ProtocolConstants.DEFAULT_BAUD_RATE})",
    )
    parser.add_argument(
        "--max-frame-length",
        type=int,
        default=ProtocolConstants.MAX_FRAME_LENGTH,
        help=f"Maximum frame length in bytes (default: {ProtocolConstants.MAX_FRAME_LENGTH})",
    )
    parser.add_argument(
        "--fail-on-overflow",
        action="store_true",
        help="Drop oversized frames instead of truncating them",
    )
    parser.add_argument(
        "--resync",
        action="store_true",
        help="Recover from framing errors instead of exiting",
    )
    parser.add_argument("--read-timeout", type=float, default=None, help="Seconds without data before giving up")
    parser.add_argument("--no-version", action="store_true", help="Do not request the software version")
    parser.add_argument(
        "--tracking-interval",
        type=float,
        default=30.0,
        help="Seconds between tracking status requests, 0 disables (default: 30)",
    )
    parser.add_argument(
        "--signal-interval",
        type=float,
        default=0.0,
        help="Seconds between signal level requests, 0 disables (default: 0)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args: argparse.Namespace) -> MonitorSettings:
    """
    Build MonitorSettings from parsed arguments.

    Raises:
        ValidationError: If the combination of arguments is invalid.
    """
    return MonitorSettings(
        host=args.host,
        port=args.port,
        serial_port=args.serial,
        baudrate=args.baud,
        max_frame_length=args.max_frame_length,
        overflow_policy=OverflowPolicy.FAIL if args.fail_on_overflow else OverflowPolicy.TRUNCATE,
        resynchronize=args.resync,
        read_timeout=args.read_timeout,
        version_delay=None if args.no_version else 1.0,
        tracking_interval=args.tracking_interval or None,
        signal_interval=args.signal_interval or None,
    )


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = settings_from_args(args)
    except ValidationError as e:
        parser.error(str(e))

    try:
        stats = asyncio.run(run_monitor(settings))
    except KeyboardInterrupt:
        return 130
    except TSIPError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    logger.info(
        "Stream ended: %d packets decoded, %d frames dropped",
        stats.packets_decoded,
        stats.dropped_frames,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
