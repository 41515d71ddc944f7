#!/usr/bin/env python3
# Pendant Watch (serial pendant keyboard bridge)
# Copyright (C) 2026 Pendant Watch contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""
    Pendant Watch - serial pendant to keyboard bridge
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys

from . import __version__
from .console_input import ConsoleKeyReader
from .event_loop import EventLoop
from .key_injection import create_sink
from .serial_link import PendantSerial, list_ports
from .session import Session
from .status_display import TerminalStatusDisplay
from .types import MODIFIER_KEYS, Mode
from .utils import Settings
from .utils.constants import (
    DEFAULT_PORT_POSIX,
    DEFAULT_PORT_WINDOWS,
    MODE_CHOICES,
    MODIFIER_CHOICES,
)
from .utils.exceptions import (
    InjectionUnavailableError,
    InvalidParameterError,
    SerialConnectionError,
    SettingsLoadError,
    SettingsSaveError,
    SettingsValidationError,
)
from .utils.logging_config import setup_logging
from .utils.validation import (
    validate_baud_rate,
    validate_mode_name,
    validate_modifier,
    validate_port_name,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STARTUP_ERROR = 1
EXIT_USAGE = 2


def default_port(platform: str | None = None) -> str:
    platform = platform or sys.platform
    if platform.startswith("win"):
        return DEFAULT_PORT_WINDOWS
    return DEFAULT_PORT_POSIX


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pendant-watch",
        description="Translate CNC pendant jog commands into keyboard input.",
    )
    parser.add_argument("--port", help="Serial port (default: last used, else platform default)")
    parser.add_argument("--baud", type=int, help="Baud rate (default: 115200)")
    parser.add_argument("--mode", choices=MODE_CHOICES, help="Initial mode (default: gcode)")
    parser.add_argument("--modifier", choices=MODIFIER_CHOICES, help="Modifier held during jog keys")
    parser.add_argument("--config", help="Settings file path")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log key events instead of injecting them",
    )
    parser.add_argument("--list-ports", action="store_true", help="List serial ports and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output on the console")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_options(args: argparse.Namespace, settings: Settings) -> dict:
    """Combine CLI arguments with settings; CLI wins.

    Raises:
        InvalidParameterError: If a resolved value is invalid
    """
    port = args.port or settings.get("last_port") or default_port()
    return {
        "port": validate_port_name(port),
        "baud": validate_baud_rate(args.baud if args.baud is not None else settings.get("baud_rate")),
        "mode": Mode(validate_mode_name(args.mode or settings.get("initial_mode"))),
        "modifier": MODIFIER_KEYS[validate_modifier(args.modifier or settings.get("chord_modifier"))],
    }


def _remember_port(settings: Settings, port: str) -> None:
    if settings.get("last_port") == port:
        return
    settings.set("last_port", port)
    try:
        settings.save()
    except SettingsSaveError as e:
        logger.warning(f"Could not remember port: {e}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(console_level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.list_ports:
        ports = list_ports()
        if not ports:
            print("No serial ports found.")
        for device in ports:
            print(device)
        return EXIT_OK

    settings = Settings(args.config)
    try:
        settings.load()
        settings.validate()
    except (SettingsLoadError, SettingsValidationError) as e:
        print(f"Settings error ({settings.filepath}): {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        options = resolve_options(args, settings)
    except InvalidParameterError as e:
        print(str(e), file=sys.stderr)
        return EXIT_USAGE

    try:
        sink = create_sink(dry_run=args.dry_run)
    except InjectionUnavailableError as e:
        logger.error(str(e))
        print(str(e), file=sys.stderr)
        return EXIT_STARTUP_ERROR

    link = PendantSerial(
        options["port"],
        options["baud"],
        read_timeout=settings.get("serial_timeout"),
    )
    try:
        link.connect()
    except SerialConnectionError as e:
        logger.error(str(e))
        print(str(e), file=sys.stderr)
        return EXIT_STARTUP_ERROR
    print(f"Serial port {link.port} opened at {link.baud} baud rate.")
    _remember_port(settings, link.port)

    session = Session(mode=options["mode"], connected=True)
    with contextlib.ExitStack() as stack:
        stack.callback(link.disconnect)
        keys = stack.enter_context(ConsoleKeyReader())
        loop = EventLoop(
            session,
            link,
            keys,
            sink,
            TerminalStatusDisplay(),
            modifier=options["modifier"],
            jog_marker=settings.get("jog_marker"),
            command_prefix=settings.get("command_prefix"),
            key_poll_timeout=settings.get("key_poll_timeout"),
        )
        try:
            loop.run()
        except KeyboardInterrupt:
            logger.info("Interrupted")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
