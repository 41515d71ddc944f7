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
# Optional (not required by the license): If you make improvements, please consider
# contributing them back upstream (e.g., via a pull request) so others can benefit.
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Constants and configuration values for Pendant Watch.

This module centralizes magic numbers, default values, and wire-format
constants used throughout the application.
"""

from typing import Tuple

# ============================================================================
# SERIAL COMMUNICATION CONSTANTS
# ============================================================================

BAUD_DEFAULT = 115200
"""Default baud rate for the pendant serial link."""

VALID_BAUD_RATES: Tuple[int, ...] = (9600, 19200, 38400, 57600, 115200, 230400)
"""Baud rates accepted by the CLI and settings validation."""

DEFAULT_PORT_WINDOWS = "COM6"
"""Port used on Windows when neither the CLI nor settings name one."""

DEFAULT_PORT_POSIX = "/dev/ttyACM0"
"""Port used on Linux/macOS when neither the CLI nor settings name one."""

SERIAL_READ_TIMEOUT = 0.01
"""Bounded wait (seconds) for one inbound read per loop tick."""

SERIAL_WRITE_TIMEOUT = 0.5
"""Write timeout (seconds) for outbound G-code lines."""

SERIAL_CONNECT_DELAY = 0.25
"""Delay after opening the port (boards that reset on connect)."""

SERIAL_READ_CHUNK = 256
"""Upper bound on bytes pulled from the port in one read."""

SERIAL_LINE_TERMINATOR = b"\n"
"""Line terminator for inbound and outbound serial text."""

SERIAL_MAX_PENDING = 4096
"""Bytes held without a line terminator before the partial line is dropped."""

# ============================================================================
# LOCAL KEYBOARD CONSTANTS
# ============================================================================

KEY_POLL_TIMEOUT = 0.01
"""Bounded wait (seconds) for one local key per loop tick."""

KEY_ARROW_MODE = "1"
KEY_GCODE_MODE = "2"
KEY_QUIT = "q"

ENTER_CHARS = ("\r", "\n")
BACKSPACE_CHARS = ("\x7f", "\x08")
ESCAPE_CHAR = "\x1b"

# ============================================================================
# COMMAND GRAMMAR
# ============================================================================

COMMAND_PREFIX = "GCODE: "
"""Optional label the pendant firmware puts in front of commands."""

JOG_MARKER = "G91G0"
"""Relative rapid move marker preceding the axis word."""

TYPED_PREFIX = "Typed: "
SENT_PREFIX = "Sent: "

# ============================================================================
# CHORD MODIFIERS / MODES
# ============================================================================

MODIFIER_CHOICES: Tuple[str, ...] = ("ctrl", "alt", "shift", "none")
MODIFIER_DEFAULT = "ctrl"

MODE_CHOICES: Tuple[str, ...] = ("arrow", "gcode")
MODE_DEFAULT = "gcode"

# ============================================================================
# STATUS DISPLAY
# ============================================================================

LAST_COMMAND_DISPLAY_MAX = 20
"""Last-command text longer than this is truncated in the status bar."""

LAST_COMMAND_DISPLAY_KEEP = 17
"""Characters kept before the ellipsis when truncating."""

STATUS_BAR_WIDTH = 81

# ============================================================================
# FILE HANDLING
# ============================================================================

SETTINGS_FILENAME = "settings.json"
"""Settings file name."""

SETTINGS_BACKUP_SUFFIX = ".backup"
"""Suffix for settings backup file."""

SETTINGS_TEMP_SUFFIX = ".tmp"
"""Suffix for temporary settings file during atomic write."""

# ============================================================================
# ERROR MESSAGES
# ============================================================================

ERROR_PYNPUT_UNAVAILABLE = (
    "Keyboard injection requires pynput and a desktop session. "
    "Install with: pip install pynput (or run with --dry-run)"
)
