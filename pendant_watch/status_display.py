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

from __future__ import annotations

import sys
from typing import TextIO

from .types import Mode, StatusSnapshot
from .utils.constants import (
    LAST_COMMAND_DISPLAY_KEEP,
    LAST_COMMAND_DISPLAY_MAX,
    STATUS_BAR_WIDTH,
)

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
EOL = "\r\n"
KEYS_HINT = "Press '1' for Arrow Mode, '2' for Gcode Mode, 'q' to quit."


def truncate_command(cmd: str | None) -> str:
    if cmd is None:
        return "None"
    if len(cmd) > LAST_COMMAND_DISPLAY_MAX:
        return f"{cmd[:LAST_COMMAND_DISPLAY_KEEP]}..."
    return cmd


def format_elapsed(seconds: float | None) -> str:
    if seconds is None:
        return "N/A"
    secs = int(seconds)
    if secs < 60:
        return f"{secs}s"
    return f"{secs // 60}m{secs % 60}s"


def format_status_line(snapshot: StatusSnapshot) -> str:
    connected = "Yes" if snapshot.connected else "No"
    return (
        f"│ Connected: {connected} │ "
        f"Last: {truncate_command(snapshot.last_command)} │ "
        f"Time: {format_elapsed(snapshot.elapsed)} │ "
        f"Mode: {snapshot.mode.label} │"
    )


def render_lines(snapshot: StatusSnapshot) -> list[str]:
    border = "─" * (STATUS_BAR_WIDTH - 2)
    lines = [f"┌{border}┐", format_status_line(snapshot), f"└{border}┘", ""]
    if snapshot.mode is Mode.ARROW:
        lines.append("Arrow Mode: Receiving commands from device and simulating keyboard presses.")
    else:
        lines.append("Gcode Mode: Type GCODE commands and press Enter to send to device.")
        lines.append(f"Current input: {snapshot.pending_outbound_text}")
    lines.append(KEYS_HINT)
    if snapshot.last_error:
        lines.append(f"Error: {snapshot.last_error}")
    lines.append("")
    return lines


class TerminalStatusDisplay:
    """Redraws the status bar from a snapshot; holds no session state."""

    def __init__(self, stream: TextIO | None = None, clear: bool = True):
        self._stream = stream if stream is not None else sys.stdout
        self._clear = clear

    def render(self, snapshot: StatusSnapshot) -> None:
        text = EOL.join(render_lines(snapshot)) + EOL
        if self._clear:
            text = CLEAR_SCREEN + text
        self._stream.write(text)
        self._stream.flush()
