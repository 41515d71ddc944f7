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

"""Session state and the local-keyboard state machine."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from .types import KeyAction, KeyKind, KeyPress, Mode, StatusSnapshot
from .utils.constants import (
    KEY_ARROW_MODE,
    KEY_GCODE_MODE,
    KEY_QUIT,
    SENT_PREFIX,
)


@dataclass
class Session:
    """Mutable state owned by the event loop."""

    mode: Mode = Mode.GCODE
    connected: bool = False
    last_command: str | None = None
    last_command_time: float | None = None
    pending_outbound_text: str = ""
    last_error: str | None = None
    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)

    def record_command(self, text: str) -> None:
        self.last_command = text
        self.last_command_time = self.clock()

    def time_since_last_command(self) -> float | None:
        if self.last_command_time is None:
            return None
        return max(0.0, self.clock() - self.last_command_time)

    def mark_sent(self) -> None:
        """Record a successful outbound write and clear the buffer."""
        self.record_command(f"{SENT_PREFIX}{self.pending_outbound_text}")
        self.pending_outbound_text = ""
        self.last_error = None

    def snapshot(self) -> StatusSnapshot:
        return StatusSnapshot(
            mode=self.mode,
            connected=self.connected,
            last_command=self.last_command,
            elapsed=self.time_since_last_command(),
            pending_outbound_text=self.pending_outbound_text,
            last_error=self.last_error,
        )


def apply_key(session: Session, key: KeyPress) -> KeyAction:
    """Apply one local key press to ``session``.

    ``1``/``2``/``q`` act in every mode and are never typed into the
    buffer. Text editing only happens in Gcode mode. ``SEND`` leaves the
    buffer untouched; the caller clears it with ``mark_sent`` once the
    write succeeds.
    """
    if key.kind is KeyKind.CHAR:
        if key.char == KEY_QUIT:
            return KeyAction.QUIT
        if key.char == KEY_ARROW_MODE:
            session.mode = Mode.ARROW
            return KeyAction.UPDATED
        if key.char == KEY_GCODE_MODE:
            session.mode = Mode.GCODE
            return KeyAction.UPDATED

    if session.mode is not Mode.GCODE:
        return KeyAction.IGNORED

    if key.kind is KeyKind.CHAR and key.char:
        session.pending_outbound_text += key.char
        return KeyAction.UPDATED
    if key.kind is KeyKind.BACKSPACE:
        session.pending_outbound_text = session.pending_outbound_text[:-1]
        return KeyAction.UPDATED
    if key.kind is KeyKind.ENTER:
        if not session.pending_outbound_text:
            return KeyAction.IGNORED
        return KeyAction.SEND
    return KeyAction.IGNORED
