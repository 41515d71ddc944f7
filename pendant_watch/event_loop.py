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

"""Cooperative loop interleaving pendant serial input with local keys."""

from __future__ import annotations

import logging

from .command_parser import parse_movement_command, strip_command_prefix
from .key_injection import chord_for_command, send_chord, type_text
from .session import Session, apply_key
from .types import (
    InjectionSink,
    KeyAction,
    KeyPress,
    KeyReader,
    LineChannel,
    Mode,
    StatusRenderer,
    VirtualKey,
)
from .utils.constants import (
    COMMAND_PREFIX,
    JOG_MARKER,
    KEY_POLL_TIMEOUT,
    TYPED_PREFIX,
)
from .utils.exceptions import InjectionError, SerialReadError, SerialWriteError

logger = logging.getLogger(__name__)


class EventLoop:
    """Single-threaded scheduler for the bridge.

    Each tick reads at most one inbound line (bounded by the link's read
    timeout) and then polls for at most one local key. Serial input is
    always handled before keyboard input within a tick. The loop is the
    only writer of ``session``.
    """

    def __init__(
        self,
        session: Session,
        link: LineChannel,
        keys: KeyReader,
        sink: InjectionSink,
        display: StatusRenderer | None = None,
        *,
        modifier: VirtualKey | None = VirtualKey.CONTROL,
        jog_marker: str = JOG_MARKER,
        command_prefix: str = COMMAND_PREFIX,
        key_poll_timeout: float = KEY_POLL_TIMEOUT,
    ):
        self.session = session
        self.link = link
        self.keys = keys
        self.sink = sink
        self.display = display
        self.modifier = modifier
        self.jog_marker = jog_marker
        self.command_prefix = command_prefix
        self.key_poll_timeout = key_poll_timeout

    def refresh(self) -> None:
        if self.display is not None:
            self.display.render(self.session.snapshot())

    def _report(self, message: str) -> None:
        self.session.last_error = message

    # ------------------------------------------------------------------
    # Inbound serial
    # ------------------------------------------------------------------

    def handle_serial_line(self, line: str) -> None:
        line = line.strip()
        try:
            if self.session.mode is Mode.ARROW:
                self._serial_to_arrow(line)
            else:
                self._serial_to_gcode(line)
        except InjectionError as e:
            logger.error(f"Key injection failed: {e}")
            self._report(str(e))

    def _serial_to_arrow(self, line: str) -> bool:
        command_text = strip_command_prefix(line, self.command_prefix)
        self.session.record_command(command_text)
        command = parse_movement_command(command_text, self.jog_marker, prefix="")
        if command is None:
            logger.debug(f"Unrecognized pendant line: {command_text!r}")
            return False
        chord = chord_for_command(command, self.modifier)
        logger.debug(f"{command.axis.value}{command.magnitude:g} -> {chord.key.value}")
        send_chord(self.sink, chord)
        return True

    def _serial_to_gcode(self, line: str) -> None:
        type_text(self.sink, line)
        self.session.record_command(f"{TYPED_PREFIX}{line}")

    def _inbound_phase(self) -> None:
        try:
            line = self.link.read_line()
        except SerialReadError as e:
            self.session.connected = False
            self._report(str(e))
            self.refresh()
            return
        if line is None:
            return
        self.handle_serial_line(line)
        self.refresh()

    # ------------------------------------------------------------------
    # Local keyboard
    # ------------------------------------------------------------------

    def send_pending(self) -> bool:
        """Write the pending buffer to the pendant; keep it on failure."""
        text = self.session.pending_outbound_text
        try:
            self.link.write_line(text)
        except SerialWriteError as e:
            logger.warning(f"Outbound send failed: {e}")
            self._report(str(e))
            return False
        self.session.mark_sent()
        logger.info(f"Sent {text!r}")
        return True

    def handle_key(self, key: KeyPress) -> bool:
        """Dispatch one key press. Returns False when the user quits."""
        action = apply_key(self.session, key)
        if action is KeyAction.QUIT:
            logger.info("Quit requested")
            return False
        if action is KeyAction.SEND:
            self.send_pending()
        if action is not KeyAction.IGNORED:
            self.refresh()
        return True

    def _local_phase(self) -> bool:
        key = self.keys.poll(self.key_poll_timeout)
        if key is None:
            return True
        return self.handle_key(key)

    # ------------------------------------------------------------------

    def tick(self) -> bool:
        self._inbound_phase()
        return self._local_phase()

    def run(self) -> None:
        self.refresh()
        while self.tick():
            pass
