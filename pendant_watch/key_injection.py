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

"""Synthetic keyboard output.

Every key transition the bridge produces goes through the helpers in this
module. ``send_chord`` owns the modifier nesting order; ``type_text`` owns
character typing. Sinks only implement the four primitives.
"""

from __future__ import annotations

import logging
from typing import Any

from .types import (
    Axis,
    InjectionSink,
    KeyChord,
    MovementCommand,
    VirtualKey,
)
from .utils.constants import ERROR_PYNPUT_UNAVAILABLE
from .utils.exceptions import InjectionError, InjectionUnavailableError

logger = logging.getLogger(__name__)

# (axis, magnitude > 0) -> directional key
DIRECTION_KEYS: dict[tuple[Axis, bool], VirtualKey] = {
    (Axis.Y, True): VirtualKey.UP,
    (Axis.Y, False): VirtualKey.DOWN,
    (Axis.X, True): VirtualKey.RIGHT,
    (Axis.X, False): VirtualKey.LEFT,
    (Axis.Z, True): VirtualKey.PAGE_UP,
    (Axis.Z, False): VirtualKey.PAGE_DOWN,
}


def direction_key(command: MovementCommand) -> VirtualKey:
    # Zero is not positive: X0 jogs left, Z0 pages down.
    return DIRECTION_KEYS[(command.axis, command.magnitude > 0)]


def chord_for_command(
    command: MovementCommand,
    modifier: VirtualKey | None = VirtualKey.CONTROL,
) -> KeyChord:
    return KeyChord(key=direction_key(command), modifier=modifier)


def send_chord(sink: InjectionSink, chord: KeyChord) -> None:
    """Emit modifier-down, key-down, key-up, modifier-up.

    The modifier is released even when the directional key fails.
    """
    if chord.modifier is None:
        press_key(sink, chord.key)
        return
    sink.key_down(chord.modifier)
    try:
        press_key(sink, chord.key)
    finally:
        sink.key_up(chord.modifier)


def press_key(sink: InjectionSink, key: VirtualKey) -> None:
    sink.key_down(key)
    sink.key_up(key)


def type_text(sink: InjectionSink, text: str) -> None:
    """Type ``text`` one character at a time, then press Enter."""
    for ch in text:
        sink.char_down(ch)
        sink.char_up(ch)
    press_key(sink, VirtualKey.ENTER)


class RecordingInjectionSink:
    """Sink that records events instead of injecting them.

    Used by the test suite and by ``--dry-run``, where each event is also
    logged so the operator can see what would have been typed.
    """

    def __init__(self, log_events: bool = False, max_events: int | None = None):
        self.events: list[tuple[str, Any]] = []
        self._log_events = log_events
        self._max_events = max_events

    def _record(self, name: str, value: Any) -> None:
        self.events.append((name, value))
        if self._max_events is not None and len(self.events) > self._max_events:
            del self.events[0]
        if self._log_events:
            logger.info(f"[dry-run] {name} {value!r}")

    def key_down(self, key: VirtualKey) -> None:
        self._record("key_down", key)

    def key_up(self, key: VirtualKey) -> None:
        self._record("key_up", key)

    def char_down(self, ch: str) -> None:
        self._record("char_down", ch)

    def char_up(self, ch: str) -> None:
        self._record("char_up", ch)

    def clear(self) -> None:
        self.events.clear()


class PynputInjectionSink:
    """Injects events into the OS input stream through pynput."""

    def __init__(self, controller: Any = None):
        try:
            from pynput import keyboard
        except Exception as e:
            # pynput raises at import time when no display/backend exists
            raise InjectionUnavailableError(f"{ERROR_PYNPUT_UNAVAILABLE}: {e}")
        self._keyboard = keyboard
        self._controller = controller if controller is not None else keyboard.Controller()
        self._key_map = {
            VirtualKey.UP: keyboard.Key.up,
            VirtualKey.DOWN: keyboard.Key.down,
            VirtualKey.LEFT: keyboard.Key.left,
            VirtualKey.RIGHT: keyboard.Key.right,
            VirtualKey.PAGE_UP: keyboard.Key.page_up,
            VirtualKey.PAGE_DOWN: keyboard.Key.page_down,
            VirtualKey.CONTROL: keyboard.Key.ctrl,
            VirtualKey.ALT: keyboard.Key.alt,
            VirtualKey.SHIFT: keyboard.Key.shift,
            VirtualKey.ENTER: keyboard.Key.enter,
        }

    def _send(self, name: str, fn, target: Any) -> None:
        try:
            fn(target)
        except Exception as e:
            raise InjectionError(f"{name} failed for {target!r}: {e}", event=name)

    def key_down(self, key: VirtualKey) -> None:
        self._send("key_down", self._controller.press, self._key_map[key])

    def key_up(self, key: VirtualKey) -> None:
        self._send("key_up", self._controller.release, self._key_map[key])

    def char_down(self, ch: str) -> None:
        self._send("char_down", self._controller.press, ch)

    def char_up(self, ch: str) -> None:
        self._send("char_up", self._controller.release, ch)


def create_sink(dry_run: bool = False) -> InjectionSink:
    """Build the sink for this run.

    Raises:
        InjectionUnavailableError: If real injection is requested but
            pynput cannot drive this host
    """
    if dry_run:
        logger.info("Dry run: key events are logged, not injected")
        return RecordingInjectionSink(log_events=True, max_events=1000)
    return PynputInjectionSink()
