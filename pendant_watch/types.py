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

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class Mode(str, Enum):
    """How inbound serial lines and local keys are interpreted."""

    ARROW = "arrow"
    GCODE = "gcode"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Axis(str, Enum):
    X = "X"
    Y = "Y"
    Z = "Z"


class VirtualKey(str, Enum):
    """Named keys the bridge can press; sinks map these to platform codes."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    CONTROL = "ctrl"
    ALT = "alt"
    SHIFT = "shift"
    ENTER = "enter"


MODIFIER_KEYS: dict[str, VirtualKey | None] = {
    "ctrl": VirtualKey.CONTROL,
    "alt": VirtualKey.ALT,
    "shift": VirtualKey.SHIFT,
    "none": None,
}


@dataclass(frozen=True)
class MovementCommand:
    axis: Axis
    magnitude: float


@dataclass(frozen=True)
class KeyChord:
    """A directional key, optionally held inside a modifier."""

    key: VirtualKey
    modifier: VirtualKey | None = None

    def events(self) -> list[tuple[str, VirtualKey]]:
        """Key transitions in emission order, modifier strictly outermost."""
        if self.modifier is None:
            return [("key_down", self.key), ("key_up", self.key)]
        return [
            ("key_down", self.modifier),
            ("key_down", self.key),
            ("key_up", self.key),
            ("key_up", self.modifier),
        ]


class KeyKind(str, Enum):
    CHAR = "char"
    ENTER = "enter"
    BACKSPACE = "backspace"
    OTHER = "other"


@dataclass(frozen=True)
class KeyPress:
    kind: KeyKind
    char: str | None = None

    @classmethod
    def of(cls, ch: str) -> "KeyPress":
        return cls(KeyKind.CHAR, ch)


class KeyAction(str, Enum):
    """Outcome of applying one local key press to the session."""

    IGNORED = "ignored"
    UPDATED = "updated"
    SEND = "send"
    QUIT = "quit"


@dataclass(frozen=True)
class StatusSnapshot:
    mode: Mode
    connected: bool
    last_command: str | None
    elapsed: float | None
    pending_outbound_text: str
    last_error: str | None = None


class InjectionSink(Protocol):
    """Emits synthetic input events into the host input stream."""

    def key_down(self, key: VirtualKey) -> None: ...
    def key_up(self, key: VirtualKey) -> None: ...
    def char_down(self, ch: str) -> None: ...
    def char_up(self, ch: str) -> None: ...


class LineChannel(Protocol):
    def read_line(self) -> str | None: ...
    def write_line(self, text: str) -> None: ...
    def is_connected(self) -> bool: ...


class KeyReader(Protocol):
    def poll(self, timeout: float) -> KeyPress | None: ...


class StatusRenderer(Protocol):
    def render(self, snapshot: StatusSnapshot) -> None: ...
