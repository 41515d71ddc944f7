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

"""Bounded-wait keyboard polling for the controlling terminal."""

from __future__ import annotations

import codecs
import logging
import os
import sys
import time
from typing import Any, TextIO

from .types import KeyKind, KeyPress
from .utils.constants import BACKSPACE_CHARS, ENTER_CHARS, ESCAPE_CHAR

if os.name == "nt":
    import msvcrt
else:
    import select
    import termios
    import tty

logger = logging.getLogger(__name__)

WINDOWS_SPECIAL_PREFIXES = ("\x00", "\xe0")


def decode_key(ch: str) -> KeyPress:
    """Classify a single character read from the terminal."""
    if ch in ENTER_CHARS:
        return KeyPress(KeyKind.ENTER)
    if ch in BACKSPACE_CHARS:
        return KeyPress(KeyKind.BACKSPACE)
    if len(ch) == 1 and ch.isprintable():
        return KeyPress.of(ch)
    return KeyPress(KeyKind.OTHER)


class ConsoleKeyReader:
    """Reads single key presses without waiting for a full line.

    On POSIX the terminal is switched to cbreak mode on ``__enter__`` and
    restored on ``__exit__``; output processing stays on, so signals and
    newlines behave normally while the reader is active.
    """

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream if stream is not None else sys.stdin
        self._saved_attrs: Any = None
        self._eof = False
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def _fileno(self) -> int:
        return self._stream.fileno()

    def __enter__(self) -> "ConsoleKeyReader":
        if os.name != "nt" and self._stream.isatty():
            fd = self._fileno()
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
            logger.debug("Terminal switched to cbreak mode")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        if self._saved_attrs is None:
            return
        termios.tcsetattr(self._fileno(), termios.TCSADRAIN, self._saved_attrs)
        self._saved_attrs = None
        logger.debug("Terminal settings restored")

    def poll(self, timeout: float) -> KeyPress | None:
        """Return one key press, or None if nothing arrives within ``timeout``."""
        if self._eof:
            time.sleep(timeout)
            return None
        if os.name == "nt":
            return self._poll_windows(timeout)
        return self._poll_posix(timeout)

    def _poll_windows(self, timeout: float) -> KeyPress | None:
        deadline = time.monotonic() + timeout
        while True:
            if msvcrt.kbhit():
                ch = msvcrt.getwch()
                if ch in WINDOWS_SPECIAL_PREFIXES:
                    # Arrow/function keys arrive as a two-character sequence
                    msvcrt.getwch()
                    return KeyPress(KeyKind.OTHER)
                return decode_key(ch)
            if time.monotonic() >= deadline:
                return None
            time.sleep(0.002)

    def _readable(self, fd: int, timeout: float) -> bool:
        ready, _, _ = select.select([fd], [], [], timeout)
        return bool(ready)

    def _poll_posix(self, timeout: float) -> KeyPress | None:
        fd = self._fileno()
        if not self._readable(fd, timeout):
            return None
        data = os.read(fd, 1)
        if not data:
            logger.info("Keyboard input closed")
            self._eof = True
            return None
        if data.decode("latin-1") == ESCAPE_CHAR:
            # Swallow the rest of an escape sequence (arrow keys etc.)
            while self._readable(fd, 0):
                if not os.read(fd, 16):
                    break
            return KeyPress(KeyKind.OTHER)

        text = self._decoder.decode(data)
        while not text and self._readable(fd, timeout):
            more = os.read(fd, 1)
            if not more:
                break
            text = self._decoder.decode(more)
        if not text:
            return None
        return decode_key(text[0])
