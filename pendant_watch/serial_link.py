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

"""Serial link to the pendant."""

from __future__ import annotations

import logging
import time
from typing import Any

import serial
from serial.tools import list_ports as serial_list_ports

from .utils.constants import (
    BAUD_DEFAULT,
    SERIAL_CONNECT_DELAY,
    SERIAL_LINE_TERMINATOR,
    SERIAL_MAX_PENDING,
    SERIAL_READ_CHUNK,
    SERIAL_READ_TIMEOUT,
    SERIAL_WRITE_TIMEOUT,
)
from .utils.exceptions import SerialConnectionError, SerialReadError, SerialWriteError
from .utils.validation import validate_baud_rate, validate_port_name, validate_timeout

logger = logging.getLogger(__name__)
serial_log = logging.getLogger("pendant_watch.serial")


def list_ports() -> list[str]:
    """Get list of available serial ports.

    Returns:
        List of port device names
    """
    return [p.device for p in serial_list_ports.comports()]


class PendantSerial:
    """Line-oriented, non-blocking view of the pendant's serial port.

    ``read_line`` waits at most ``read_timeout`` for bytes and only ever
    returns complete lines; partial input stays buffered for the next call.
    Usable as a context manager so the port is closed on every exit path.
    """

    def __init__(
        self,
        port: str,
        baud: int = BAUD_DEFAULT,
        read_timeout: float = SERIAL_READ_TIMEOUT,
        write_timeout: float = SERIAL_WRITE_TIMEOUT,
    ):
        self.port = validate_port_name(port)
        self.baud = validate_baud_rate(baud)
        self.read_timeout = validate_timeout(read_timeout, "serial_timeout")
        self.write_timeout = write_timeout
        self.ser: Any | None = None
        self._rx_buf = b""

    def connect(self) -> None:
        """Open the serial port.

        Raises:
            SerialConnectionError: If the port cannot be opened
        """
        if self.is_connected():
            self.disconnect()
        self._rx_buf = b""
        try:
            self.ser = serial.Serial(
                self.port,
                baudrate=self.baud,
                timeout=self.read_timeout,
                write_timeout=self.write_timeout,
            )
        except (serial.SerialException, OSError, ValueError) as e:
            self.ser = None
            raise SerialConnectionError(f"Failed to open serial port {self.port}: {e}")

        # Give boards that reset on open time to come back
        time.sleep(SERIAL_CONNECT_DELAY)
        try:
            self.ser.reset_input_buffer()
        except serial.SerialException as e:
            logger.warning(f"Failed to reset input buffer: {e}")

        logger.info(f"Serial port {self.port} opened at {self.baud} baud")

    def disconnect(self) -> None:
        """Close the serial port. Idempotent."""
        ser, self.ser = self.ser, None
        self._rx_buf = b""
        if ser is None:
            return
        try:
            ser.close()
            logger.info("Serial port closed")
        except (serial.SerialException, OSError) as e:
            logger.error(f"Error closing serial port: {e}")

    def is_connected(self) -> bool:
        return self.ser is not None and bool(getattr(self.ser, "is_open", False))

    def _pop_line(self) -> str | None:
        if SERIAL_LINE_TERMINATOR not in self._rx_buf:
            return None
        line, self._rx_buf = self._rx_buf.split(SERIAL_LINE_TERMINATOR, 1)
        return line.decode("utf-8", errors="replace").strip()

    def read_line(self) -> str | None:
        """Return one complete inbound line, or None if none is ready.

        Raises:
            SerialReadError: If the port fails; the port is closed first
        """
        line = self._pop_line()
        if line is not None:
            serial_log.debug(f"RX {line}")
            return line
        if not self.is_connected():
            return None

        ser = self.ser
        assert ser is not None
        try:
            waiting = ser.in_waiting
            chunk = ser.read(min(max(1, waiting), SERIAL_READ_CHUNK))
        except (serial.SerialException, OSError) as e:
            logger.error(f"Serial read error: {e}")
            self.disconnect()
            raise SerialReadError(f"Serial read error: {e}")

        if not chunk:
            return None
        self._rx_buf += chunk
        line = self._pop_line()
        if line is None and len(self._rx_buf) > SERIAL_MAX_PENDING:
            logger.warning(f"Dropping {len(self._rx_buf)} bytes without a line terminator")
            self._rx_buf = b""
        if line is not None:
            serial_log.debug(f"RX {line}")
        return line

    def write_line(self, text: str) -> None:
        """Write ``text`` plus a newline. No acknowledgement is awaited.

        Raises:
            SerialWriteError: If the port is closed or the write fails
        """
        if not self.is_connected():
            raise SerialWriteError("Serial port is not open")
        ser = self.ser
        assert ser is not None
        payload = text.encode("utf-8") + SERIAL_LINE_TERMINATOR
        try:
            ser.write(payload)
            ser.flush()
        except (serial.SerialException, OSError) as e:
            logger.error(f"Serial write error: {e}")
            raise SerialWriteError(f"Failed to send {text!r}: {e}")
        serial_log.debug(f"TX {text}")

    def __enter__(self) -> "PendantSerial":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()
