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

"""Input validation utilities.

Validators normalize the value they accept and raise
``InvalidParameterError`` for anything else.
"""

from .constants import MODE_CHOICES, MODIFIER_CHOICES, VALID_BAUD_RATES
from .exceptions import InvalidParameterError


def validate_port_name(port: str) -> str:
    """Validate serial port name.

    Args:
        port: Serial port name (e.g., "COM6" or "/dev/ttyACM0")

    Returns:
        The validated port name

    Raises:
        InvalidParameterError: If port name is invalid
    """
    if not port or not isinstance(port, str):
        raise InvalidParameterError("port", port, "must be non-empty string")

    port = port.strip()
    if not port:
        raise InvalidParameterError("port", port, "must be non-empty")

    return port


def validate_baud_rate(baud: int) -> int:
    """Validate baud rate.

    Args:
        baud: Baud rate value

    Returns:
        The validated baud rate

    Raises:
        InvalidParameterError: If baud rate is invalid
    """
    try:
        baud = int(baud)
    except (TypeError, ValueError):
        raise InvalidParameterError("baud_rate", baud, "must be integer")

    if baud not in VALID_BAUD_RATES:
        raise InvalidParameterError(
            "baud_rate",
            baud,
            f"must be one of {list(VALID_BAUD_RATES)}"
        )

    return baud


def validate_timeout(timeout: float, name: str = "timeout", max_val: float = 1.0) -> float:
    """Validate a polling timeout.

    The event loop waits on two sources per tick, so each wait has to stay
    short for the loop to keep its latency bound.

    Args:
        timeout: Timeout in seconds
        name: Parameter name used in the error message
        max_val: Largest accepted value

    Returns:
        The validated timeout

    Raises:
        InvalidParameterError: If timeout is invalid
    """
    if isinstance(timeout, bool):
        raise InvalidParameterError(name, timeout, "must be numeric")
    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        raise InvalidParameterError(name, timeout, "must be numeric")

    if not (0.0 <= timeout <= max_val):
        raise InvalidParameterError(name, timeout, f"must be between 0 and {max_val}")

    return timeout


def validate_modifier(modifier: str) -> str:
    if not isinstance(modifier, str) or modifier.strip().lower() not in MODIFIER_CHOICES:
        raise InvalidParameterError(
            "chord_modifier", modifier, f"must be one of {list(MODIFIER_CHOICES)}"
        )
    return modifier.strip().lower()


def validate_mode_name(mode: str) -> str:
    if not isinstance(mode, str) or mode.strip().lower() not in MODE_CHOICES:
        raise InvalidParameterError("mode", mode, f"must be one of {list(MODE_CHOICES)}")
    return mode.strip().lower()
