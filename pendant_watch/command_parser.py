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

"""Jog command recognition for lines received from the pendant."""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from .types import Axis, MovementCommand
from .utils.constants import COMMAND_PREFIX, JOG_MARKER

logger = logging.getLogger(__name__)

AXIS_VALUE_PAT = r"([XYZ])(-?\d+\.?\d*)"


@lru_cache(maxsize=8)
def _jog_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(re.escape(marker) + AXIS_VALUE_PAT)


def strip_command_prefix(line: str, prefix: str = COMMAND_PREFIX) -> str:
    """Trim whitespace and drop the firmware's label if present."""
    command = line.strip()
    if prefix and command.startswith(prefix):
        command = command[len(prefix):]
    return command


def parse_movement_command(
    line: str,
    marker: str = JOG_MARKER,
    prefix: str = COMMAND_PREFIX,
) -> MovementCommand | None:
    """Match a relative jog such as ``G91G0X10.5`` anywhere in ``line``.

    Returns None for anything that is not a single-axis jog. Malformed
    input is routine on a serial link, so this never raises for it.
    """
    command = strip_command_prefix(line, prefix)
    match = _jog_pattern(marker).search(command)
    if match is None:
        return None
    try:
        axis = Axis(match.group(1))
    except ValueError:
        logger.debug(f"Rejected axis in {command!r}")
        return None
    try:
        magnitude = float(match.group(2))
    except ValueError:
        logger.debug(f"Rejected magnitude in {command!r}")
        return None
    return MovementCommand(axis=axis, magnitude=magnitude)
