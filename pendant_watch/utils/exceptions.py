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

"""Custom exceptions for Pendant Watch.

This module defines specific exception types for different error conditions,
so the event loop can tell steady-state failures (reported, loop continues)
from startup failures (reported, process exits).
"""

from typing import Any, Optional


class PendantWatchException(Exception):
    """Base exception for all Pendant Watch errors."""
    pass


# ============================================================================
# SERIAL COMMUNICATION EXCEPTIONS
# ============================================================================

class SerialException(PendantWatchException):
    """Base exception for serial communication errors."""
    pass


class SerialConnectionError(SerialException):
    """Failed to open the serial port."""
    pass


class SerialReadError(SerialException):
    """Failed to read data from serial port."""
    pass


class SerialWriteError(SerialException):
    """Failed to write data to serial port."""
    pass


# ============================================================================
# INJECTION EXCEPTIONS
# ============================================================================

class InjectionException(PendantWatchException):
    """Base exception for synthetic input errors."""
    pass


class InjectionUnavailableError(InjectionException):
    """No injection backend could be created on this host."""
    pass


class InjectionError(InjectionException):
    """The backend rejected a key or character event."""

    def __init__(self, message: str, event: Optional[str] = None):
        super().__init__(message)
        self.event = event


# ============================================================================
# SETTINGS EXCEPTIONS
# ============================================================================

class SettingsException(PendantWatchException):
    """Base exception for settings errors."""
    pass


class SettingsLoadError(SettingsException):
    """Failed to load settings file."""
    pass


class SettingsSaveError(SettingsException):
    """Failed to save settings file."""
    pass


class SettingsValidationError(SettingsException):
    """Settings validation failed."""
    pass


# ============================================================================
# VALIDATION EXCEPTIONS
# ============================================================================

class ValidationException(PendantWatchException):
    """Base exception for validation errors."""
    pass


class InvalidParameterError(ValidationException):
    """Invalid parameter value."""

    def __init__(self, parameter_name: str, value: Any, reason: Optional[str] = None):
        self.parameter_name = parameter_name
        self.value = value
        self.reason = reason

        message = f"Invalid value for '{parameter_name}': {value}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
