"""Application settings management.

This module handles loading, saving, and managing application settings
with atomic file operations and automatic backup.
"""

import json
import os
import sys
import shutil
import logging
from typing import Dict, Any, Optional
from pathlib import Path

from .constants import (
    BAUD_DEFAULT,
    COMMAND_PREFIX,
    JOG_MARKER,
    KEY_POLL_TIMEOUT,
    MODE_DEFAULT,
    MODIFIER_DEFAULT,
    SERIAL_READ_TIMEOUT,
    SETTINGS_FILENAME,
    SETTINGS_BACKUP_SUFFIX,
    SETTINGS_TEMP_SUFFIX,
)
from .exceptions import (
    InvalidParameterError,
    SettingsLoadError,
    SettingsSaveError,
    SettingsValidationError,
)
from .validation import (
    validate_baud_rate,
    validate_mode_name,
    validate_modifier,
    validate_timeout,
)

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "baud_rate": BAUD_DEFAULT,
    "chord_modifier": MODIFIER_DEFAULT,
    "command_prefix": COMMAND_PREFIX,
    "initial_mode": MODE_DEFAULT,
    "jog_marker": JOG_MARKER,
    "key_poll_timeout": KEY_POLL_TIMEOUT,
    "last_port": "",
    "serial_timeout": SERIAL_READ_TIMEOUT,
}


def get_default_settings_dir() -> str:
    """Get default directory for settings storage.

    Returns:
        Path to settings directory
    """
    # Check environment variable first
    env_dir = os.getenv("PENDANT_WATCH_CONFIG_DIR")
    if env_dir:
        return env_dir

    # Platform-specific defaults
    if sys.platform.startswith("win"):
        base = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA")
    else:
        base = os.getenv("XDG_CONFIG_HOME")

    if not base:
        base = os.path.expanduser("~")

    return os.path.join(base, "PendantWatch")


def get_settings_path() -> str:
    """Get path to settings file.

    Creates directory if it doesn't exist.
    Falls back to a dot directory in home if creation fails.

    Returns:
        Full path to settings file
    """
    base_dir = get_default_settings_dir()

    try:
        os.makedirs(base_dir, exist_ok=True)
    except OSError as e:
        logger.warning(f"Failed to create settings directory: {e}")
        fallback_dir = os.path.join(os.path.expanduser("~"), ".pendant_watch")
        try:
            os.makedirs(fallback_dir, exist_ok=True)
            base_dir = fallback_dir
        except OSError:
            base_dir = os.path.dirname(__file__)

    return os.path.join(base_dir, SETTINGS_FILENAME)


class Settings:
    """Application settings manager.

    Handles loading, saving, and accessing application settings with
    atomic file operations and automatic backup.

    Example:
        settings = Settings()
        settings.load()
        settings.set("last_port", "/dev/ttyACM0")
        settings.save()
    """

    def __init__(self, filepath: Optional[str] = None):
        """Initialize settings manager.

        Args:
            filepath: Optional custom settings file path
        """
        self.filepath = filepath or get_settings_path()
        self.data: Dict[str, Any] = self._get_defaults()
        logger.info(f"Settings file: {self.filepath}")

    def _get_defaults(self) -> Dict[str, Any]:
        return dict(DEFAULT_SETTINGS)

    def load(self) -> bool:
        """Load settings from file.

        Returns:
            True if loaded successfully, False if no file exists

        Raises:
            SettingsLoadError: If the file exists but cannot be read
        """
        if not os.path.exists(self.filepath):
            logger.info("No settings file found, using defaults")
            return False

        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                loaded_data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in settings file: {e}")
            raise SettingsLoadError(f"Invalid JSON: {e}")
        except OSError as e:
            logger.error(f"Failed to read settings file: {e}")
            raise SettingsLoadError(f"Failed to read file: {e}")

        if not isinstance(loaded_data, dict):
            raise SettingsLoadError("Settings file must contain a JSON object")

        # Merge with defaults (in case new settings were added)
        self.data = {**self._get_defaults(), **loaded_data}
        logger.info("Settings loaded successfully")
        return True

    def save(self) -> None:
        """Save settings to file atomically.

        Raises:
            SettingsSaveError: If save fails
        """
        filepath = Path(self.filepath)
        temp_path = Path(str(filepath) + SETTINGS_TEMP_SUFFIX)
        backup_path = Path(str(filepath) + SETTINGS_BACKUP_SUFFIX)

        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)

            # Write to temporary file first
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2, sort_keys=True)

            if filepath.exists():
                try:
                    shutil.copy2(filepath, backup_path)
                except OSError as e:
                    logger.warning(f"Failed to create backup: {e}")

            # Atomic rename
            temp_path.replace(filepath)

            logger.info("Settings saved successfully")

        except OSError as e:
            logger.error(f"Failed to write settings: {e}")

            if backup_path.exists():
                try:
                    shutil.copy2(backup_path, filepath)
                    logger.info("Settings restored from backup")
                except OSError:
                    logger.warning("Failed to restore settings backup")

            raise SettingsSaveError(f"Failed to save: {e}")

        finally:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def validate(self) -> bool:
        """Validate current settings.

        Returns:
            True if valid

        Raises:
            SettingsValidationError: If validation fails
        """
        if not isinstance(self.data, dict):
            raise SettingsValidationError("Settings must be a dictionary")

        try:
            validate_baud_rate(self.data.get("baud_rate"))
            validate_timeout(self.data.get("serial_timeout"), "serial_timeout")
            validate_timeout(self.data.get("key_poll_timeout"), "key_poll_timeout")
            validate_modifier(self.data.get("chord_modifier"))
            validate_mode_name(self.data.get("initial_mode"))
        except InvalidParameterError as e:
            raise SettingsValidationError(str(e))

        for key in ("command_prefix", "jog_marker", "last_port"):
            if not isinstance(self.data.get(key), str):
                raise SettingsValidationError(f"Invalid {key}: {self.data.get(key)!r}")
        if not self.data["jog_marker"]:
            raise SettingsValidationError("jog_marker must not be empty")

        return True
