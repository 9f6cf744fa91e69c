"""Emitter settings with config file persistence."""

from __future__ import annotations

import configparser
import logging
import os
from typing import Any

from replaymitt.constants import get_data_directory
from replaymitt.lib.events import MissingHandlerPolicy

logger = logging.getLogger(__name__)

SECTION = "EMITTER"


class PreferenceManager:
    """Reads and writes emitter settings in an INI file under [EMITTER]."""

    DEFAULTS = {
        "read_cache": True,
        "isolate_errors": False,
        "missing_handler": MissingHandlerPolicy.IGNORE.value,
    }

    def __init__(self, config_file_path: str = "config.ini", target: object | None = None) -> None:
        """Initialize with config path and optional target object to sync.

        Args:
            config_file_path: Path to the ini file (relative paths go in the data directory)
            target: Optional object whose attributes follow preference changes
        """
        # Values are stored verbatim, "%" included
        self._config_obj = configparser.ConfigParser(interpolation=None)
        self._target = target

        if not os.path.isabs(config_file_path):
            self.config_file_path = os.path.join(get_data_directory(), config_file_path)
        else:
            self.config_file_path = config_file_path

        logger.debug(f"Using config file: {self.config_file_path}")

    def get(self, preference: str, default_value: Any = None) -> Any:
        """Get a preference value, auto-converting to bool/int/float."""
        # Missing files are skipped by ConfigParser.read
        self._config_obj.read(self.config_file_path, encoding="utf-8")

        if not self._config_obj.has_section(SECTION):
            return default_value

        try:
            return self._convert_value(self._config_obj.get(SECTION, preference))
        except (configparser.NoOptionError, ValueError):
            return default_value

    def get_or_default(self, preference: str) -> Any:
        return self.get(preference, self.DEFAULTS.get(preference))

    def set(self, preference: str, val: Any) -> tuple[bool, str]:
        """Update a preference, persist it and sync the target object.

        Returns (success, message) tuple.
        """
        logger.debug(f"Changing emitter preference << {preference} >> to {val}")
        try:
            self._config_obj.read(self.config_file_path, encoding="utf-8")
            if SECTION not in self._config_obj:
                self._config_obj.add_section(SECTION)
            stored = val.value if isinstance(val, MissingHandlerPolicy) else str(val)
            self._config_obj[SECTION][preference] = stored

            with open(self.config_file_path, "w", encoding="utf-8") as conf:
                self._config_obj.write(conf)
        except OSError as e:
            logger.error(f"Failed to change emitter preference << {preference} >>: {e}")
            return (False, "Something went wrong! Preferences were not changed")

        if self._target is not None:
            if preference == "missing_handler":
                typed_val = self._to_policy(val)
            else:
                typed_val = self._convert_value(val)
            setattr(self._target, preference, typed_val)
        return (True, "Preferences were changed successfully")

    def clear(self) -> tuple[bool, str]:
        """Delete the config file. Returns (success, message)."""
        try:
            if os.path.exists(self.config_file_path):
                os.remove(self.config_file_path)
                logger.info(f"Cleared preferences: deleted {self.config_file_path}")
            self._config_obj.clear()
            return (True, "Preferences were cleared successfully")
        except OSError as e:
            logger.error(f"Failed to clear preferences: {e}")
            return (False, "Something went wrong! Preferences were not cleared")

    def _convert_value(self, val: Any) -> Any:
        """Convert a string to bool/int/float if applicable, otherwise return as-is."""
        if not isinstance(val, str):
            return val

        val_lower = val.lower()
        if val_lower in ("true", "yes", "on"):
            return True
        if val_lower in ("false", "no", "off"):
            return False

        stripped = val.lstrip("-")
        if stripped.isdigit():
            return int(val)
        if stripped.replace(".", "", 1).isdigit():
            return float(val)

        return val

    def emitter_options(self) -> dict[str, Any]:
        """Translate the stored settings into Emitter keyword arguments."""
        return {
            "read_cache": bool(self.get_or_default("read_cache")),
            "isolate_errors": bool(self.get_or_default("isolate_errors")),
            "missing_handler": self._to_policy(self.get_or_default("missing_handler")),
        }

    def _to_policy(self, val: Any) -> MissingHandlerPolicy:
        """Map a stored missing_handler value to a policy, falling back to IGNORE."""
        if isinstance(val, MissingHandlerPolicy):
            return val
        raw_policy = str(val).lower()
        try:
            return MissingHandlerPolicy(raw_policy)
        except ValueError:
            logger.warning(f"Unknown missing_handler policy '{raw_policy}', using 'ignore'")
            return MissingHandlerPolicy.IGNORE
