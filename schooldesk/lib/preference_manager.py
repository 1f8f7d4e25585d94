"""Dashboard preferences stored in an INI file."""

from __future__ import annotations

import configparser
import logging
import math
import os
from typing import Any

from flask_babel import _

from schooldesk.lib.get_platform import get_data_directory

SECTION = "USERPREFERENCES"


class PreferenceManager:
    """Reads and writes the dashboard's user-changeable settings.

    Values live under ``[USERPREFERENCES]`` and are coerced to the type of the
    matching entry in DEFAULTS. When a target is given, every change is also
    set as an attribute on it so the running dashboard picks it up.
    """

    DEFAULTS = {
        "toast_duration": 3000,
        "hide_notifications": False,
        "api_timeout": 10,
        "refresh_after_mutation": False,
    }

    def __init__(self, config_file_path: str = "config.ini", target: object | None = None) -> None:
        """
        Args:
            config_file_path: INI file path. Relative paths are placed in the data directory.
            target: Object whose attributes mirror the preferences.
        """
        if os.path.isabs(config_file_path):
            self.config_file_path = config_file_path
        else:
            self.config_file_path = os.path.join(get_data_directory(), config_file_path)
        self._target = target
        logging.debug(f"Preferences file: {self.config_file_path}")

    def _read(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser()
        # A missing file reads as empty
        parser.read(self.config_file_path, encoding="utf-8")
        return parser

    def _convert_value(self, val: Any) -> Any:
        """Turn INI text into a bool, int or float where it looks like one."""
        if not isinstance(val, str):
            return val
        lowered = val.strip().lower()
        if lowered in ("true", "yes", "on"):
            return True
        if lowered in ("false", "no", "off"):
            return False
        try:
            return int(lowered)
        except ValueError:
            pass
        try:
            return float(lowered)
        except ValueError:
            return val

    def _coerce(self, preference: str, val: Any) -> Any:
        """Convert ``val`` to the type of the preference's default.

        Raises:
            ValueError: If the value cannot be read as that type.
        """
        converted = self._convert_value(val)
        default = self.DEFAULTS[preference]
        if isinstance(default, bool):
            if not isinstance(converted, bool):
                raise ValueError(val)
            return converted
        if isinstance(converted, bool) or not isinstance(converted, (int, float)):
            raise ValueError(val)
        if not math.isfinite(converted):
            raise ValueError(val)
        return converted

    def get(self, preference: str, default_value: Any = None) -> Any:
        parser = self._read()
        if not parser.has_option(SECTION, preference):
            return default_value
        raw = parser.get(SECTION, preference)
        if preference not in self.DEFAULTS:
            return self._convert_value(raw)
        try:
            return self._coerce(preference, raw)
        except ValueError:
            logging.warning(f"Ignoring bad value for preference {preference}: {raw!r}")
            return default_value

    def get_or_default(self, preference: str) -> Any:
        return self.get(preference, self.DEFAULTS.get(preference))

    def all(self) -> dict[str, Any]:
        return {pref: self.get_or_default(pref) for pref in self.DEFAULTS}

    def set(self, preference: str, val: Any) -> tuple[bool, str]:
        """Validate, persist and apply one preference. Returns (success, message)."""
        if preference not in self.DEFAULTS:
            return (False, _("Unknown preference: %s") % preference)
        try:
            value = self._coerce(preference, val)
        except ValueError:
            return (False, _("Invalid value for %(pref)s: %(val)s") % {"pref": preference, "val": val})

        logging.debug(f"Setting preference {preference} = {value}")
        parser = self._read()
        if not parser.has_section(SECTION):
            parser.add_section(SECTION)
        parser.set(SECTION, preference, str(value))
        try:
            with open(self.config_file_path, "w", encoding="utf-8") as f:
                parser.write(f)
        except OSError as e:
            logging.error(f"Could not save preference {preference}: {e}")
            return (False, _("Something went wrong! Your preferences were not changed"))

        if self._target is not None:
            setattr(self._target, preference, value)
        return (True, _("Your preferences were changed successfully"))

    def clear(self) -> tuple[bool, str]:
        """Delete the preferences file. Returns (success, message)."""
        if not os.path.exists(self.config_file_path):
            return (True, _("Your preferences were cleared successfully"))
        try:
            os.remove(self.config_file_path)
        except OSError as e:
            logging.error(f"Could not delete {self.config_file_path}: {e}")
            return (False, _("Something went wrong! Your preferences were not cleared"))
        logging.info(f"Deleted preferences file {self.config_file_path}")
        return (True, _("Your preferences were cleared successfully"))

    def apply_all(self, **cli_overrides: Any) -> None:
        """Set every preference on the target.

        A value passed on the command line wins and is saved, so the web UI
        shows it. Otherwise the saved value is used, then the default. Flags
        parsed with ``store_true`` count as passed only when True.
        """
        if self._target is None:
            return
        for pref, default in self.DEFAULTS.items():
            override = cli_overrides.get(pref)
            passed = override is True if isinstance(default, bool) else override is not None
            if passed:
                self.set(pref, override)
                setattr(self._target, pref, override)
            else:
                setattr(self._target, pref, self.get(pref, default))

    def reset_all(self) -> tuple[bool, str]:
        """Delete the preferences file and put the target back on DEFAULTS."""
        result = self.clear()
        if result[0] and self._target is not None:
            for pref, default in self.DEFAULTS.items():
                setattr(self._target, pref, default)
        return result
