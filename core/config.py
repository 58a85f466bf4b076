"""
core/config.py — Persisted user settings for Flower Button.

Three accessibility switches live in a small JSON file next to the game:

    {
        "readme": "Note: These settings are meant for accessibility",
        "version": 1,
        "disable_forced_detonation": false,
        "disable_visual_distortion": false,
        "disable_musicbox": false
    }

read_settings() never raises. A missing, corrupt or invalid file yields
the defaults and is rewritten with them; an outdated version is rewritten
with the current version number. A path that cannot be written is logged
and the settings read so far are still returned.
"""

from __future__ import annotations
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from settings import SETTINGS_FILE, SETTINGS_VERSION

logger = logging.getLogger(__name__)

_README = "Note: These settings are meant for accessibility"
_FLAGS = ("disable_forced_detonation", "disable_visual_distortion", "disable_musicbox")


@dataclass
class FlowerButtonSettings:
    """User configuration, read once per game."""
    readme:                    str  = _README
    version:                   int  = SETTINGS_VERSION
    disable_forced_detonation: bool = False
    disable_visual_distortion: bool = False
    disable_musicbox:          bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "FlowerButtonSettings":
        """Build settings from parsed JSON.

        Raises:
            ValueError: if `version` is missing, or a field has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError("settings must be a JSON object")
        version = data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            raise ValueError("settings need an integer 'version'")

        settings = cls(readme=str(data.get("readme", _README)), version=version)
        for flag in _FLAGS:
            value = data.get(flag, False)
            if not isinstance(value, bool):
                raise ValueError(f"'{flag}' must be true or false")
            setattr(settings, flag, value)
        return settings


def write_settings(settings: FlowerButtonSettings, path: str | Path = SETTINGS_FILE) -> bool:
    """Write settings as JSON. Returns False (and logs) if the file can't be written."""
    try:
        Path(path).write_text(json.dumps(asdict(settings), indent=4) + "\n", encoding="utf-8")
    except OSError:
        logger.exception("Could not write settings to %s", path)
        return False
    return True


def read_settings(path: str | Path = SETTINGS_FILE) -> FlowerButtonSettings:
    """Read settings from `path`, repairing the file when needed.

    Returns:
        The settings to use. Defaults when the file was unusable.
    """
    path = Path(path)
    try:
        settings = FlowerButtonSettings.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except FileNotFoundError:
        logger.info("No settings file at %s, creating one with defaults", path)
        settings = FlowerButtonSettings()
        write_settings(settings, path)
        return settings
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
        logger.warning("Invalid settings file %s (%s), starting anew", path, exc)
        settings = FlowerButtonSettings()
        write_settings(settings, path)
        return settings

    if settings.version < SETTINGS_VERSION:
        logger.info("Settings file %s is outdated (v%d), resaving", path, settings.version)
        settings.version = SETTINGS_VERSION
        write_settings(settings, path)

    return settings
