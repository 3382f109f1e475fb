"""
Configuration management for tonearm.
"""
from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from services.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_TABLE = "config"


@dataclass
class Settings:
    """Key bindings and appearance settings."""

    # Key bindings
    toggle_playback: str = "space"
    toggle_repeat: str = "r"
    seek_backward: str = "left"
    seek_forward: str = "right"
    seek_step: int = 5
    previous_track: str = "up"
    next_track: str = "down"
    hide_track: str = "h"
    reload_config: str = "c"
    quit: str = "q"

    # Panels
    show_app_title: bool = True
    show_playlist_title: bool = True
    show_playlist_scrollbar: bool = True
    show_metadata_title: bool = True
    show_metadata_panel: bool = True
    show_progress_title: bool = False

    # Titles, {VERSION} is replaced with the program version
    app_title_format: str = "┤ Tonearm v{VERSION} ├"
    playlist_title_format: str = "┤ Playlist ├"
    metadata_title_format: str = "┤ Metadata ├"
    progress_title_format: str = "┤ Progress ├"
    app_title_alignment: str = "center"
    playlist_title_alignment: str = "left"
    metadata_title_alignment: str = "left"
    progress_title_alignment: str = "left"

    # Colors
    app_title_color: str = "blue"
    playlist_color: str = "blue"
    metadata_color: str = "blue"
    progress_color: str = "blue"
    rounded_corners: bool = True


def default_config_path() -> Path:
    """Get default configuration file path."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "tonearm" / "config.toml"
    return Path.home() / ".config" / "tonearm" / "config.toml"


def dump_settings(settings: Settings) -> str:
    """Render settings as a TOML document with a single [config] table."""
    lines = [f"[{CONFIG_TABLE}]"]
    for key, value in asdict(settings).items():
        if isinstance(value, bool):
            rendered = "true" if value else "false"
        elif isinstance(value, int):
            rendered = str(value)
        else:
            rendered = '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
        lines.append(f"{key} = {rendered}")
    return "\n".join(lines) + "\n"


class ConfigManager:
    """Loads, creates and reloads the configuration file."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or default_config_path()
        self.settings = Settings()

    def load(self) -> Settings:
        """Load settings from disk, creating the file with defaults if missing.

        A broken file never prevents startup: defaults are used instead.
        """
        if not self.config_path.exists():
            logger.info(f"Config file not found at {self.config_path}, using defaults")
            self.settings = Settings()
            try:
                self.save()
            except ConfigurationError as e:
                logger.warning(str(e))
            return self.settings

        try:
            with open(self.config_path, "rb") as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, OSError) as e:
            logger.error(f"Failed to load config: {e}")
            logger.info("Using default configuration")
            self.settings = Settings()
            return self.settings

        self.settings = self._apply_config_data(data.get(CONFIG_TABLE, {}))
        logger.info(f"Loaded configuration from {self.config_path}")
        return self.settings

    def reload(self) -> Settings:
        return self.load()

    def save(self) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(dump_settings(self.settings), encoding="utf-8")
            logger.info(f"Configuration saved to {self.config_path}")
        except OSError as e:
            raise ConfigurationError(f"Failed to write config {self.config_path}: {e}") from e

    @staticmethod
    def _apply_config_data(data: dict[str, Any]) -> Settings:
        settings = Settings()
        if not isinstance(data, dict):
            logger.warning(f"[{CONFIG_TABLE}] is not a table, using defaults")
            return settings

        types = {f.name: type(getattr(settings, f.name)) for f in fields(Settings)}
        for key, value in data.items():
            expected = types.get(key)
            if expected is None:
                logger.debug(f"Ignoring unknown config key: {key}")
                continue
            # bool is an int subclass, reject it for numeric settings
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                logger.warning(f"Invalid config value for {key}: {value!r}, keeping default")
                continue
            if key == "seek_step" and value < 0:
                logger.warning(f"seek_step must be non-negative, got {value}")
                continue
            setattr(settings, key, value)
        return settings
