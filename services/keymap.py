from __future__ import annotations

import logging

from textual.keys import _character_to_key

from models.commands import Command
from services.config import Settings

logger = logging.getLogger(__name__)

KEY_ALIASES = {
    "space": "space",
    " ": "space",
    "left": "left",
    "right": "right",
    "up": "up",
    "down": "down",
    "escape": "escape",
    "esc": "escape",
    "tab": "tab",
    "backspace": "backspace",
    "enter": "enter",
    "insert": "insert",
    "ins": "insert",
    "delete": "delete",
    "del": "delete",
    "home": "home",
    "end": "end",
    "pageup": "pageup",
    "pgup": "pageup",
    "pagedown": "pagedown",
    "pgdown": "pagedown",
}


def parse_key(key_str: str) -> str | None:
    """Normalise a configured key name to a Textual key name.

    Returns None for names that do not describe a single key.
    """
    key = key_str.lower()
    if key in KEY_ALIASES:
        return KEY_ALIASES[key]
    if len(key) == 1:
        # Textual names punctuation keys, e.g. "," arrives as "comma"
        return _character_to_key(key)
    return None


class KeyMap:
    """Maps pressed keys to commands according to the settings."""

    def __init__(self, settings: Settings):
        self._bindings: dict[str, Command] = {}
        for command in Command:
            key = parse_key(getattr(settings, command.value))
            if key is None:
                logger.warning(f"Unknown key {getattr(settings, command.value)!r} for {command.value}")
                continue
            # first binding wins, in Command order
            self._bindings.setdefault(key, command)

    def lookup(self, key: str) -> Command | None:
        return self._bindings.get(key)

    def key_for(self, command: Command) -> str | None:
        for key, bound in self._bindings.items():
            if bound is command:
                return key
        return None
