from enum import Enum


class Command(Enum):
    """Abstract commands produced by the key map and consumed by the app."""
    QUIT = "quit"
    TOGGLE_PLAYBACK = "toggle_playback"
    TOGGLE_REPEAT = "toggle_repeat"
    SEEK_BACKWARD = "seek_backward"
    SEEK_FORWARD = "seek_forward"
    PREVIOUS_TRACK = "previous_track"
    NEXT_TRACK = "next_track"
    HIDE_TRACK = "hide_track"
    RELOAD_CONFIG = "reload_config"
