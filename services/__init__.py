from .music_library import MusicLibrary, Library
from .audio_player import AudioPlayer
from .metadata_resolver import MetadataResolver
from .transport import Transport
from .config import ConfigManager, Settings

__all__ = [
    'MusicLibrary',
    'Library',
    'AudioPlayer',
    'MetadataResolver',
    'Transport',
    'ConfigManager',
    'Settings',
]
