from .track import Track, TrackMetadata, format_time
from .playback import PlaybackState, TransportSnapshot
from .commands import Command

__all__ = ["Track", "TrackMetadata", "format_time", "PlaybackState", "TransportSnapshot", "Command"]
