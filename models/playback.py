from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .track import Track


class PlaybackState(Enum):
    """Playback phase of the transport."""
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class TransportSnapshot:
    """Read-only view of the transport handed to the renderer.
    
    Attributes:
        phase: Current playback phase
        index: Index of the current track in the library
        track: The current track
        position: Elapsed seconds within the current track
        duration: Total seconds of the current track, 0.0 when unknown
        ratio: position / duration in [0, 1], 0.0 when duration is unknown
        repeat_mode: Whether the current track replays when it ends
        track_count: Number of tracks in the library
    """
    phase: PlaybackState
    index: int
    track: Track
    position: float
    duration: float
    ratio: float
    repeat_mode: bool
    track_count: int
    
    @property
    def is_playing(self) -> bool:
        return self.phase is PlaybackState.PLAYING
