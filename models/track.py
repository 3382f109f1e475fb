from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

ARTIST_TITLE_SEPARATOR = " - "


def format_time(seconds: float) -> str:
    """Format a position or duration as m:ss using whole seconds."""
    total = max(0, int(seconds))
    return f"{total // 60}:{total % 60:02d}"


@dataclass(frozen=True)
class TrackMetadata:
    """Display metadata for a track.
    
    Every field is optional. Nothing here influences playback timing; the
    values are only shown to the user and used as the library sort key.
    
    Attributes:
        title: Tag title, or a title derived from the file name
        artist: Tag artist, or the part before " - " in the file name
        album: Album tag
        year: Year or date tag
        genre: Genre tag
        track_number: Position on the album
        bitrate: Audio bitrate in kbps
        sample_rate: Sample rate in Hz
        channels: Number of audio channels
    """
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    year: str | None = None
    genre: str | None = None
    track_number: int | None = None
    bitrate: int | None = None
    sample_rate: int | None = None
    channels: int | None = None
    
    @property
    def channels_label(self) -> str | None:
        if self.channels is None:
            return None
        if self.channels == 1:
            return "Mono"
        if self.channels == 2:
            return "Stereo"
        return f"{self.channels} channels"


def title_from_filename(path: Path) -> tuple[str, str | None]:
    """Derive (title, artist) from a file name like "Artist - Title.mp3"."""
    stem = path.stem or "Unknown"
    artist, sep, title = stem.partition(ARTIST_TITLE_SEPARATOR)
    if sep:
        return title, artist
    return stem, None


@dataclass(frozen=True)
class Track:
    """One playable file in the library."""
    path: Path
    duration: float = 0.0  # seconds, 0.0 when unknown
    metadata: TrackMetadata = field(default_factory=TrackMetadata)
    
    @property
    def title(self) -> str:
        if self.metadata.title:
            return self.metadata.title
        return title_from_filename(self.path)[0]
    
    @property
    def artist(self) -> str:
        return self.metadata.artist or "Unknown"
    
    @property
    def sort_key(self) -> str:
        return self.title.lower()
