from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from models.track import Track, format_time
from services.config import Settings
from styles import border_type, parse_alignment, parse_color


def render_metadata(track: Track, color: str) -> Text:
    """Render the metadata panel lines for a track."""
    metadata = track.metadata
    rows: list[tuple[str, str]] = [
        ("Title", track.title),
        ("Artist", track.artist),
        ("Duration", format_time(track.duration)),
    ]
    
    optional = [
        ("Album", metadata.album),
        ("Year", metadata.year),
        ("Genre", metadata.genre),
        ("Track", str(metadata.track_number) if metadata.track_number is not None else None),
        ("Bitrate", f"{metadata.bitrate} kbps" if metadata.bitrate else None),
        ("Sample Rate", f"{metadata.sample_rate} Hz" if metadata.sample_rate else None),
        ("Channels", metadata.channels_label),
    ]
    rows.extend((label, value) for label, value in optional if value)
    
    result = Text()
    for i, (label, value) in enumerate(rows):
        if i:
            result.append("\n")
        result.append(f"{label}: ", style=color)
        result.append(value)
    return result


class MetadataView(Static):
    """Panel showing tags and stream properties of the current track."""
    
    def __init__(self, **kwargs):
        super().__init__("", **kwargs)
        self._color = "blue"
        self._track: Track | None = None
    
    def apply_settings(self, settings: Settings) -> None:
        self._color = parse_color(settings.metadata_color)
        self.display = settings.show_metadata_panel
        self.styles.border = (border_type(settings.rounded_corners), self._color)
        self.border_title = settings.metadata_title_format if settings.show_metadata_title else None
        self.styles.border_title_align = parse_alignment(settings.metadata_title_alignment)
        if self._track is not None:
            self.update(render_metadata(self._track, self._color))
    
    def show_track(self, track: Track) -> None:
        if track is self._track:
            return
        self._track = track
        self.update(render_metadata(track, self._color))
