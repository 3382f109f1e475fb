from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mutagen import File as MutagenFile

from models.track import TrackMetadata, title_from_filename

logger = logging.getLogger(__name__)


class MetadataResolver:
    """Reads display metadata from audio tags using mutagen."""
    
    def resolve(self, file_path: Path) -> TrackMetadata:
        """Resolve display metadata for a file.
        
        Tag read failures are not errors: the result falls back to a title
        (and possibly artist) derived from the file name.
        
        Args:
            file_path: Path to the audio file.
            
        Returns:
            TrackMetadata with at least a title set.
        """
        tags: dict[str, Any] = {}
        properties: dict[str, int | None] = {}
        
        try:
            audio = MutagenFile(file_path, easy=True)
            if audio is not None:
                tags = self._read_tags(audio)
                properties = self._read_properties(audio)
        except Exception as e:
            logger.debug(f"Could not read tags from {file_path}: {e}")
        
        title = tags.get("title")
        artist = tags.get("artist")
        if not title:
            title, filename_artist = title_from_filename(file_path)
            artist = artist or filename_artist
        
        return TrackMetadata(
            title=title,
            artist=artist,
            album=tags.get("album"),
            year=tags.get("date"),
            genre=tags.get("genre"),
            track_number=_parse_track_number(tags.get("tracknumber")),
            bitrate=properties.get("bitrate"),
            sample_rate=properties.get("sample_rate"),
            channels=properties.get("channels"),
        )
    
    @staticmethod
    def _read_tags(audio) -> dict[str, str]:
        tags = {}
        if not audio.tags:
            return tags
        for key in ("title", "artist", "album", "date", "genre", "tracknumber"):
            try:
                value = audio.tags.get(key)
            except (KeyError, ValueError):
                continue
            if isinstance(value, list):
                value = value[0] if value else None
            if value:
                tags[key] = str(value).strip()
        return tags
    
    @staticmethod
    def _read_properties(audio) -> dict[str, int | None]:
        info = audio.info
        if info is None:
            return {}
        bitrate = getattr(info, "bitrate", None)
        return {
            "bitrate": bitrate // 1000 if bitrate else None,
            "sample_rate": getattr(info, "sample_rate", None) or None,
            "channels": getattr(info, "channels", None) or None,
        }


def _parse_track_number(value: str | None) -> int | None:
    """Parse "3" or "3/12" into 3."""
    if not value:
        return None
    try:
        return int(value.split("/")[0])
    except ValueError:
        return None
