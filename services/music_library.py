from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, Sequence

from models.track import Track, TrackMetadata, title_from_filename
from services.audio_player import probe_duration
from services.errors import EmptyLibraryError, ResourceError, ScanError
from services.metadata_resolver import MetadataResolver

logger = logging.getLogger(__name__)


class Library(Sequence[Track]):
    """Ordered, indexable sequence of scanned tracks.
    
    The order is fixed at construction. The only mutation is removal of a
    single track, and the library may never become empty.
    """
    
    def __init__(self, tracks: list[Track] | tuple[Track, ...] = ()):
        self._tracks: list[Track] = list(tracks)
    
    def __len__(self) -> int:
        return len(self._tracks)
    
    def __getitem__(self, index):
        return self._tracks[index]
    
    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)
    
    def __repr__(self) -> str:
        return f"Library({len(self._tracks)} tracks)"
    
    def remove(self, index: int) -> Track:
        """Remove and return the track at index.
        
        Raises:
            IndexError: If index is out of range.
            EmptyLibraryError: If the track is the last one left.
        """
        if not 0 <= index < len(self._tracks):
            raise IndexError(f"Track index {index} out of range for {len(self._tracks)} tracks")
        if len(self._tracks) == 1:
            raise EmptyLibraryError("Cannot remove the last track in the library")
        return self._tracks.pop(index)


class MusicLibrary:
    """Service for discovering music files and building a Library."""
    
    SUPPORTED_EXTENSIONS = {'.mp3', '.aac', '.wav', '.flac', '.alac', '.aiff', '.aif', '.m4a', '.ogg'}
    
    def __init__(
        self,
        probe: Callable[[Path], float] = probe_duration,
        resolve: Callable[[Path], TrackMetadata] | None = None,
    ):
        """Initialize the scanner.
        
        Args:
            probe: Returns the duration of a file in seconds. May raise.
            resolve: Returns display metadata for a file. May raise.
                Defaults to MetadataResolver().resolve.
        """
        self._probe = probe
        self._resolve = resolve or MetadataResolver().resolve
    
    def scan(self, root: Path, recursive: bool = False) -> Library:
        """Scan a directory for audio files and build the library.
        
        Args:
            root: Directory to scan.
            recursive: Descend into subdirectories when True, otherwise only
                the root's immediate children are considered.
            
        Returns:
            Library sorted by case-insensitive title, ties kept in
            enumeration order.
            
        Raises:
            ScanError: If root itself cannot be listed.
        """
        root = Path(root)
        logger.info(f"Scanning {root} (recursive={recursive})")
        
        tracks = [self._build_track(path) for path in self._iter_audio_files(root, recursive, is_root=True)]
        tracks.sort(key=lambda t: t.sort_key)
        
        logger.info(f"Found {len(tracks)} tracks in {root}")
        return Library(tracks)
    
    def is_audio_file(self, path: Path) -> bool:
        return path.suffix.lower() in self.SUPPORTED_EXTENSIONS
    
    def _iter_audio_files(self, directory: Path, recursive: bool, is_root: bool = False) -> Iterator[Path]:
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            if is_root:
                raise ScanError(f"Cannot read music directory {directory}: {e}") from e
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            return
        
        for entry in entries:
            try:
                if entry.is_dir():
                    if recursive and not entry.is_symlink():
                        yield from self._iter_audio_files(entry, recursive)
                elif entry.is_file() and self.is_audio_file(entry):
                    yield entry
            except OSError as e:
                logger.warning(f"Skipping {entry}: {e}")
    
    def _build_track(self, path: Path) -> Track:
        try:
            duration = max(0.0, float(self._probe(path)))
        except (ResourceError, OSError, ValueError) as e:
            logger.warning(f"Could not determine duration of {path}: {e}")
            duration = 0.0
        
        try:
            metadata = self._resolve(path)
        except Exception as e:
            logger.warning(f"Could not resolve metadata for {path}: {e}")
            title, artist = title_from_filename(path)
            metadata = TrackMetadata(title=title, artist=artist)
        
        return Track(path=path, duration=duration, metadata=metadata)
