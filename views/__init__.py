from .library import PlaylistView
from .now_playing import MetadataView
from .progress import ProgressView

__all__ = ["PlaylistView", "MetadataView", "ProgressView"]
