from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import ListView, ListItem, Label

from models.track import Track
from services.config import Settings
from styles import border_type, parse_alignment, parse_color

logger = logging.getLogger(__name__)


class PlaylistView(Container):
    """Library panel listing every track, current one highlighted."""
    
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._titles: list[str] = []
        self._items: list[ListItem] = []
        self._labels: list[Label] = []
        self._current: int = -1
        self._color = "blue"
    
    @property
    def current(self) -> int:
        return self._current
    
    def compose(self) -> ComposeResult:
        list_view = ListView(id="track-list")
        list_view.can_focus = False
        yield list_view
    
    def apply_settings(self, settings: Settings) -> None:
        self._color = parse_color(settings.playlist_color)
        self.styles.border = (border_type(settings.rounded_corners), self._color)
        self.border_title = settings.playlist_title_format if settings.show_playlist_title else None
        self.styles.border_title_align = parse_alignment(settings.playlist_title_alignment)
        
        list_view = self.query_one("#track-list", ListView)
        list_view.styles.scrollbar_size_vertical = 1 if settings.show_playlist_scrollbar else 0
        list_view.styles.scrollbar_color = self._color
        
        if self._current >= 0:
            self._restyle(self._current, current=True)
    
    async def set_tracks(self, tracks: list[Track], current: int) -> None:
        """Rebuild the list, e.g. after a track was hidden.
        
        Returns once the new items are mounted.
        """
        list_view = self.query_one("#track-list", ListView)
        self._titles = [track.title for track in tracks]
        self._labels = [Label(title) for title in self._titles]
        self._items = [ListItem(label) for label in self._labels]
        self._current = -1
        
        await list_view.clear()
        await list_view.extend(self._items)
        logger.debug(f"Populated playlist with {len(self._titles)} tracks")
        
        # a tick may have selected while the items were mounting
        previous, self._current = self._current, -1
        if previous >= 0:
            self._restyle(previous, current=False)
        self.select(current)
    
    def select(self, index: int) -> None:
        """Mark index as the current track and scroll it into view."""
        if not 0 <= index < len(self._items):
            return
        if index == self._current:
            return
        
        if 0 <= self._current < len(self._items):
            self._restyle(self._current, current=False)
        self._current = index
        self._restyle(index, current=True)
        
        list_view = self.query_one("#track-list", ListView)
        list_view.index = index
    
    def _restyle(self, index: int, current: bool) -> None:
        item = self._items[index]
        label = self._labels[index]
        title = self._titles[index]
        if current:
            item.add_class("current")
            label.update(Text(title, style=self._color))
        else:
            item.remove_class("current")
            label.update(title)
