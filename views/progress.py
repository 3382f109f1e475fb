from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from models.playback import PlaybackState, TransportSnapshot
from models.track import format_time
from services.config import Settings
from styles import COLOR_INACTIVE, GAUGE_EMPTY, GAUGE_FILLED, border_type, parse_alignment, parse_color

PHASE_ICONS = {
    PlaybackState.STOPPED: "■",
    PlaybackState.PLAYING: "▶",
    PlaybackState.PAUSED: "⏸",
}


def progress_label(snapshot: TransportSnapshot) -> str:
    return f"{format_time(snapshot.position)} / {format_time(snapshot.duration)}"


def render_gauge(ratio: float, label: str, width: int, color: str) -> Text:
    """Render a one-line gauge of the given width with a centred label."""
    width = max(width, len(label))
    ratio = min(1.0, max(0.0, ratio))
    filled = int(ratio * width)
    start = (width - len(label)) // 2
    
    result = Text()
    for i in range(width):
        if start <= i < start + len(label):
            char = label[i - start]
            style = f"reverse {color}" if i < filled else "bold"
            result.append(char, style=style)
        elif i < filled:
            result.append(GAUGE_FILLED, style=color)
        else:
            result.append(GAUGE_EMPTY, style=COLOR_INACTIVE)
    return result


class ProgressView(Static):
    """Position gauge for the current track."""
    
    def __init__(self, **kwargs):
        super().__init__("", **kwargs)
        self._color = "blue"
        self._title: str | None = None
    
    def apply_settings(self, settings: Settings) -> None:
        self._color = parse_color(settings.progress_color)
        self.styles.border = (border_type(settings.rounded_corners), self._color)
        self._title = settings.progress_title_format if settings.show_progress_title else None
        self.border_title = self._title
        self.styles.border_title_align = parse_alignment(settings.progress_title_alignment)
    
    def show(self, snapshot: TransportSnapshot) -> None:
        width = max(1, self.content_size.width)
        self.update(render_gauge(snapshot.ratio, progress_label(snapshot), width, self._color))
        
        status = PHASE_ICONS[snapshot.phase]
        if snapshot.repeat_mode:
            status += " ⟳"
        self.border_subtitle = status
