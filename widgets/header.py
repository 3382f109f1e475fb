from textual.widgets import Static

from services.config import Settings
from styles import border_type, parse_alignment, parse_color


class AppTitle(Static):
    """Single rule across the top of the screen carrying the app title."""
    
    def __init__(self, version: str, **kwargs):
        super().__init__("", **kwargs)
        self.version = version
    
    def apply_settings(self, settings: Settings) -> None:
        self.display = settings.show_app_title
        self.styles.border_top = (border_type(settings.rounded_corners), parse_color(settings.app_title_color))
        self.border_title = settings.app_title_format.replace("{VERSION}", self.version)
        self.styles.border_title_align = parse_alignment(settings.app_title_alignment)
