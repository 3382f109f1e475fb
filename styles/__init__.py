"""Shared style constants for tonearm."""

COLORS = {
    "background": "#1a1a1a",
    "inactive": "#333333",
}

COLOR_BACKGROUND = COLORS["background"]
COLOR_INACTIVE = COLORS["inactive"]

# Config color names, as hex so both Rich and Textual accept them
TERMINAL_COLORS = {
    "black": "#000000",
    "red": "#cd3131",
    "green": "#0dbc79",
    "yellow": "#e5e510",
    "blue": "#2472c8",
    "magenta": "#bc3fbc",
    "cyan": "#11a8cd",
    "gray": "#e5e5e5",
    "darkgray": "#666666",
    "lightred": "#f14c4c",
    "lightgreen": "#23d18b",
    "lightyellow": "#f5f543",
    "lightblue": "#3b8eea",
    "lightmagenta": "#d670d6",
    "lightcyan": "#29b8db",
    "white": "#ffffff",
}
DEFAULT_COLOR = "blue"

ALIGNMENTS = ("left", "center", "right")
DEFAULT_ALIGNMENT = "left"

GAUGE_FILLED = "█"
GAUGE_EMPTY = "─"


def parse_color(name: str) -> str:
    """Hex value for a configured color name; unknown names give blue."""
    key = name.lower().replace("grey", "gray")
    return TERMINAL_COLORS.get(key, TERMINAL_COLORS[DEFAULT_COLOR])


def parse_alignment(name: str) -> str:
    key = name.lower()
    return key if key in ALIGNMENTS else DEFAULT_ALIGNMENT


def border_type(rounded_corners: bool) -> str:
    """Textual border type for panel frames."""
    return "round" if rounded_corners else "solid"
