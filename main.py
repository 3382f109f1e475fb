from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal

from models.commands import Command
from services.audio_player import AudioPlayer
from services.config import ConfigManager, Settings
from services.errors import EmptyLibraryError, ScanError
from services.keymap import KeyMap
from services.music_library import MusicLibrary
from services.transport import Transport
from styles import COLOR_BACKGROUND
from views import MetadataView, PlaylistView, ProgressView
from widgets import AppTitle

VERSION = "1.0.0"
TICK_INTERVAL = 0.05

LOG_DIR = Path.home() / '.local' / 'share' / 'tonearm'
LOG_FILE = LOG_DIR / 'tonearm.log'

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Send log records to the log file; the terminal belongs to the UI."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE)
        ]
    )


class TonearmApp(App):
    """Terminal music player driving a Transport from key presses."""

    CSS_PATH = "styles/app.tcss"

    def __init__(self, transport: Transport, config_manager: ConfigManager, settings: Settings | None = None, **kwargs):
        super().__init__(**kwargs)
        self.transport = transport
        self.config_manager = config_manager
        self.app_settings = settings or config_manager.settings
        self.key_map = KeyMap(self.app_settings)
        self._track_count = len(transport.tracks)

    def get_css_variables(self) -> dict[str, str]:
        return {**super().get_css_variables(), "tonearm-background": COLOR_BACKGROUND}

    def compose(self) -> ComposeResult:
        yield AppTitle(VERSION, id="app-title")
        with Horizontal(id="center"):
            yield PlaylistView(id="playlist")
            yield MetadataView(id="metadata")
        yield ProgressView(id="progress")

    async def on_mount(self) -> None:
        self._apply_settings()
        playlist = self.query_one("#playlist", PlaylistView)
        await playlist.set_tracks(list(self.transport.tracks), self.transport.current_index)
        await self._refresh_views()
        self.set_interval(TICK_INTERVAL, self._on_tick)

    async def _on_tick(self) -> None:
        self.transport.tick()
        await self._refresh_views()

    async def on_key(self, event: events.Key) -> None:
        command = self.key_map.lookup(event.key)
        if command is None:
            return
        event.stop()
        event.prevent_default()
        await self.handle_command(command)

    async def handle_command(self, command: Command) -> None:
        """Run one command to completion, then redraw."""
        if command is Command.QUIT:
            self.exit()
            return

        if command is Command.RELOAD_CONFIG:
            self.app_settings = self.config_manager.reload()
            self.key_map = KeyMap(self.app_settings)
            self._apply_settings()
            self.notify("Configuration reloaded", timeout=1.5)
            return

        if command is Command.HIDE_TRACK and len(self.transport.tracks) == 1:
            self.notify("Cannot hide the last track", severity="warning", timeout=2)
            return

        self.transport.dispatch(command, self.app_settings.seek_step)
        await self._refresh_views()

    def _apply_settings(self) -> None:
        self.query_one("#app-title", AppTitle).apply_settings(self.app_settings)
        self.query_one("#playlist", PlaylistView).apply_settings(self.app_settings)
        self.query_one("#metadata", MetadataView).apply_settings(self.app_settings)
        self.query_one("#progress", ProgressView).apply_settings(self.app_settings)

    async def _refresh_views(self) -> None:
        snapshot = self.transport.snapshot()
        playlist = self.query_one("#playlist", PlaylistView)

        if snapshot.track_count != self._track_count:
            self._track_count = snapshot.track_count
            await playlist.set_tracks(list(self.transport.tracks), snapshot.index)
        else:
            playlist.select(snapshot.index)

        self.query_one("#metadata", MetadataView).show_track(snapshot.track)
        self.query_one("#progress", ProgressView).show(snapshot)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tonearm",
        description="A terminal music player for local audio files.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=None,
        help="music directory (default: current directory)",
    )
    parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="get music files from all subdirectories",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s v{VERSION}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="write debug messages to the log file",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    args = build_parser().parse_args(argv)
    if args.path is None:
        args.path = Path.cwd()
    return args


def main(argv: list[str] | None = None) -> int:
    """Entry point for tonearm.

    Returns:
        Process exit status.
    """
    args = parse_args(argv)
    configure_logging(args.debug)
    logger.info(f"Tonearm v{VERSION} starting up")

    try:
        library = MusicLibrary().scan(args.path, recursive=args.recursive)
        if len(library) == 0:
            raise EmptyLibraryError(f"No music files found in {args.path}")
    except (ScanError, EmptyLibraryError) as e:
        logger.error(str(e))
        print(f"tonearm: {e}", file=sys.stderr)
        return 1

    config_manager = ConfigManager()
    settings = config_manager.load()

    player = AudioPlayer()
    transport = Transport(library, player)

    try:
        TonearmApp(transport, config_manager, settings).run()
        logger.info("Tonearm shut down cleanly")
    except KeyboardInterrupt:
        logger.info("Tonearm interrupted by user")
    except Exception as e:
        logger.critical(f"Unexpected fatal error: {type(e).__name__}: {e}", exc_info=True)
        print(f"tonearm: unexpected error: {type(e).__name__}: {e}", file=sys.stderr)
        print(f"Check {LOG_FILE} for more details.", file=sys.stderr)
        return 1
    finally:
        transport.close()
        player.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
