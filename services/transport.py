from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, Protocol

from models.commands import Command
from models.playback import PlaybackState, TransportSnapshot
from models.track import Track
from services.errors import EmptyLibraryError, ResourceError
from services.music_library import Library

logger = logging.getLogger(__name__)


class OutputService(Protocol):
    """What the transport needs from an audio output backend."""

    def open(self, path: Path, start_offset: float = 0.0, paused: bool = False) -> Any: ...

    def pause(self, handle: Any) -> None: ...

    def resume(self, handle: Any) -> None: ...

    def stop(self, handle: Any) -> None: ...


class Transport:
    """Playback state machine over an ordered library.

    Owns the current track index, the playback phase, the elapsed position
    and the single active output handle. All mutation goes through the
    command methods; the UI reads state through snapshot().

    Invariants kept by every command:
        * an output handle is held exactly when the phase is PLAYING or PAUSED
        * an anchor is set exactly when the phase is PLAYING
        * 0 <= current_index < len(tracks)

    Output failures never escape a command. They release the handle and
    leave the transport STOPPED with the position unchanged.
    """

    def __init__(
        self,
        tracks: Library,
        output: OutputService,
        clock: Callable[[], float] = time.monotonic,
        repeat_mode: bool = False,
    ):
        if len(tracks) == 0:
            raise EmptyLibraryError("Cannot start playback with an empty library")

        self._tracks = tracks
        self._output = output
        self._clock = clock
        self._index = 0
        self._phase = PlaybackState.STOPPED
        self._position = 0.0
        self._anchor: float | None = None
        self._handle: Any = None
        self._repeat_mode = repeat_mode
        self._unknown_duration_noted: Track | None = None

    @property
    def tracks(self) -> Library:
        return self._tracks

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_track(self) -> Track:
        return self._tracks[self._index]

    @property
    def phase(self) -> PlaybackState:
        return self._phase

    @property
    def position(self) -> float:
        return self._position

    @property
    def repeat_mode(self) -> bool:
        return self._repeat_mode

    @property
    def has_output(self) -> bool:
        return self._handle is not None

    def snapshot(self) -> TransportSnapshot:
        track = self.current_track
        duration = track.duration
        ratio = min(1.0, max(0.0, self._position / duration)) if duration > 0 else 0.0
        return TransportSnapshot(
            phase=self._phase,
            index=self._index,
            track=track,
            position=self._position,
            duration=duration,
            ratio=ratio,
            repeat_mode=self._repeat_mode,
            track_count=len(self._tracks),
        )

    def dispatch(self, command: Command, seek_step: int = 5) -> None:
        """Apply a user command. QUIT and RELOAD_CONFIG belong to the app."""
        if command is Command.TOGGLE_PLAYBACK:
            self.toggle_playback()
        elif command is Command.TOGGLE_REPEAT:
            self.toggle_repeat()
        elif command is Command.SEEK_BACKWARD:
            self.seek(-seek_step)
        elif command is Command.SEEK_FORWARD:
            self.seek(seek_step)
        elif command is Command.PREVIOUS_TRACK:
            self.previous_track()
        elif command is Command.NEXT_TRACK:
            self.next_track(1)
        elif command is Command.HIDE_TRACK:
            self.hide_current_track()

    def toggle_playback(self) -> None:
        if self._phase is PlaybackState.STOPPED:
            self._load_current(0.0)
        elif self._phase is PlaybackState.PLAYING:
            self._settle_position()
            try:
                self._output.pause(self._handle)
            except ResourceError as e:
                self._fail(e)
                return
            self._anchor = None
            self._set_phase(PlaybackState.PAUSED)
        else:
            try:
                self._output.resume(self._handle)
            except ResourceError as e:
                self._fail(e)
                return
            self._anchor = self._clock() - self._position
            self._set_phase(PlaybackState.PLAYING)

    def toggle_repeat(self) -> None:
        self._repeat_mode = not self._repeat_mode
        logger.debug(f"Repeat mode {'on' if self._repeat_mode else 'off'}")

    def seek(self, delta: int) -> None:
        """Move the position by delta whole seconds, clamped to the track.

        While playing the stream is reopened at the new offset. While paused
        only the stored position moves; resume picks it up. Stopped is a no-op.
        """
        if self._phase is PlaybackState.STOPPED:
            return

        if self._phase is PlaybackState.PLAYING:
            self._settle_position()

        duration = int(self.current_track.duration)
        target = int(self._position) + int(delta)
        self._position = float(max(0, min(target, duration)))
        logger.debug(f"Seek {delta:+d}s to {self._position}s")

        if self._phase is PlaybackState.PLAYING:
            self._load_current(self._position)

    def next_track(self, direction: int = 1) -> None:
        """Move direction tracks along the library, wrapping at both ends.

        direction 0 reloads the current index. The phase is kept: a playing
        transport starts the new track, a paused one loads it paused and a
        stopped one only moves the index.
        """
        self._index = (self._index + direction) % len(self._tracks)
        self._position = 0.0
        self._anchor = None
        logger.debug(f"Track index -> {self._index}")

        if self._phase is PlaybackState.PLAYING:
            self._load_current(0.0)
        elif self._phase is PlaybackState.PAUSED:
            self._load_current(0.0, paused=True)

    def previous_track(self) -> None:
        self.next_track(-1)

    def hide_track(self, index: int) -> None:
        """Remove a track from the library and reload the current index.

        Raises:
            IndexError: If index is out of range.
            EmptyLibraryError: If it is the only track left.
        """
        removed = self._tracks.remove(index)
        logger.info(f"Hid track {index}: {removed.path}")

        if index < self._index:
            self._index -= 1
        self.next_track(0)

    def hide_current_track(self) -> None:
        self.hide_track(self._index)

    def tick(self) -> None:
        """Advance the clock-derived position and handle end of track."""
        if self._phase is not PlaybackState.PLAYING:
            return

        self._settle_position()
        track = self.current_track
        duration = track.duration
        if duration <= 0:
            if self._unknown_duration_noted is not track:
                self._unknown_duration_noted = track
                logger.info(f"Length of {track.path} is unknown, it will not advance on its own")
            return
        if self._position >= duration:
            logger.debug(f"Track {self._index} ended")
            self.next_track(0 if self._repeat_mode else 1)

    def close(self) -> None:
        """Release the output and stop. Called once at session end."""
        self._release_output()
        self._anchor = None
        self._set_phase(PlaybackState.STOPPED)

    def _settle_position(self) -> None:
        if self._anchor is None:
            return
        position = max(0.0, self._clock() - self._anchor)
        duration = self.current_track.duration
        if duration > 0:
            position = min(position, duration)
        self._position = position

    def _load_current(self, offset: float, paused: bool = False) -> None:
        self._release_output()
        track = self.current_track

        try:
            self._handle = self._output.open(track.path, offset, paused=paused)
        except ResourceError as e:
            self._fail(e)
            return

        self._position = offset
        if paused:
            self._anchor = None
            self._set_phase(PlaybackState.PAUSED)
        else:
            self._anchor = self._clock() - offset
            self._set_phase(PlaybackState.PLAYING)

    def _release_output(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        try:
            self._output.stop(handle)
        except ResourceError as e:
            logger.warning(f"Error releasing output: {e}")

    def _fail(self, error: ResourceError) -> None:
        logger.warning(f"Playback of {self.current_track.path} failed: {error}")
        self._release_output()
        self._anchor = None
        self._set_phase(PlaybackState.STOPPED)

    def _set_phase(self, phase: PlaybackState) -> None:
        if phase is not self._phase:
            logger.debug(f"Phase {self._phase.value} -> {phase.value}")
        self._phase = phase
