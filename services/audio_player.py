from __future__ import annotations

import logging
import os
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame
from mutagen import File as MutagenFile

from services.errors import ResourceError

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
NUM_CHANNELS = 2
BUFFER_SIZE = 512


def probe_duration(file_path: Path) -> float:
    """Return the stream length of an audio file in seconds.
    
    Raises:
        ResourceError: If the file cannot be read or is not a known audio stream.
    """
    try:
        audio = MutagenFile(file_path)
    except Exception as e:
        raise ResourceError(f"Cannot probe {file_path}: {e}") from e
    
    if audio is None or audio.info is None:
        raise ResourceError(f"Unrecognised audio stream: {file_path}")
    
    return float(getattr(audio.info, "length", 0.0) or 0.0)


class OutputHandle:
    """One loaded, device-bound playback session."""
    
    def __init__(self, path: Path, start_offset: float):
        self.path = path
        self.start_offset = start_offset
        self.active = True
    
    def __repr__(self) -> str:
        state = "active" if self.active else "stopped"
        return f"OutputHandle({self.path.name!r}, offset={self.start_offset}, {state})"


class AudioPlayer:
    """Audio output service backed by pygame.mixer.
    
    pygame streams music through a single channel, so at most one handle is
    live at a time. Opening a new handle stops the previous one.
    """
    
    def __init__(self):
        self._current: OutputHandle | None = None
    
    def _ensure_mixer(self) -> None:
        if pygame.mixer.get_init() is not None:
            return
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=NUM_CHANNELS, buffer=BUFFER_SIZE)
            logger.info("Audio mixer initialised")
        except pygame.error as e:
            raise ResourceError(f"Audio output device unavailable: {e}") from e
    
    def open(self, path: Path, start_offset: float = 0.0, paused: bool = False) -> OutputHandle:
        """Load a file and start playing it at start_offset seconds.
        
        With paused=True the stream is positioned and left paused, muted
        until then so no audio escapes.
        
        Raises:
            ResourceError: If the device, the file or its decoder fails.
        """
        self._ensure_mixer()
        
        if self._current is not None:
            self.stop(self._current)
        
        try:
            pygame.mixer.music.load(str(path))
        except (pygame.error, OSError) as e:
            raise ResourceError(f"Cannot load {path}: {e}") from e
        
        if paused:
            volume = pygame.mixer.music.get_volume()
            pygame.mixer.music.set_volume(0.0)
            try:
                self._play(path, start_offset)
                pygame.mixer.music.pause()
            except pygame.error as e:
                pygame.mixer.music.unload()
                raise ResourceError(f"Cannot pause {path}: {e}") from e
            finally:
                pygame.mixer.music.set_volume(volume)
        else:
            self._play(path, start_offset)
        
        handle = OutputHandle(Path(path), start_offset)
        self._current = handle
        logger.info(f"{'Loaded paused' if paused else 'Started playback'}: {path} at {start_offset}s")
        return handle
    
    @staticmethod
    def _play(path: Path, start_offset: float) -> None:
        try:
            pygame.mixer.music.play(start=start_offset)
        except pygame.error as e:
            if start_offset <= 0:
                pygame.mixer.music.unload()
                raise ResourceError(f"Cannot play {path}: {e}") from e
            logger.warning(f"Cannot seek to {start_offset}s in {path}, playing from start: {e}")
            try:
                pygame.mixer.music.play()
            except pygame.error as e:
                pygame.mixer.music.unload()
                raise ResourceError(f"Cannot play {path}: {e}") from e
    
    def pause(self, handle: OutputHandle) -> None:
        if self._is_live(handle):
            self._mixer_call(pygame.mixer.music.pause)
    
    def resume(self, handle: OutputHandle) -> None:
        if self._is_live(handle):
            self._mixer_call(pygame.mixer.music.unpause)
    
    def stop(self, handle: OutputHandle) -> None:
        """Stop playback and release the loaded stream."""
        if not self._is_live(handle):
            handle.active = False
            return
        try:
            pygame.mixer.music.stop()
            pygame.mixer.music.unload()
        except pygame.error as e:
            logger.warning(f"Error stopping playback of {handle.path}: {e}")
        finally:
            handle.active = False
            self._current = None
            logger.info(f"Stopped playback: {handle.path}")
    
    def shutdown(self) -> None:
        """Release the output device."""
        if self._current is not None:
            self.stop(self._current)
        if pygame.mixer.get_init() is not None:
            pygame.mixer.quit()
            logger.info("Audio mixer shut down")
    
    def _is_live(self, handle: OutputHandle) -> bool:
        return handle.active and handle is self._current
    
    @staticmethod
    def _mixer_call(func) -> None:
        try:
            func()
        except pygame.error as e:
            raise ResourceError(f"Audio output failed: {e}") from e
