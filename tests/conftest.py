import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from models.track import Track, TrackMetadata
from services.errors import ResourceError
from services.music_library import Library
from services.transport import Transport


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeHandle:
    def __init__(self, path: Path, offset: float):
        self.path = path
        self.offset = offset
        self.state = "playing"


class FakeOutput:
    """Records output calls and checks that only one handle is live."""

    def __init__(self):
        self.handles: list[FakeHandle] = []
        self.calls: list[tuple] = []
        self.failing_paths: set[Path] = set()
        self.fail_resume = False
        self.overlapping_opens = 0

    @property
    def live(self) -> list[FakeHandle]:
        return [h for h in self.handles if h.state != "stopped"]

    def open(self, path, start_offset=0.0, paused=False):
        self.calls.append(("open", Path(path).name, start_offset))
        if self.live:
            self.overlapping_opens += 1
        if Path(path) in self.failing_paths:
            raise ResourceError(f"cannot decode {path}")
        handle = FakeHandle(Path(path), start_offset)
        if paused:
            handle.state = "paused"
        self.handles.append(handle)
        return handle

    def pause(self, handle):
        self.calls.append(("pause", handle.path.name))
        handle.state = "paused"

    def resume(self, handle):
        self.calls.append(("resume", handle.path.name))
        if self.fail_resume:
            raise ResourceError("device lost")
        handle.state = "playing"

    def stop(self, handle):
        self.calls.append(("stop", handle.path.name))
        handle.state = "stopped"


def make_track(name: str, duration: float = 30.0, title: str | None = None) -> Track:
    return Track(
        path=Path(f"/music/{name}.mp3"),
        duration=duration,
        metadata=TrackMetadata(title=title or name),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def output():
    return FakeOutput()


@pytest.fixture
def library():
    return Library([make_track("a"), make_track("b"), make_track("c")])


@pytest.fixture
def transport(library, output, clock):
    return Transport(library, output, clock=clock)


@pytest.fixture
def temp_music_dir(tmp_path):
    """Create a temporary music directory with test files."""
    music_dir = tmp_path / "music"
    music_dir.mkdir()
    (music_dir / "subdir").mkdir()

    (music_dir / "test1.mp3").touch()
    (music_dir / "test2.FLAC").touch()
    (music_dir / "test3.ogg").touch()
    (music_dir / "test4.txt").touch()
    (music_dir / "subdir" / "nested.mp3").touch()

    return music_dir
