from types import SimpleNamespace

import pytest

from services import metadata_resolver
from services.metadata_resolver import MetadataResolver


class FakeAudio:
    def __init__(self, tags=None, info=None):
        self.tags = tags
        self.info = info


class TestMetadataResolver:
    """Tests for MetadataResolver.resolve()."""

    def test_unreadable_file_uses_filename(self, tmp_path):
        """Test that an empty placeholder file falls back to its name."""
        path = tmp_path / "Some Band - Some Song.mp3"
        path.touch()

        metadata = MetadataResolver().resolve(path)

        assert metadata.title == "Some Song"
        assert metadata.artist == "Some Band"
        assert metadata.album is None

    def test_missing_file_uses_filename(self, tmp_path):
        metadata = MetadataResolver().resolve(tmp_path / "gone.flac")
        assert metadata.title == "gone"
        assert metadata.artist is None

    def test_tags_and_properties(self, tmp_path, monkeypatch):
        """Test that easy tags and stream info are mapped."""
        audio = FakeAudio(
            tags={
                "title": ["Title"],
                "artist": ["Artist"],
                "album": ["Album"],
                "date": ["1999"],
                "genre": ["Jazz"],
                "tracknumber": ["4/12"],
            },
            info=SimpleNamespace(length=200.0, bitrate=320000, sample_rate=44100, channels=2),
        )
        monkeypatch.setattr(metadata_resolver, "MutagenFile", lambda path, easy: audio)

        metadata = MetadataResolver().resolve(tmp_path / "file.mp3")

        assert metadata.title == "Title"
        assert metadata.artist == "Artist"
        assert metadata.album == "Album"
        assert metadata.year == "1999"
        assert metadata.genre == "Jazz"
        assert metadata.track_number == 4
        assert metadata.bitrate == 320
        assert metadata.sample_rate == 44100
        assert metadata.channels == 2

    def test_artist_tag_without_title(self, tmp_path, monkeypatch):
        """Test that a tag artist wins over the file name split."""
        audio = FakeAudio(tags={"artist": ["Tagged"]}, info=None)
        monkeypatch.setattr(metadata_resolver, "MutagenFile", lambda path, easy: audio)

        metadata = MetadataResolver().resolve(tmp_path / "Name - Song.ogg")

        assert metadata.title == "Song"
        assert metadata.artist == "Tagged"

    def test_info_without_bitrate(self, tmp_path, monkeypatch):
        audio = FakeAudio(tags=None, info=SimpleNamespace(length=1.0, sample_rate=48000, channels=1))
        monkeypatch.setattr(metadata_resolver, "MutagenFile", lambda path, easy: audio)

        metadata = MetadataResolver().resolve(tmp_path / "x.wav")

        assert metadata.bitrate is None
        assert metadata.sample_rate == 48000
        assert metadata.channels == 1

    @pytest.mark.parametrize("value,expected", [("7", 7), ("3/10", 3), ("", None), ("A1", None), (None, None)])
    def test_parse_track_number(self, value, expected):
        assert metadata_resolver._parse_track_number(value) == expected
