"""Pytest configuration and shared fixtures for tag-editor tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from mutagen.flac import FLAC
from mutagen.id3 import COMM, ID3, TDRC, TPE1, TXXX
from mutagen.mp4 import MP4

from tests.audio_files import create_minimal_flac, create_minimal_m4a, create_minimal_mp3

# =============================================================================
# File fixtures
# =============================================================================


@pytest.fixture
def mp3_file(tmp_path: Path) -> Path:
    """An untagged MP3 file."""
    path = tmp_path / "song.mp3"
    create_minimal_mp3(path)
    return path


@pytest.fixture
def tagged_mp3(tmp_path: Path) -> Path:
    """An MP3 tagged {artist: "A", year: 2000} plus frames this library does not model."""
    path = tmp_path / "tagged.mp3"
    create_minimal_mp3(path)

    tags = ID3()
    tags.add(TPE1(encoding=3, text=["A"]))
    tags.add(TDRC(encoding=3, text=["2000"]))
    tags.add(COMM(encoding=3, lang="eng", desc="", text=["keep me"]))
    tags.add(TXXX(encoding=3, desc="MB_RECORDING_ID", text=["rec-123"]))
    tags.save(path)
    return path


@pytest.fixture
def flac_file(tmp_path: Path) -> Path:
    """A FLAC file without Vorbis comments."""
    path = tmp_path / "song.flac"
    create_minimal_flac(path)
    return path


@pytest.fixture
def tagged_flac(tmp_path: Path) -> Path:
    """A FLAC file with Vorbis comments, including ones this library does not model."""
    path = tmp_path / "tagged.flac"
    create_minimal_flac(path)

    audio = FLAC(path)
    audio.add_tags()
    audio["ARTIST"] = "A"
    audio["DATE"] = "2000"
    audio["TRACKNUMBER"] = "3/12"
    audio["COMMENT"] = "keep me"
    audio["MUSICBRAINZ_TRACKID"] = "rec-123"
    audio.save()
    return path


@pytest.fixture
def m4a_file(tmp_path: Path) -> Path:
    """An M4A file without ilst metadata."""
    path = tmp_path / "song.m4a"
    create_minimal_m4a(path)
    return path


@pytest.fixture
def tagged_m4a(tmp_path: Path) -> Path:
    """An M4A file with ilst atoms, including a freeform one this library does not model."""
    path = tmp_path / "tagged.m4a"
    create_minimal_m4a(path)

    audio = MP4(path)
    audio.add_tags()
    audio.tags["\xa9ART"] = ["A"]
    audio.tags["\xa9day"] = ["2000-05-01"]
    audio.tags["trkn"] = [(3, 12)]
    audio.tags["----:com.apple.iTunes:MusicBrainz Track Id"] = [b"rec-123"]
    audio.save()
    return path
