"""Read-only parser for ASF (WMA) attributes and APEv2 tags."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from mutagen import FileType
from mutagen.apev2 import APEv2File
from mutagen.asf import ASF

from tag_editor.parsers.base import (
    FormatParser,
    WriteError,
    clean_text,
    parse_number,
    parse_track,
)
from tag_editor.records import TagRecord

ASF_KEYS = {
    "artist": "Author",
    "album": "WM/AlbumTitle",
    "title": "Title",
    "genre": "WM/Genre",
    "year": "WM/Year",
    "track_number": "WM/TrackNumber",
}

APE_KEYS = {
    "artist": "Artist",
    "album": "Album",
    "title": "Title",
    "genre": "Genre",
    "year": "Year",
    "track_number": "Track",
}


class ReadOnlyParser(FormatParser):
    """
    Parser for containers whose tags are shown but never rewritten.

    Covers Windows Media (ASF) and the APEv2-tagged formats: Monkey's
    Audio, Musepack and WavPack.
    """

    name = "readonly"
    extensions = (".wma", ".asf", ".ape", ".mpc", ".mp+", ".wv")
    editable = False
    containers = (ASF, APEv2File)

    def _read(self, file_path: Path) -> TagRecord:
        audio = self._open(file_path)
        keys = ASF_KEYS if isinstance(audio, ASF) else APE_KEYS

        if audio.tags is None:
            return TagRecord()

        values = {field: self._first(audio, key) for field, key in keys.items()}
        track_number = parse_track(values.pop("track_number"))
        if track_number is None and isinstance(audio, ASF):
            # WM/Track is the zero-based predecessor of WM/TrackNumber
            legacy = parse_number(self._first(audio, "WM/Track"))
            track_number = legacy + 1 if legacy is not None else None

        return TagRecord(
            track_number=track_number,
            year=parse_number(values.pop("year")),
            **{field: clean_text(value) for field, value in values.items()},
        )

    def _write(self, file_path: Path, record: TagRecord) -> None:
        raise WriteError(f"{file_path.name} is a read-only container")

    @staticmethod
    def _first(audio: FileType, key: str) -> Any:
        values = audio.tags.get(key)
        if not values:
            return None
        # APEv2 text items hold several values separated by NUL
        return str(values[0] if isinstance(values, list) else values).split("\0")[0]
