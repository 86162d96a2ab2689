"""iTunes-style metadata parser for MPEG-4 audio."""

from __future__ import annotations

from pathlib import Path

from mutagen.mp4 import MP4

from tag_editor.parsers.base import FormatParser, clean_text, merge_year, parse_number
from tag_editor.records import TagRecord


class MP4Parser(FormatParser):
    """
    Parser for MP4/M4A ilst atoms.

    mutagen converts the legacy numeric "gnre" atom to a text "\\xa9gen"
    atom on load, so genre is always read from "\\xa9gen".
    """

    name = "mp4"
    extensions = (".m4a", ".m4b", ".mp4")
    containers = (MP4,)

    ATOMS = {
        "artist": "\xa9ART",
        "album": "\xa9alb",
        "title": "\xa9nam",
        "genre": "\xa9gen",
    }

    def _read(self, file_path: Path) -> TagRecord:
        audio = self._open(file_path)
        if audio.tags is None:
            return TagRecord()

        values = {
            field: clean_text(self._first(audio, atom)) for field, atom in self.ATOMS.items()
        }
        track, _total = self._track(audio)
        return TagRecord(
            track_number=track,
            year=parse_number(self._first(audio, "\xa9day")),
            **values,
        )

    def _write(self, file_path: Path, record: TagRecord) -> None:
        audio = self._open(file_path)
        if audio.tags is None:
            audio.add_tags()

        for field, atom in self.ATOMS.items():
            self._set(audio, atom, getattr(record, field))
        self._set(audio, "\xa9day", merge_year(self._first(audio, "\xa9day"), record.year))

        if record.track_number is None:
            audio.tags.pop("trkn", None)
        else:
            _track, total = self._track(audio)
            audio.tags["trkn"] = [(record.track_number, total)]

        audio.save()

    @staticmethod
    def _first(audio: MP4, atom: str) -> str | None:
        values = audio.tags.get(atom) if audio.tags is not None else None
        return str(values[0]) if values else None

    @staticmethod
    def _track(audio: MP4) -> tuple[int | None, int]:
        values = audio.tags.get("trkn") if audio.tags is not None else None
        if not values:
            return None, 0
        track, total = values[0]
        # 0 means "not set" inside the trkn atom
        return (track or None), total

    @staticmethod
    def _set(audio: MP4, atom: str, value: str | None) -> None:
        if value is None:
            audio.tags.pop(atom, None)
            return
        values = list(audio.tags.get(atom) or [])
        if values and values[0] == value:
            return
        audio.tags[atom] = [value, *values[1:]]
