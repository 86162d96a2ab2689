"""Vorbis comment parser for FLAC and Ogg files."""

from __future__ import annotations

from pathlib import Path

from mutagen import FileType
from mutagen.flac import FLAC
from mutagen.oggflac import OggFLAC
from mutagen.oggopus import OggOpus
from mutagen.oggspeex import OggSpeex
from mutagen.oggvorbis import OggVorbis

from tag_editor.parsers.base import (
    FormatParser,
    clean_text,
    merge_track,
    merge_year,
    parse_number,
    parse_track,
)
from tag_editor.records import TagRecord

VORBIS_CONTAINERS = (FLAC, OggVorbis, OggOpus, OggFLAC, OggSpeex)


class VorbisParser(FormatParser):
    """
    Parser for Vorbis comments (FLAC, Ogg Vorbis, Opus, Speex).

    Comments are free-form KEY=value pairs; keys are case-insensitive and
    may repeat. Keys other than the six below are left alone.
    """

    name = "vorbis"
    extensions = (".flac", ".ogg", ".oga", ".opus", ".spx")
    containers = VORBIS_CONTAINERS

    FIELD_KEYS = {
        "artist": "ARTIST",
        "album": "ALBUM",
        "title": "TITLE",
        "genre": "GENRE",
    }

    def _read(self, file_path: Path) -> TagRecord:
        audio = self._open(file_path)
        if audio.tags is None:
            return TagRecord()

        values = {
            field: clean_text(self._first(audio, key)) for field, key in self.FIELD_KEYS.items()
        }
        date = self._first(audio, "DATE") or self._first(audio, "YEAR")
        return TagRecord(
            track_number=parse_track(self._first(audio, "TRACKNUMBER")),
            year=parse_number(date),
            **values,
        )

    def _write(self, file_path: Path, record: TagRecord) -> None:
        audio = self._open(file_path)
        if audio.tags is None:
            audio.add_tags()

        for field, key in self.FIELD_KEYS.items():
            self._set(audio, key, getattr(record, field))
        track = merge_track(self._first(audio, "TRACKNUMBER"), record.track_number)
        self._set(audio, "TRACKNUMBER", track)
        self._set(audio, "DATE", merge_year(self._first(audio, "DATE"), record.year))
        if record.year is None:
            self._set(audio, "YEAR", None)

        audio.save()

    @staticmethod
    def _first(audio: FileType, key: str) -> str | None:
        values = audio.tags.get(key) if audio.tags is not None else None
        return values[0] if values else None

    @staticmethod
    def _set(audio: FileType, key: str, value: str | None) -> None:
        if value is None:
            if key in audio.tags:
                del audio.tags[key]
            return
        values = audio.tags.get(key) or []
        if values and values[0] == value:
            return
        # Only the first value is modeled; further values stay
        audio.tags[key] = [value, *values[1:]]
