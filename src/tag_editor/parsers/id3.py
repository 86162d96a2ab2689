"""ID3v2 parser for MPEG audio files."""

from __future__ import annotations

from pathlib import Path

from mutagen.id3 import (
    ID3,
    TALB,
    TCON,
    TDRC,
    TIT2,
    TPE1,
    TRCK,
    TYER,
    Encoding,
    ID3NoHeaderError,
)
from mutagen.id3 import Frame as ID3Frame
from mutagen.mp3 import MP3

from tag_editor.parsers.base import (
    FormatParser,
    clean_text,
    merge_track,
    merge_year,
    parse_number,
    parse_track,
)
from tag_editor.records import TagRecord


class ID3Parser(FormatParser):
    """
    Parser for ID3v2 tags (MP3).

    Only the TPE1, TALB, TIT2, TCON, TRCK and year frames are rewritten.
    Pictures, comments, TXXX frames and any frame mutagen does not know
    are saved back untouched.

    Tags are loaded without mutagen's v2.4 translation and saved in the
    version found in the file, so frames of the other version survive and
    TCON text is stored and compared literally ("17" stays "17"). The
    configured version applies to files that have no ID3v2 tag yet.
    """

    name = "id3"
    extensions = (".mp3", ".mp2")
    containers = (MP3,)

    def __init__(self, read_only: bool = False, verify_writes: bool = True, id3_version: int = 4):
        super().__init__(read_only=read_only, verify_writes=verify_writes)
        self.id3_version = id3_version

    def _read(self, file_path: Path) -> TagRecord:
        tags, _version = self._load(file_path)
        if tags is None:
            return TagRecord()

        return TagRecord(
            track_number=parse_track(self._text(tags, "TRCK")),
            artist=clean_text(self._text(tags, "TPE1")),
            album=clean_text(self._text(tags, "TALB")),
            title=clean_text(self._text(tags, "TIT2")),
            year=parse_number(self._text(tags, "TDRC") or self._text(tags, "TYER")),
            genre=clean_text(self._text(tags, "TCON")),
        )

    def _write(self, file_path: Path, record: TagRecord) -> None:
        tags, version = self._load(file_path)
        if tags is None:
            tags = ID3()

        # v2.3 has no TDRC; its year lives in TYER
        year_cls, stray_cls = (TDRC, TYER) if version == 4 else (TYER, TDRC)
        tags.delall(stray_cls.__name__)

        self._set(tags, TPE1, record.artist, version)
        self._set(tags, TALB, record.album, version)
        self._set(tags, TIT2, record.title, version)
        self._set(tags, TCON, record.genre, version)
        self._set(
            tags, TRCK, merge_track(self._text(tags, "TRCK"), record.track_number), version
        )
        self._set(
            tags, year_cls, merge_year(self._text(tags, year_cls.__name__), record.year), version
        )

        tags.save(file_path, v2_version=version)

    def _load(self, file_path: Path) -> tuple[ID3 | None, int]:
        """Load the tag untranslated, with the ID3v2 minor version to save it as."""
        try:
            tags = ID3(file_path, translate=False)
        except ID3NoHeaderError:
            return None, self.id3_version

        if tags.version >= (2, 3, 0):
            return tags, tags.version[1]

        # v2.2 (or a bare ID3v1 tag) cannot be saved as is
        tags.update_to_v24()
        if self.id3_version == 3:
            tags.update_to_v23()
        return tags, self.id3_version

    @staticmethod
    def _text(tags: ID3, frame_id: str) -> str | None:
        frame = tags.get(frame_id)
        if frame is None or not frame.text:
            return None
        return str(frame.text[0])

    @staticmethod
    def _set(tags: ID3, frame_cls: type[ID3Frame], value: str | None, version: int) -> None:
        frame_id = frame_cls.__name__
        if value is None:
            tags.delall(frame_id)
            return

        encoding = Encoding.UTF8 if version == 4 else Encoding.UTF16
        frame = tags.get(frame_id)
        if frame is None or not frame.text:
            tags.delall(frame_id)
            tags.add(frame_cls(encoding=encoding, text=[value]))
            return
        if str(frame.text[0]) == value:
            return
        # Only the first value is modeled; further values stay
        frame.encoding = encoding
        frame.text = [value, *frame.text[1:]]
