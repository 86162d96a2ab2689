"""
Format parser base class and shared value helpers.

Each supported tag format has one FormatParser subclass. Parsers read the
six modeled fields into a TagRecord and write a TagRecord back, leaving
every other frame, comment and audio byte of the file as it was.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, ClassVar

import mutagen
from mutagen import FileType, MutagenError

from tag_editor.records import TagRecord

logger = logging.getLogger(__name__)

_LEADING_NUMBER_RE = re.compile(r"\s*(\d+)")


class TagEditorError(Exception):
    """Base class for tag read/write failures."""


class ParseError(TagEditorError):
    """The file's tag container is structurally invalid or unreadable."""


class WriteError(TagEditorError):
    """The new tag block could not be written; the original file is unchanged."""


def clean_text(value: Any) -> str | None:
    """Stringify a stored tag value; blank values become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_number(value: Any) -> int | None:
    """
    Read the leading integer of a stored value.

    Handles "7", "7/12" and "2000-05-01". Values without a leading digit
    are treated as absent.
    """
    if value is None:
        return None
    match = _LEADING_NUMBER_RE.match(str(value))
    return int(match.group(1)) if match else None


def parse_track(value: Any) -> int | None:
    """Read a stored track number; 0 is how several containers say "not set"."""
    return parse_number(value) or None


def merge_track(existing: str | None, track_number: int | None) -> str | None:
    """Render a track number, keeping the "/total" part of the stored value."""
    if track_number is None:
        return None
    total = None
    if existing and "/" in existing:
        total = existing.split("/", 1)[1].strip()
    return f"{track_number}/{total}" if total else str(track_number)


def merge_year(existing: str | None, year: int | None) -> str | None:
    """Render a year, keeping a stored full date whose year is unchanged."""
    if year is None:
        return None
    if existing and parse_number(existing) == year:
        return existing
    return str(year)


class FormatParser(ABC):
    """
    Abstract base class for format-specific tag parsers.

    Subclasses implement _read() and _write(); this class owns error
    translation and the staged, atomic replacement of the file.
    """

    name: ClassVar[str]
    extensions: ClassVar[tuple[str, ...]] = ()
    editable: ClassVar[bool] = True
    # mutagen classes a file must load as for this parser to handle it
    containers: ClassVar[tuple[type[FileType], ...]] = ()

    def __init__(self, read_only: bool = False, verify_writes: bool = True):
        self.read_only = read_only
        self.verify_writes = verify_writes

    def __repr__(self) -> str:
        return f"{type(self).__name__}(read_only={self.read_only})"

    def is_editing_supported(self) -> bool:
        return self.editable and not self.read_only

    @classmethod
    def recognizes(cls, file_path: Path) -> bool:
        """Whether mutagen loads ``file_path`` as one of this parser's containers."""
        try:
            audio = mutagen.File(file_path)
        except (OSError, MutagenError):
            return False
        return isinstance(audio, cls.containers)

    def read_tags(self, file_path: Path | str) -> TagRecord:
        """
        Read the modeled fields from a file.

        Raises:
            ParseError: If the container cannot be parsed
        """
        file_path = Path(file_path)
        try:
            return self._read(file_path)
        except (OSError, MutagenError) as exc:
            raise ParseError(f"Failed to read tags from {file_path.name}: {exc}") from exc

    def write_tags(self, file_path: Path | str, record: TagRecord) -> None:
        """
        Replace the modeled fields of a file with ``record``.

        The new tag block is written to a copy next to the original, which
        then replaces the original in a single rename.

        Raises:
            WriteError: If editing is unsupported or the write fails
        """
        file_path = Path(file_path)
        if not self.is_editing_supported():
            kind = file_path.suffix.lower().lstrip(".") or self.name
            raise WriteError(f"Tag editing of {kind} files is not supported")

        staged = self._stage_copy(file_path)
        replaced = False
        try:
            self._write(staged, record)
            if self.verify_writes:
                self.read_tags(staged)
            os.replace(staged, file_path)
            replaced = True
        except (OSError, UnicodeError, MutagenError, ParseError) as exc:
            raise WriteError(f"Failed to write tags to {file_path.name}: {exc}") from exc
        finally:
            if not replaced:
                staged.unlink(missing_ok=True)

        logger.debug("Wrote %s tags to %s", self.name, file_path)

    @abstractmethod
    def _read(self, file_path: Path) -> TagRecord:
        """Parse the modeled fields. mutagen and OS errors may propagate."""

    @abstractmethod
    def _write(self, file_path: Path, record: TagRecord) -> None:
        """Rewrite the modeled fields of ``file_path`` in place and save."""

    def _open(self, file_path: Path) -> FileType:
        """Load a file through mutagen's container detection."""
        audio = mutagen.File(file_path)
        if audio is None or not isinstance(audio, self.containers):
            raise ParseError(f"{file_path.name} is not a recognised {self.name} container")
        return audio

    @staticmethod
    def _stage_copy(file_path: Path) -> Path:
        try:
            with NamedTemporaryFile(
                delete=False,
                dir=file_path.parent,
                prefix=f".{file_path.stem}.",
                suffix=file_path.suffix,
            ) as tmp:
                staged = Path(tmp.name)
        except OSError as exc:
            raise WriteError(f"Failed to stage a copy of {file_path.name}: {exc}") from exc

        try:
            shutil.copy2(file_path, staged)
        except OSError as exc:
            staged.unlink(missing_ok=True)
            raise WriteError(f"Failed to stage a copy of {file_path.name}: {exc}") from exc
        return staged
