"""Tag record model and caller input normalization.

A TagRecord holds the six descriptive fields this library edits. Every
field is optional; ``None`` means "no value asserted". Blank caller input
is normalized to ``None`` before a record is compared or written.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?\d+")


def trim_to_none(value: str | None) -> str | None:
    """Strip surrounding whitespace; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_int(value: str | None, label: str) -> int | None:
    """
    Parse a caller-supplied integer field.

    Malformed input is not an error: it is logged and treated as absent so
    an update can still proceed on the remaining fields.
    """
    value = trim_to_none(value)
    if value is None:
        return None
    if not _INTEGER_RE.fullmatch(value):
        logger.warning("Illegal %s: %r", label, value)
        return None
    return int(value)


@dataclass(frozen=True)
class TagRecord:
    """Descriptive tags of one audio file."""

    track_number: int | None = None
    artist: str | None = None
    album: str | None = None
    title: str | None = None
    year: int | None = None
    genre: str | None = None

    @classmethod
    def from_input(
        cls,
        track: str | None = None,
        artist: str | None = None,
        album: str | None = None,
        title: str | None = None,
        year: str | None = None,
        genre: str | None = None,
    ) -> TagRecord:
        """
        Build a normalized record from raw caller strings.

        Args:
            track: Track number, e.g. "7"
            artist: Artist name
            album: Album name
            title: Song title
            year: Release year, e.g. "1975"
            genre: Musical genre

        Returns:
            TagRecord with blank text mapped to None and numbers parsed
        """
        # Track numbers start at 1; containers such as MP4 store 0 as "not set"
        track_number = parse_int(track, "track number")
        if track_number is not None and track_number < 1:
            logger.warning("Illegal track number: %r", track)
            track_number = None

        year_number = parse_int(year, "year")
        if year_number is not None and year_number < 0:
            logger.warning("Illegal year: %r", year)
            year_number = None

        return cls(
            track_number=track_number,
            artist=trim_to_none(artist),
            album=trim_to_none(album),
            title=trim_to_none(title),
            year=year_number,
            genre=trim_to_none(genre),
        )

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def diff(self, other: TagRecord) -> list[str]:
        """Names of the fields whose values differ from ``other``."""
        return [f.name for f in fields(self) if getattr(self, f.name) != getattr(other, f.name)]
