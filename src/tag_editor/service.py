"""
Tag update orchestration.

TagUpdateService runs one read-compare-write attempt per call:

    resolve parser -> check editing support -> read existing tags
        -> compare with proposal -> SKIPPED | write -> UPDATED

Unsupported formats and failures are reported through UpdateResult, never
raised. Callers updating the same file concurrently must serialize the
calls themselves (e.g. with a lock per path); this module keeps no state
between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from tag_editor.config import TaggingConfig
from tag_editor.parsers.base import ParseError, WriteError
from tag_editor.parsers.factory import ParserSelector, describe_format
from tag_editor.records import TagRecord

logger = logging.getLogger(__name__)


class UpdateStatus(StrEnum):
    """Terminal states of a tag update."""

    SKIPPED = "SKIPPED"
    UPDATED = "UPDATED"
    UNSUPPORTED = "UNSUPPORTED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of one tag update, rendered verbatim to operators by str()."""

    status: UpdateStatus
    message: str | None = None

    @classmethod
    def skipped(cls) -> UpdateResult:
        return cls(UpdateStatus.SKIPPED)

    @classmethod
    def updated(cls) -> UpdateResult:
        return cls(UpdateStatus.UPDATED)

    @classmethod
    def unsupported(cls, format_description: str) -> UpdateResult:
        return cls(
            UpdateStatus.UNSUPPORTED,
            f"Tag editing of {format_description} files is not supported.",
        )

    @classmethod
    def failed(cls, reason: str) -> UpdateResult:
        return cls(UpdateStatus.FAILED, reason)

    def __str__(self) -> str:
        return self.message or self.status.value


class TagUpdateService:
    """Updates the descriptive tags of audio files."""

    def __init__(
        self,
        config: TaggingConfig | None = None,
        selector: ParserSelector | None = None,
    ):
        self.selector = selector or ParserSelector(config)

    def set_tags(
        self,
        path: Path | str,
        track: str | None = None,
        artist: str | None = None,
        album: str | None = None,
        title: str | None = None,
        year: str | None = None,
        genre: str | None = None,
    ) -> UpdateResult:
        """
        Update tags from raw form input.

        Blank values mean "no value". Malformed track or year values are
        logged and ignored rather than failing the update.
        """
        proposed = TagRecord.from_input(
            track=track, artist=artist, album=album, title=title, year=year, genre=genre
        )
        return self.update(path, proposed)

    def update(self, path: Path | str, proposed: TagRecord) -> UpdateResult:
        """
        Write ``proposed`` to the file unless its tags already match.

        Args:
            path: Audio file, validated for existence by the caller
            proposed: Normalized tags to apply

        Returns:
            UpdateResult with status SKIPPED, UPDATED, UNSUPPORTED or FAILED
        """
        path = Path(path)

        parser = self.selector.select(path)
        if parser is None or not parser.is_editing_supported():
            logger.debug("Tag editing not supported for %s", path)
            return UpdateResult.unsupported(describe_format(path))

        try:
            existing = parser.read_tags(path)
        except ParseError as exc:
            logger.warning("Failed to update tags for %s: %s", path, exc)
            return UpdateResult.failed(str(exc))

        if existing == proposed:
            logger.debug("Tags of %s already up to date", path)
            return UpdateResult.skipped()

        logger.debug("Updating %s for %s", ", ".join(proposed.diff(existing)), path)
        try:
            parser.write_tags(path, proposed)
        except WriteError as exc:
            logger.warning("Failed to update tags for %s: %s", path, exc)
            return UpdateResult.failed(str(exc))

        if proposed.is_empty:
            logger.info("Removed all tags from %s", path)
        else:
            logger.info("Updated tags for %s", path)
        return UpdateResult.updated()

    def read(self, path: Path | str) -> TagRecord | None:
        """
        Read the current tags of a file, e.g. to pre-fill an edit form.

        Returns:
            TagRecord, or None if the format is not supported

        Raises:
            ParseError: If the file's tag container is corrupt
        """
        parser = self.selector.select(path)
        if parser is None:
            return None
        return parser.read_tags(path)


def set_tags(
    path: Path | str,
    track: str | None = None,
    artist: str | None = None,
    album: str | None = None,
    title: str | None = None,
    year: str | None = None,
    genre: str | None = None,
    config: TaggingConfig | None = None,
) -> UpdateResult:
    """
    Update tags of one audio file.

    Convenience wrapper around TagUpdateService.set_tags().
    """
    service = TagUpdateService(config)
    return service.set_tags(
        path, track=track, artist=artist, album=album, title=title, year=year, genre=genre
    )
