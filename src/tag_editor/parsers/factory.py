"""
Parser selection for audio files.

Maps a file to a fresh FormatParser instance, by extension first and by
container signature when the extension is not registered.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tag_editor.config import TaggingConfig
from tag_editor.parsers.base import FormatParser
from tag_editor.parsers.id3 import ID3Parser
from tag_editor.parsers.mp4 import MP4Parser
from tag_editor.parsers.readonly import ReadOnlyParser
from tag_editor.parsers.vorbis import VorbisParser

logger = logging.getLogger(__name__)

PARSER_CLASSES: tuple[type[FormatParser], ...] = (
    ID3Parser,
    VorbisParser,
    MP4Parser,
    ReadOnlyParser,
)

EXTENSION_REGISTRY: dict[str, type[FormatParser]] = {
    ext: parser_cls for parser_cls in PARSER_CLASSES for ext in parser_cls.extensions
}

# ASF header object GUID
_ASF_MAGIC = b"\x30\x26\xb2\x75\x8e\x66\xcf\x11"

SNIFF_LENGTH = 12


def sniff_parser_class(header: bytes) -> type[FormatParser] | None:
    """Guess a container from its first bytes.

    Bare MPEG frame sync is not accepted: it cannot be told apart from
    other data (a UTF-16 byte order mark matches it).
    """
    if header.startswith(b"ID3"):
        return ID3Parser
    if header.startswith((b"fLaC", b"OggS")):
        return VorbisParser
    if header[4:8] == b"ftyp":
        return MP4Parser
    if header.startswith((_ASF_MAGIC, b"MAC ", b"MPCK", b"MP+", b"wvpk")):
        return ReadOnlyParser
    return None


def describe_format(file_path: Path | str) -> str:
    """Short format description used in operator-facing messages."""
    suffix = Path(file_path).suffix.lower().lstrip(".")
    return suffix or "unknown"


class ParserSelector:
    """
    Resolves the parser for a file.

    Nothing is cached: every call reads the current extension (and, if
    needed, the current file header) and builds a new parser.
    """

    def __init__(self, config: TaggingConfig | None = None):
        self.config = config or TaggingConfig()

    def select(self, file_path: Path | str) -> FormatParser | None:
        """
        Get the parser for a file.

        Returns:
            A new FormatParser, or None when the format is not supported
        """
        file_path = Path(file_path)
        parser_cls = EXTENSION_REGISTRY.get(file_path.suffix.lower())
        if parser_cls is None:
            parser_cls = self._sniff(file_path)
        if parser_cls is None:
            logger.debug("No tag parser for %s", file_path)
            return None

        parser = self._build(parser_cls)
        logger.debug("Selected %r for %s", parser, file_path)
        return parser

    def _sniff(self, file_path: Path) -> type[FormatParser] | None:
        try:
            with open(file_path, "rb") as f:
                header = f.read(SNIFF_LENGTH)
        except OSError as exc:
            logger.debug("Cannot sniff %s: %s", file_path, exc)
            return None
        parser_cls = sniff_parser_class(header)
        if parser_cls is None:
            return None
        # A matching signature alone is not enough; mutagen must load the file
        if not parser_cls.recognizes(file_path):
            logger.debug("%s looks like %s but does not load as one", file_path, parser_cls.name)
            return None
        return parser_cls

    def _build(self, parser_cls: type[FormatParser]) -> FormatParser:
        read_only = parser_cls.name in self.config.read_only_formats
        if parser_cls is ID3Parser:
            return ID3Parser(
                read_only=read_only,
                verify_writes=self.config.verify_writes,
                id3_version=self.config.id3_version,
            )
        return parser_cls(read_only=read_only, verify_writes=self.config.verify_writes)


def select_parser(
    file_path: Path | str, config: TaggingConfig | None = None
) -> FormatParser | None:
    """Get the parser for a file using a default or given tagging config."""
    return ParserSelector(config).select(file_path)
