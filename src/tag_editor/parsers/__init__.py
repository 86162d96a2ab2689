"""Format parsers for audio tag blocks."""

from tag_editor.parsers.base import FormatParser, ParseError, TagEditorError, WriteError
from tag_editor.parsers.factory import ParserSelector, describe_format, select_parser
from tag_editor.parsers.id3 import ID3Parser
from tag_editor.parsers.mp4 import MP4Parser
from tag_editor.parsers.readonly import ReadOnlyParser
from tag_editor.parsers.vorbis import VorbisParser

__all__ = [
    "FormatParser",
    "ID3Parser",
    "MP4Parser",
    "ParseError",
    "ParserSelector",
    "ReadOnlyParser",
    "TagEditorError",
    "VorbisParser",
    "WriteError",
    "describe_format",
    "select_parser",
]
