__all__ = (
    "Config",
    "LoggingConfig",
    "TaggingConfig",
    # Records
    "TagRecord",
    # Parsers
    "FormatParser",
    "ID3Parser",
    "VorbisParser",
    "MP4Parser",
    "ReadOnlyParser",
    "ParserSelector",
    "select_parser",
    "describe_format",
    "TagEditorError",
    "ParseError",
    "WriteError",
    # Updates
    "TagUpdateService",
    "UpdateResult",
    "UpdateStatus",
    "set_tags",
    # Logging
    "configure_logging",
    "configure_logging_from_config",
)

from tag_editor.config import Config, LoggingConfig, TaggingConfig
from tag_editor.parsers import (
    FormatParser,
    ID3Parser,
    MP4Parser,
    ParseError,
    ParserSelector,
    ReadOnlyParser,
    TagEditorError,
    VorbisParser,
    WriteError,
    describe_format,
    select_parser,
)
from tag_editor.records import TagRecord
from tag_editor.safe_logging import configure_logging, configure_logging_from_config
from tag_editor.service import TagUpdateService, UpdateResult, UpdateStatus, set_tags
