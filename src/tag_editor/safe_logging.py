"""Logging setup for tag-editor.

Log messages name the audio file being edited. SafeLogFormatter renders
those ``Path`` arguments in a short form, relative to the music library
or as a hash, so a library's directory layout does not end up in shared
logs. Plain string arguments are left alone.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from tag_editor.config import Config

LOGGER_NAME = "tag_editor"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Handler installed by configure_logging(), replaced on reconfiguration
_installed_handler: logging.Handler | None = None


def describe_path(
    file_path: PurePath | str,
    library_root: PurePath | str | None = None,
    hash_paths: bool = False,
) -> str:
    """
    Log-safe rendering of an audio file path.

    Args:
        file_path: File to describe
        library_root: Music library root; files inside it are shown relative to it
        hash_paths: Show a short SHA256 digest of the full path instead

    Returns:
        "file:<digest>", the path relative to the library root, or
        "<parent>/<name>" for files outside the library
    """
    path = PurePath(file_path)
    if hash_paths:
        return f"file:{hashlib.sha256(str(path).encode()).hexdigest()[:12]}"
    if library_root is not None and path.is_relative_to(library_root):
        return path.relative_to(library_root).as_posix()
    if path.parent.name:
        return f"{path.parent.name}/{path.name}"
    return path.name


class SafeLogFormatter(logging.Formatter):
    """Formatter that shortens ``Path`` arguments with describe_path()."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        hash_paths: bool = False,
        library_root: PurePath | str | None = None,
    ):
        super().__init__(fmt, datefmt)
        self.hash_paths = hash_paths
        self.library_root = library_root

    def format(self, record: logging.LogRecord) -> str:
        if record.args:
            # Other handlers must still see the original arguments
            record = logging.makeLogRecord(record.__dict__)
            record.args = self._render_args(record.args)
        return super().format(record)

    def _render_args(
        self, args: tuple[Any, ...] | Mapping[str, Any]
    ) -> tuple[Any, ...] | dict[str, Any]:
        if isinstance(args, Mapping):
            return {key: self._render(value) for key, value in args.items()}
        return tuple(self._render(arg) for arg in args)

    def _render(self, value: Any) -> Any:
        if isinstance(value, PurePath):
            return describe_path(value, self.library_root, self.hash_paths)
        return value


def configure_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    hash_paths: bool = False,
    library_root: Path | None = None,
    rich: bool = True,
    console: Console | None = None,
) -> logging.Logger:
    """Attach a path-safe handler to the tag_editor logger.

    Calling this again replaces the handler installed by the previous call.

    Args:
        level: Logging level
        format_string: Format for plain output; Rich output renders time and level itself
        hash_paths: Whether to hash file paths instead of shortening them
        library_root: Music library root that logged paths are made relative to
        rich: Use a Rich console handler instead of a plain stream handler
        console: Console for the Rich handler (defaults to stderr)

    Returns:
        The configured tag_editor logger
    """
    global _installed_handler

    handler: logging.Handler
    if rich:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        fmt = "%(message)s"
    else:
        handler = logging.StreamHandler()
        fmt = format_string or DEFAULT_FORMAT
    handler.setFormatter(
        SafeLogFormatter(fmt=fmt, hash_paths=hash_paths, library_root=library_root)
    )

    logger = logging.getLogger(LOGGER_NAME)
    if _installed_handler is not None:
        logger.removeHandler(_installed_handler)
        _installed_handler.close()
    logger.addHandler(handler)
    logger.setLevel(level)
    _installed_handler = handler
    return logger


def configure_logging_from_config(config: Config, rich: bool = True) -> logging.Logger:
    """Apply the [logging] section of a Config."""
    level = getattr(logging, config.logging.level.upper(), logging.WARNING)
    return configure_logging(
        level=level,
        format_string=config.logging.format,
        hash_paths=config.logging.hash_paths,
        library_root=config.logging.library_root,
        rich=rich,
    )
