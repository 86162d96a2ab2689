from __future__ import annotations

import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class TaggingConfig(BaseModel):
    """Tag writing configuration."""

    # ID3v2 minor version used when saving MP3 tags (3 or 4)
    id3_version: int = Field(default=4, ge=3, le=4)

    # Parser names ("id3", "vorbis", "mp4") whose formats are never rewritten
    read_only_formats: list[str] = Field(default_factory=list)

    # Re-parse the staged copy before it replaces the original
    verify_writes: bool = Field(default=True)

    @field_validator("read_only_formats")
    @classmethod
    def _lowercase_formats(cls, value: list[str]) -> list[str]:
        return [name.strip().lower() for name in value if name.strip()]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING")  # DEBUG, INFO, WARNING, ERROR
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    hash_paths: bool = Field(default=False)

    # Logged file paths inside this directory are shown relative to it
    library_root: Path | None = Field(default=None)


class Config(BaseModel):
    """
    Main configuration for tag-editor.

    Loads from TOML file with optional environment variable overrides.
    """

    tagging: TaggingConfig = Field(default_factory=TaggingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """
        Load configuration from TOML file with environment variable overrides.

        Environment variables take precedence and follow the pattern:
        TAG_EDITOR_<SECTION>_<KEY> (e.g., TAG_EDITOR_TAGGING_ID3_VERSION)

        All values are gathered into a single dictionary first, then validated
        by Pydantic to ensure consistent type checking and coercion.
        """
        config_dict: dict[str, object] = {}

        if config_path and config_path.exists():
            config_dict = tomllib.loads(config_path.read_text())

        config_dict = cls._merge_env_overrides(config_dict)
        return cls.model_validate(config_dict)

    @classmethod
    def _merge_env_overrides(cls, config_dict: dict[str, object]) -> dict[str, object]:
        """
        Merge environment variable overrides into config dictionary.

        Returns a new dictionary with env vars applied, ready for Pydantic validation.
        """
        env_prefix = "TAG_EDITOR_"

        tagging = config_dict.setdefault("tagging", {})
        if not isinstance(tagging, dict):
            tagging = {}
            config_dict["tagging"] = tagging

        if id3_version := os.getenv(f"{env_prefix}TAGGING_ID3_VERSION"):
            tagging["id3_version"] = id3_version
        if read_only := os.getenv(f"{env_prefix}TAGGING_READ_ONLY_FORMATS"):
            tagging["read_only_formats"] = read_only.split(",")
        if verify_writes := os.getenv(f"{env_prefix}TAGGING_VERIFY_WRITES"):
            tagging["verify_writes"] = verify_writes.lower() in ("true", "1", "yes")

        logging_config = config_dict.setdefault("logging", {})
        if not isinstance(logging_config, dict):
            logging_config = {}
            config_dict["logging"] = logging_config

        if log_level := os.getenv(f"{env_prefix}LOGGING_LEVEL"):
            logging_config["level"] = log_level
        if log_format := os.getenv(f"{env_prefix}LOGGING_FORMAT"):
            logging_config["format"] = log_format
        if log_hash_paths := os.getenv(f"{env_prefix}LOGGING_HASH_PATHS"):
            logging_config["hash_paths"] = log_hash_paths.lower() in ("true", "1", "yes")
        if library_root := os.getenv(f"{env_prefix}LOGGING_LIBRARY_ROOT"):
            logging_config["library_root"] = library_root

        return config_dict
