"""EasyFS configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from easyfs.common.constants import (
    CONFIG_DIR_NAME,
    CONFIG_ENV_VAR,
    DEFAULT_COPY_BUFFER_SIZE,
    DEFAULT_DIR_MODE,
    DEFAULT_ENCODING,
    DEFAULT_FILE_MODE,
    DEFAULT_LOG_LEVEL,
)
from easyfs.fs.sizes import parse_size

logger = logging.getLogger("easyfs.config")


def parse_mode(value: Union[int, str]) -> int:
    """Parse a permission mode; strings are read as octal ('0755', '0o755', '755')."""
    if isinstance(value, int):
        return value
    text = value.strip().lower()
    if text.startswith("0o"):
        text = text[2:]
    return int(text, 8)


class Settings(BaseSettings):
    """EasyFS settings loaded from environment or config file."""

    model_config = SettingsConfigDict(env_prefix="EASYFS_")

    # Permissions
    dir_mode: int = Field(DEFAULT_DIR_MODE, description="Mode for auto-created directories (before umask)")
    file_mode: int = Field(DEFAULT_FILE_MODE, description="Permissions for newly created files (before umask)")

    # Copy
    copy_buffer_size: int = Field(
        DEFAULT_COPY_BUFFER_SIZE,
        description="Chunk size used when streaming a copy. "
        "Env: EASYFS_COPY_BUFFER_SIZE (supports suffixes: 64K, 4MB, etc.)",
    )
    copy_fsync: bool = Field(True, description="fsync the destination before a copy reports success")

    # Text
    encoding: str = Field(DEFAULT_ENCODING, description="Encoding for text reads and writes")

    # Logging
    log_level: str = Field(DEFAULT_LOG_LEVEL, description="Level for the 'easyfs' logger")

    @field_validator("dir_mode", "file_mode", mode="before")
    @classmethod
    def _octal_mode(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_mode(v)
        return v

    @field_validator("copy_buffer_size", mode="before")
    @classmethod
    def _sized(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_size(v)
        return v

    @field_validator("copy_buffer_size")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("copy_buffer_size must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level


def _parse_yaml_to_settings_dict(config: dict) -> dict:
    """Convert a parsed YAML config dict into a flat settings dict."""
    d: dict = {}

    if "permissions" in config:
        perms = config["permissions"] or {}
        if "dir_mode" in perms:
            d["dir_mode"] = parse_mode(perms["dir_mode"])
        if "file_mode" in perms:
            d["file_mode"] = parse_mode(perms["file_mode"])
    if "copy" in config:
        cp = config["copy"] or {}
        if "buffer_size" in cp:
            v = cp["buffer_size"]
            d["copy_buffer_size"] = parse_size(v) if isinstance(v, str) else v
        if "fsync" in cp:
            d["copy_fsync"] = cp["fsync"]
    if "text" in config:
        if "encoding" in (config["text"] or {}):
            d["encoding"] = config["text"]["encoding"]
    if "logging" in config:
        if "level" in (config["logging"] or {}):
            d["log_level"] = config["logging"]["level"]

    return d


# Paths searched in order when no explicit config is given.
_CONFIG_SEARCH_PATHS = [
    Path("./easyfs.yaml"),
    Path("./config/easyfs.yaml"),
    Path.home() / CONFIG_DIR_NAME / "config.yaml",
]


def discover_config_path() -> Optional[Path]:
    """Find a config file using auto-discovery.

    Search order:
      1. ``$EASYFS_CONFIG`` environment variable
      2. ``./easyfs.yaml``
      3. ``./config/easyfs.yaml``
      4. ``~/.easyfs/config.yaml``

    Returns:
        Path to the discovered config file, or None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR, "")
    if env_path:
        p = Path(env_path)
        if p.exists():
            return p
        logger.warning("$%s=%s does not exist", CONFIG_ENV_VAR, env_path)

    for candidate in _CONFIG_SEARCH_PATHS:
        if candidate.exists():
            return candidate
    return None


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from config file + environment variables.

    Values from the YAML file are passed explicitly and therefore take
    precedence; ``EASYFS_*`` environment variables fill in everything the
    file leaves unset.

    Args:
        config_path: Explicit path to config file.  When ``None``,
            auto-discovery is used (see :func:`discover_config_path`).
    """
    import yaml

    resolved_path = config_path
    if resolved_path is None:
        resolved_path = discover_config_path()

    settings_dict: dict = {}

    if resolved_path and resolved_path.exists():
        with open(resolved_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
        settings_dict = _parse_yaml_to_settings_dict(config)
        logger.info("Loaded config from %s", resolved_path.resolve())
    else:
        logger.info("No config file found, using defaults + environment variables")

    return Settings(**settings_dict)


SAMPLE_CONFIG = """\
# EasyFS configuration
#
# Looked up from $EASYFS_CONFIG, ./easyfs.yaml, ./config/easyfs.yaml
# or ~/.easyfs/config.yaml. Every key is optional.

permissions:
  dir_mode: "0777"   # auto-created parent directories (before umask)
  file_mode: "0666"  # newly created files (before umask)

copy:
  buffer_size: 1MB
  fsync: true

text:
  encoding: utf-8

logging:
  level: WARNING
"""
