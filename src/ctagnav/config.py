"""Configuration management for ctagnav.

Settings are loaded from three sources in order of priority:
1. Environment variables (highest priority)
2. Project-level config: .ctagnav/config.toml
3. Global config: ~/.config/ctagnav/config.toml (lowest priority)
"""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console

from ctagnav.exceptions import ConfigError

console = Console(stderr=True)

_GLOBAL_CONFIG_DIR = Path.home() / ".config" / "ctagnav"
_GLOBAL_CONFIG_PATH = _GLOBAL_CONFIG_DIR / "config.toml"

_MIB = 1024 * 1024
_LANGUAGES_RE = re.compile(r"--languages=\S+")
_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_GENERATE_OPTIONS = "-R --fields=-aiklmnSzt+fsK --languages=php --php-kinds=cidf --excmd=number"
DEFAULT_OUTLINE_OPTIONS = "--fields=-aiklmnSzt+fsK --php-kinds=cidf --excmd=number -f -"


@dataclass
class CtagsConfig:
    """ctagnav configuration.

    Attributes:
        project_dir: Workspace root the tag file lives in.
        ctags_command: Name or path of the ctags executable.
        tag_file_name: Tag file name, relative to the workspace root.
        generate_options: Option string passed to ctags for a full recursive run.
        outline_options: Option string passed to ctags for a single-file outline.
        max_tag_file_bytes: Tag files larger than this are refused at load time.
        log_level: Notification verbosity (DEBUG, INFO, WARNING, ERROR).
    """

    project_dir: Path = field(default_factory=Path.cwd)
    ctags_command: str = "ctags"
    tag_file_name: str = "ctags.tmp"
    generate_options: str = DEFAULT_GENERATE_OPTIONS
    outline_options: str = DEFAULT_OUTLINE_OPTIONS
    max_tag_file_bytes: int = 50 * _MIB
    log_level: str = "INFO"


def load_config(project_dir: Path) -> CtagsConfig:
    """Load configuration from env vars, project config, and global config.

    Priority: env vars > .ctagnav/config.toml > ~/.config/ctagnav/config.toml

    Args:
        project_dir: Root directory of the workspace.

    Returns:
        A fully resolved CtagsConfig instance.

    Raises:
        ConfigError: If a numeric setting or the log level is invalid.
    """
    config = CtagsConfig(project_dir=project_dir)

    # Layer 1: Global config (lowest priority)
    _apply_toml(config, _load_toml(_GLOBAL_CONFIG_PATH))

    # Layer 2: Project config
    _apply_toml(config, _load_toml(project_dir / ".ctagnav" / "config.toml"))

    # Layer 3: Environment variables (highest priority)
    _apply_env(config)

    if config.log_level not in _VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid log level '{config.log_level}'. "
            f"Expected one of: {', '.join(_VALID_LOG_LEVELS)}"
        )
    if config.max_tag_file_bytes <= 0:
        raise ConfigError("max_tag_file_mb must be a positive number")
    return config


def with_languages(options: str, languages: str) -> str:
    """Return options with its --languages= value replaced (or appended)."""
    replacement = f"--languages={languages}"
    if _LANGUAGES_RE.search(options):
        return _LANGUAGES_RE.sub(replacement, options, count=1)
    return f"{options} {replacement}"


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file, returning an empty dict if missing or invalid."""
    if not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError) as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not parse {path}: {exc}")
        return {}


def _to_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Setting '{name}' must be an integer, got {value!r}") from exc


def _apply_toml(config: CtagsConfig, settings: dict[str, Any]) -> None:
    """Merge TOML settings into a CtagsConfig."""
    if "ctags_command" in settings:
        config.ctags_command = str(settings["ctags_command"])
    if "tag_file_name" in settings:
        config.tag_file_name = str(settings["tag_file_name"])
    if "generate_options" in settings:
        config.generate_options = str(settings["generate_options"])
    if "outline_options" in settings:
        config.outline_options = str(settings["outline_options"])
    if "languages" in settings:
        config.generate_options = with_languages(config.generate_options, str(settings["languages"]))
    if "max_tag_file_mb" in settings:
        config.max_tag_file_bytes = _to_int("max_tag_file_mb", settings["max_tag_file_mb"]) * _MIB
    if "log_level" in settings:
        config.log_level = str(settings["log_level"]).upper()


def _apply_env(config: CtagsConfig) -> None:
    """Override config with environment variables where set."""
    if command := os.environ.get("CTAGNAV_COMMAND"):
        config.ctags_command = command
    if tag_file := os.environ.get("CTAGNAV_TAG_FILE"):
        config.tag_file_name = tag_file
    if languages := os.environ.get("CTAGNAV_LANGUAGES"):
        config.generate_options = with_languages(config.generate_options, languages)
    if max_mb := os.environ.get("CTAGNAV_MAX_TAG_FILE_MB"):
        config.max_tag_file_bytes = _to_int("CTAGNAV_MAX_TAG_FILE_MB", max_mb) * _MIB
    if log_level := os.environ.get("CTAGNAV_LOG_LEVEL"):
        config.log_level = log_level.upper()
