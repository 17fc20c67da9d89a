"""Settings for the mdtodo shells.

Only the CLI and the MCP server read configuration; the engine always
receives an explicit document path.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

FILE_ENV = "MDTODO_FILE"
LOG_LEVEL_ENV = "MDTODO_LOG_LEVEL"
LOG_FILE_ENV = "MDTODO_LOG_FILE"

DEFAULT_FILENAME = "TODO.md"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class Settings:
    document_path: Path
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None


def resolve_document_path(path: Optional[str | Path] = None) -> Path:
    """Pick the document path: explicit argument, then $MDTODO_FILE, then ./TODO.md."""
    if path:
        return Path(path).expanduser().resolve()

    env_path = os.getenv(FILE_ENV)
    if env_path:
        return Path(env_path).expanduser().resolve()

    return (Path.cwd() / DEFAULT_FILENAME).resolve()


def resolve_log_level(level: Optional[str] = None) -> str:
    chosen = (level or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    if chosen not in _LOG_LEVELS:
        raise ValueError(
            f"Invalid log level {chosen!r}; expected one of {', '.join(_LOG_LEVELS)}"
        )
    return chosen


def load_settings(path: Optional[str | Path] = None, log_level: Optional[str] = None) -> Settings:
    """Build settings from explicit values with environment fallbacks."""
    log_file = os.getenv(LOG_FILE_ENV)
    return Settings(
        document_path=resolve_document_path(path),
        log_level=resolve_log_level(log_level),
        log_file=Path(log_file).expanduser() if log_file else None,
    )
