"""Line store: load, save and create task documents on disk."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Sequence

from .document import empty_document_lines
from .errors import AlreadyExists, DocumentNotFound, StorageError

logger = logging.getLogger("mdtodo.storage")


def load_lines(path: Path | str) -> List[str]:
    """Read the document and return its lines without line terminators."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DocumentNotFound(
            f"No task document at {path}. Create one before using it."
        ) from None
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Could not read task document {path}: {e}") from e

    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    logger.debug(f"Loaded {len(lines)} lines from {path}")
    return lines


def save_lines(path: Path | str, lines: Sequence[str]) -> Path:
    """Replace the whole document with ``lines``.

    The content is written to a temporary file beside the target and moved
    over it, so readers see either the old or the new document.
    """
    path = Path(path)
    content = "\n".join(lines) + "\n"
    tmp_name = None
    replaced = False
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(content)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o777)
        os.replace(tmp_name, path)
        replaced = True
    except (OSError, UnicodeEncodeError) as e:
        raise StorageError(f"Could not write task document {path}: {e}") from e
    finally:
        if not replaced and tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.debug(f"Saved {len(lines)} lines to {path}")
    return path


def create_document(path: Path | str) -> Path:
    """Write the empty three-section skeleton to a new file."""
    path = Path(path)
    content = "\n".join(empty_document_lines()) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "x", encoding="utf-8") as handle:
            handle.write(content)
    except FileExistsError:
        raise AlreadyExists(f"Task document already exists at {path}") from None
    except OSError as e:
        raise StorageError(f"Could not create task document {path}: {e}") from e

    logger.info(f"Created task document at {path}")
    return path
