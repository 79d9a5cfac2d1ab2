"""Thin filesystem wrappers that turn OSError into classified errors."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from filekeeper.errors import ErrorKind, FileKeeperError

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileKeeperError(ErrorKind.STORAGE, f"Cannot create directory: {path} ({e})") from e


def write_text(path: Path, content: str) -> None:
    """Write (or overwrite) the whole file.

    Content that cannot be encoded is rejected before the file is opened, so an
    existing file is never truncated by a failed write.
    """
    try:
        content.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FileKeeperError(
            ErrorKind.VALIDATION, f"Content for {path} cannot be stored as UTF-8 text."
        ) from e
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileKeeperError(ErrorKind.STORAGE, f"Failed to write file: {path} ({e})") from e
    logger.debug("Wrote %d chars to %s", len(content), path)


def read_text(path: Path) -> str:
    """Read the whole file; CRLF and CR line endings come back as LF."""
    if not path.is_file():
        raise FileKeeperError(ErrorKind.NOT_FOUND, f"File does not exist on disk: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FileKeeperError(
            ErrorKind.STORAGE,
            f"File is not valid UTF-8 text: {path} ({e.reason} at byte {e.start})",
        ) from e
    except OSError as e:
        raise FileKeeperError(ErrorKind.STORAGE, f"Failed to read file: {path} ({e})") from e


def move(src: Path, dst: Path) -> None:
    """Rename or move ``src`` to ``dst``. Never overwrites an existing ``dst``."""
    if dst.exists():
        raise FileKeeperError(ErrorKind.DUPLICATE, f"Destination already exists: {dst}")
    try:
        shutil.move(str(src), str(dst))
    except OSError as e:
        raise FileKeeperError(
            ErrorKind.STORAGE, f"Failed to move {src} to {dst} ({e})"
        ) from e
    logger.debug("Moved %s -> %s", src, dst)


def delete(path: Path) -> bool:
    """Remove a file. Returns False if there was nothing to remove."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise FileKeeperError(
            ErrorKind.STORAGE, f"Failed to delete file from disk: {path} ({e})"
        ) from e
    return True
