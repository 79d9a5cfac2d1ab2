"""Input checks run before any disk or registry mutation."""

from __future__ import annotations

from filekeeper.errors import ErrorKind, FileKeeperError

ILLEGAL_FILENAME_CHARS = '<>:"/\\|?*'


def ensure_encodable(value: str | None, label: str) -> None:
    """Reject text that cannot be stored as UTF-8.

    Lone surrogates end up in ``input()`` results when the terminal sends
    bytes that are not valid in its encoding.
    """
    if value is None:
        return
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FileKeeperError(
            ErrorKind.VALIDATION, f"{label} contains characters that cannot be stored as UTF-8."
        ) from e


def validate_file_name(name: str | None) -> None:
    """Reject empty names, OS-illegal characters and names without an extension."""
    if name is None or not name.strip():
        raise FileKeeperError(ErrorKind.VALIDATION, "File name cannot be empty.")
    ensure_encodable(name, "File name")

    illegal = "".join(c for c in name if c in ILLEGAL_FILENAME_CHARS)
    if illegal:
        raise FileKeeperError(
            ErrorKind.VALIDATION, f"File name contains illegal characters: {illegal}"
        )

    if "." not in name:
        raise FileKeeperError(
            ErrorKind.VALIDATION, "File name must include an extension (e.g. notes.txt)."
        )


def require_storage_path(path: str | None) -> str:
    """Return the stripped directory string, or fail if nothing was given."""
    if path is None or not path.strip():
        raise FileKeeperError(ErrorKind.VALIDATION, "Storage path cannot be empty.")
    ensure_encodable(path, "Storage path")
    return path.strip()
