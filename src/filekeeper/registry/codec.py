"""One-line text encoding of a Record.

    id|file_name|storage_path|category|created_at|updated_at|content

Only the content field is escaped (``\\`` ``\\n`` ``\\r`` ``\\p``). The other
fields must never contain ``|`` or line breaks; this is not checked here.
"""

from __future__ import annotations

import re
from datetime import datetime

from filekeeper.errors import ErrorKind, FileKeeperError
from filekeeper.registry.record import Record

DELIMITER = "|"
FIELD_COUNT = 7
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Backslash must be escaped first so later substitutions are not re-escaped.
_ESCAPES = (
    ("\\", "\\\\"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    (DELIMITER, "\\p"),
)
_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r", "p": DELIMITER}
_ESCAPE_PAIR = re.compile(r"\\(.)", re.DOTALL)


def escape_content(text: str) -> str:
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def unescape_content(text: str) -> str:
    """Reverse ``escape_content``.

    Each ``\\x`` pair is decoded exactly once in a left-to-right scan, so an
    escaped backslash followed by ``p`` or ``n`` is never mistaken for an
    escaped delimiter or newline. Unknown pairs are left as they are.
    """
    return _ESCAPE_PAIR.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(0)), text)


def format_timestamp(ts: datetime) -> str:
    return ts.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value.strip(), TIMESTAMP_FORMAT)


def encode(record: Record) -> str:
    return DELIMITER.join(
        [
            record.id,
            record.file_name,
            record.storage_path,
            record.category,
            format_timestamp(record.created_at),
            format_timestamp(record.updated_at),
            escape_content(record.content),
        ]
    )


def decode(line: str) -> Record:
    """Parse one registry line. Raises a CORRUPTION error on malformed input."""
    parts = line.split(DELIMITER, FIELD_COUNT - 1)
    if len(parts) < FIELD_COUNT:
        raise FileKeeperError(
            ErrorKind.CORRUPTION,
            f"Corrupt registry line (expected {FIELD_COUNT} fields, got {len(parts)}): {line}",
        )

    record_id, file_name, storage_path, category, created, updated, content = parts
    try:
        created_at = parse_timestamp(created)
        updated_at = parse_timestamp(updated)
    except ValueError as e:
        raise FileKeeperError(
            ErrorKind.CORRUPTION, f"Cannot parse timestamp in registry line: {line}"
        ) from e

    return Record(
        id=record_id.strip(),
        file_name=file_name.strip(),
        content=unescape_content(content),
        storage_path=storage_path.strip(),
        category=category.strip(),
        created_at=created_at,
        updated_at=updated_at,
    )
