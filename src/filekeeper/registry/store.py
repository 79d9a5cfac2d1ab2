"""Registry: every Record in memory, persisted to one flat file.

The backing file is rewritten in full on each mutation. A rewrite goes to a
temporary file in the same directory first; the real file is only replaced
once the new content is completely on disk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from filekeeper.errors import ErrorKind, FileKeeperError
from filekeeper.registry.codec import decode, encode
from filekeeper.registry.record import Record

logger = logging.getLogger(__name__)

REGISTRY_FILENAME = "registry.dat"
TEMP_SUFFIX = ".tmp"


class Registry:
    """Sole owner of the record collection for one process."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.path = self.root / REGISTRY_FILENAME
        self._records: dict[str, Record] = {}
        self._ensure_directory()
        self._load()

    @classmethod
    def open(cls, directory: str | Path) -> Registry:
        return cls(Path(directory))

    # ── Initialization ───────────────────────────────────────

    def _ensure_directory(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileKeeperError(
                ErrorKind.STORAGE, f"Cannot create registry directory: {self.root} ({e})"
            ) from e

    def _load(self) -> None:
        """Read the backing file. A missing file means an empty registry."""
        self._records.clear()
        if not self.path.exists():
            logger.debug("No registry file at %s, starting empty", self.path)
            return

        try:
            with self.path.open("r", encoding="utf-8", newline="") as f:
                for lineno, raw in enumerate(f, start=1):
                    # Only the terminator is dropped; content may end in spaces.
                    line = raw.rstrip("\r\n")
                    if not line.strip():
                        continue
                    try:
                        record = decode(line)
                    except FileKeeperError as e:
                        raise FileKeeperError(
                            ErrorKind.CORRUPTION, f"{self.path}, line {lineno}: {e.message}"
                        ) from e
                    self._records[record.id] = record
        except UnicodeDecodeError as e:
            raise FileKeeperError(
                ErrorKind.CORRUPTION, f"Registry file {self.path} is not valid UTF-8: {e}"
            ) from e
        except OSError as e:
            raise FileKeeperError(
                ErrorKind.STORAGE, f"Cannot read registry file {self.path}: {e}"
            ) from e

        logger.info("Loaded %d record(s) from %s", len(self._records), self.path)

    # ── Mutations ────────────────────────────────────────────

    def save(self, record: Record) -> None:
        """Insert or replace by id, then rewrite the backing file.

        A record whose line cannot be written as UTF-8 is rejected before the
        map is touched.
        """
        try:
            encode(record).encode("utf-8")
        except UnicodeEncodeError as e:
            raise FileKeeperError(
                ErrorKind.VALIDATION,
                f"Record {record.short_id} contains text that cannot be stored as UTF-8.",
            ) from e
        self._records[record.id] = record
        self._persist()

    def update(self, record: Record) -> None:
        """Same as ``save``; reads better at call sites that modify a record."""
        self.save(record)

    def delete(self, record_id: str) -> bool:
        """Remove by id. Returns False (and writes nothing) if absent."""
        if self._records.pop(record_id, None) is None:
            return False
        self._persist()
        return True

    # ── Queries ──────────────────────────────────────────────

    def find_by_id(self, record_id: str) -> Record | None:
        return self._records.get(record_id)

    def find_by_file_name(self, file_name: str) -> Record | None:
        """Case-insensitive; first match in insertion order wins."""
        target = file_name.casefold()
        for record in self._records.values():
            if record.file_name.casefold() == target:
                return record
        return None

    def find_all(self) -> list[Record]:
        """All records, most recently created first."""
        return _newest_first(self._records.values())

    def find_by_category(self, category: str) -> list[Record]:
        target = category.casefold()
        return _newest_first(r for r in self._records.values() if r.category.casefold() == target)

    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    # ── Persistence ──────────────────────────────────────────

    @property
    def temp_path(self) -> Path:
        return self.path.with_name(self.path.name + TEMP_SUFFIX)

    def _persist(self) -> None:
        lines = [encode(record) for record in self._records.values()]
        tmp = self._write_temp(lines)
        try:
            self._swap_in(tmp)
        except OSError as e:
            raise FileKeeperError(
                ErrorKind.STORAGE, f"Failed to replace registry file {self.path}: {e}"
            ) from e
        logger.debug("Rewrote %s (%d record(s))", self.path, len(lines))

    def _write_temp(self, lines: list[str]) -> Path:
        """Write every line to the temp file and make sure it reached the disk."""
        tmp = self.temp_path
        try:
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")
                f.flush()
                os.fsync(f.fileno())
        except (OSError, UnicodeError) as e:
            tmp.unlink(missing_ok=True)
            raise FileKeeperError(
                ErrorKind.STORAGE, f"Failed to write registry temp file {tmp}: {e}"
            ) from e
        return tmp

    def _swap_in(self, tmp: Path) -> None:
        if self.path.exists():
            self.path.unlink()
        tmp.rename(self.path)


def _newest_first(records) -> list[Record]:
    # Ties on created_at go to the later-inserted record, in memory and after a reload.
    ordered = list(records)
    ordered.reverse()
    return sorted(ordered, key=lambda r: r.created_at, reverse=True)
