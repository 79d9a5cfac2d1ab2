"""FileService: the command layer between the UI and the registry.

Every action follows the same order:
1. Validate input (no side effects on failure)
2. Check for collisions with existing files
3. Change the file on disk
4. Persist the metadata through the Registry

A registry failure after step 3 is reported with ``partial=True``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from filekeeper import fileops
from filekeeper.errors import ErrorKind, FileKeeperError
from filekeeper.registry.record import Record, new_record_id
from filekeeper.registry.store import Registry
from filekeeper.validation import ensure_encodable, require_storage_path, validate_file_name

logger = logging.getLogger(__name__)


class FileService:
    """Create, read, update and delete tracked files."""

    def __init__(
        self,
        registry: Registry,
        *,
        clock: Callable[[], datetime] = datetime.now,
        new_id: Callable[[], str] = new_record_id,
    ) -> None:
        self.registry = registry
        self._clock = clock
        self._new_id = new_id

    # ── Create ───────────────────────────────────────────────

    def create_file(
        self,
        file_name: str,
        content: str | None,
        storage_path: str,
        category: str | None = None,
    ) -> Record:
        validate_file_name(file_name)
        storage_path = require_storage_path(storage_path)
        ensure_encodable(content, "Content")
        ensure_encodable(category, "Category")

        directory = Path(storage_path)
        fileops.ensure_dir(directory)

        target = directory / file_name
        if target.exists():
            raise FileKeeperError(
                ErrorKind.DUPLICATE,
                f"A file named '{file_name}' already exists at: {storage_path}",
            )

        content = content or ""
        fileops.write_text(target, content)

        record = Record.create(
            file_name, content, storage_path, category, now=self._clock(), new_id=self._new_id
        )
        self._persist(record, "File written to disk but registry update failed.")
        logger.info("Created %s (%s)", target, record.short_id)
        return record

    # ── Read ─────────────────────────────────────────────────

    def read_by_id(self, record_id: str) -> Record:
        """Exact id first, then the most recent record whose id starts with it."""
        record = self.registry.find_by_id(record_id)
        if record is None and record_id:
            record = next(
                (r for r in self.registry.find_all() if r.id.startswith(record_id)), None
            )
        if record is None:
            raise FileKeeperError(ErrorKind.NOT_FOUND, f"No file found with ID: {record_id}")
        return record

    def read_by_file_name(self, file_name: str) -> Record:
        record = self.registry.find_by_file_name(file_name)
        if record is None:
            raise FileKeeperError(ErrorKind.NOT_FOUND, f"No file found with name: {file_name}")
        return record

    def resolve(self, text: str) -> Record:
        """Look up user input as an id, an id prefix, then a file name."""
        text = text.strip()
        try:
            return self.read_by_id(text)
        except FileKeeperError as e:
            if e.kind is not ErrorKind.NOT_FOUND:
                raise
        return self.read_by_file_name(text)

    def read_all(self) -> list[Record]:
        return self.registry.find_all()

    def read_by_category(self, category: str) -> list[Record]:
        return self.registry.find_by_category(category.strip())

    def categories(self) -> list[str]:
        """Distinct categories in use, sorted."""
        return sorted({r.category for r in self.registry.find_all()})

    def read_content_from_disk(self, record: Record) -> str:
        """Live file content, ignoring what the registry has cached."""
        return fileops.read_text(record.path)

    def refresh_content(self, record_id: str) -> Record:
        """Copy the live file content into the registry."""
        record = self.read_by_id(record_id)
        live = self.read_content_from_disk(record)
        if live != record.content:
            record.set_content(live, now=self._clock())
            self._persist(record, "Registry update failed.", partial=False)
        return record

    # ── Update ───────────────────────────────────────────────

    def update_content(self, record_id: str, content: str | None) -> Record:
        record = self.read_by_id(record_id)
        content = content or ""
        fileops.write_text(record.path, content)

        record.set_content(content, now=self._clock())
        self._persist(record, "File updated on disk but registry update failed.")
        logger.info("Updated content of %s", record.path)
        return record

    def rename_file(self, record_id: str, new_file_name: str) -> Record:
        validate_file_name(new_file_name)
        record = self.read_by_id(record_id)

        old_path = record.path
        new_path = Path(record.storage_path) / new_file_name
        if new_path.exists():
            raise FileKeeperError(
                ErrorKind.DUPLICATE,
                f"A file named '{new_file_name}' already exists at: {record.storage_path}",
            )
        fileops.move(old_path, new_path)

        record.set_file_name(new_file_name, now=self._clock())
        self._persist(record, "File renamed on disk but registry update failed.")
        logger.info("Renamed %s -> %s", old_path, new_path)
        return record

    def move_file(self, record_id: str, new_storage_path: str) -> Record:
        record = self.read_by_id(record_id)
        new_storage_path = require_storage_path(new_storage_path)

        new_dir = Path(new_storage_path)
        fileops.ensure_dir(new_dir)

        target = new_dir / record.file_name
        if target.exists():
            raise FileKeeperError(
                ErrorKind.DUPLICATE,
                f"A file named '{record.file_name}' already exists at: {new_storage_path}",
            )
        old_path = record.path
        fileops.move(old_path, target)

        record.set_storage_path(new_storage_path, now=self._clock())
        self._persist(record, "File moved on disk but registry update failed.")
        logger.info("Moved %s -> %s", old_path, target)
        return record

    def update_category(self, record_id: str, category: str | None) -> Record:
        """Change the tag only; the file on disk is untouched."""
        record = self.read_by_id(record_id)
        ensure_encodable(category, "Category")
        record.set_category(category, now=self._clock())
        self._persist(record, "Registry update failed.", partial=False)
        return record

    # ── Delete ───────────────────────────────────────────────

    def delete_file(self, record_id: str) -> Record:
        record = self.read_by_id(record_id)
        if not fileops.delete(record.path):
            logger.warning("%s was already gone from disk", record.path)

        try:
            self.registry.delete(record.id)
        except FileKeeperError as e:
            logger.error("Registry delete failed for %s: %s", record.short_id, e.message)
            raise FileKeeperError(
                ErrorKind.STORAGE,
                f"File deleted from disk but registry update failed. ({e.message})",
                partial=True,
            ) from e
        logger.info("Deleted %s (%s)", record.path, record.short_id)
        return record

    # ── Internal ─────────────────────────────────────────────

    def _persist(self, record: Record, failure_message: str, *, partial: bool = True) -> None:
        """Save through the registry; a failure here means disk is ahead of the registry."""
        try:
            self.registry.update(record)
        except FileKeeperError as e:
            logger.error("%s (%s)", failure_message, e.message)
            raise FileKeeperError(
                ErrorKind.STORAGE,
                f"{failure_message} ({e.message})",
                partial=partial,
            ) from e
