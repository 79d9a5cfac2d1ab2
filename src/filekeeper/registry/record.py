"""The tracked-file record."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

DEFAULT_CATEGORY = "General"
SHORT_ID_LENGTH = 8


def normalize_category(category: str | None) -> str:
    """Strip the tag; empty or missing input becomes the default label."""
    if category is None or not category.strip():
        return DEFAULT_CATEGORY
    return category.strip()


def new_record_id() -> str:
    return str(uuid.uuid4())


@dataclass(eq=False)
class Record:
    """Metadata about one text file. Equality is by identity; ``id`` is the key.

    Timestamps are kept to the second, the precision of the registry file.
    """

    id: str
    file_name: str
    content: str
    storage_path: str
    category: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if self.content is None:
            self.content = ""
        self.category = normalize_category(self.category)
        self.created_at = self.created_at.replace(microsecond=0)
        self.updated_at = max(self.updated_at.replace(microsecond=0), self.created_at)

    @classmethod
    def create(
        cls,
        file_name: str,
        content: str | None,
        storage_path: str,
        category: str | None,
        *,
        now: datetime | None = None,
        new_id: Callable[[], str] | None = None,
    ) -> Record:
        """Build a fresh record with a generated id and both timestamps set to now."""
        ts = now or datetime.now()
        return cls(
            id=(new_id or new_record_id)(),
            file_name=file_name,
            content=content or "",
            storage_path=storage_path,
            category=category,
            created_at=ts,
            updated_at=ts,
        )

    # ── Derived ──────────────────────────────────────────────

    @property
    def short_id(self) -> str:
        return self.id[:SHORT_ID_LENGTH]

    @property
    def path(self) -> Path:
        return Path(self.storage_path) / self.file_name

    # ── Mutators (each one refreshes updated_at) ─────────────

    def _touch(self, now: datetime | None) -> None:
        ts = (now or datetime.now()).replace(microsecond=0)
        self.updated_at = max(ts, self.created_at)

    def set_file_name(self, file_name: str, now: datetime | None = None) -> None:
        self.file_name = file_name
        self._touch(now)

    def set_content(self, content: str | None, now: datetime | None = None) -> None:
        self.content = content or ""
        self._touch(now)

    def set_storage_path(self, storage_path: str, now: datetime | None = None) -> None:
        self.storage_path = storage_path
        self._touch(now)

    def set_category(self, category: str | None, now: datetime | None = None) -> None:
        self.category = normalize_category(category)
        self._touch(now)
