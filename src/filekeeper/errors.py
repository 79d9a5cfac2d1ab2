"""Error taxonomy shared by every layer.

A single exception type carries a closed set of kinds. Callers decide how to
react by matching on ``err.kind`` rather than on exception subclasses.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    VALIDATION = "validation"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    CORRUPTION = "corruption"


class FileKeeperError(Exception):
    """A classified failure with a human-readable message.

    ``partial`` is set when the file on disk was already changed but the
    registry could not be updated afterwards.
    """

    def __init__(self, kind: ErrorKind, message: str, *, partial: bool = False) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.partial = partial

    def __repr__(self) -> str:
        return f"FileKeeperError({self.kind.name}, {self.message!r}, partial={self.partial})"
