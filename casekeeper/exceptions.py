"""Exceptions for casekeeper operations."""

from typing import Any, Optional


class CaseKeeperError(Exception):
    """Base exception for casekeeper operations."""

    pass


class InvalidRangeError(CaseKeeperError):
    """Raised when a manual work session has unusable bounds.

    Either bound failed to parse, or the end is not after the start.
    """

    def __init__(self, start: Any = None, end: Any = None, message: Optional[str] = None):
        self.start = start
        self.end = end
        if message is None:
            message = f"Invalid time range: end ({end}) must be after start ({start})."
        super().__init__(message)


class NotFoundError(CaseKeeperError):
    """Raised when an entity id is missing from the expected collection."""

    def __init__(self, kind: str, item_id: str, where: str = "live"):
        self.kind = kind
        self.item_id = item_id
        self.where = where
        super().__init__(f"No {kind} item with id {item_id!r} in {where} collection.")


class SnapshotError(CaseKeeperError):
    """Raised when the data file cannot be read as a snapshot."""

    def __init__(self, path: str = "", reason: str = ""):
        message = f"Invalid data file: {path}" if path else "Invalid data file."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
