"""Per-case trash for tasks, logs, reminders and deadlines."""

from ..models.case import Trash, TrashKind
from .manager import list_trash, restore, soft_delete

__all__ = [
    "Trash",
    "TrashKind",
    "list_trash",
    "restore",
    "soft_delete",
]
