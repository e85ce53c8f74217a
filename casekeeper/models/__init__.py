"""Data models for casekeeper."""

from .case import (
    Case,
    CaseEntity,
    CaseStatus,
    CaseType,
    Deadline,
    Log,
    Party,
    PartySide,
    PartyType,
    Personnel,
    Proceeding,
    Reminder,
    Trash,
    TrashKind,
)
from .snapshot import AppData
from .task import Task, TaskType, WorkSession, new_id

__all__ = [
    "AppData",
    "Case",
    "CaseEntity",
    "CaseStatus",
    "CaseType",
    "Deadline",
    "Log",
    "Party",
    "PartySide",
    "PartyType",
    "Personnel",
    "Proceeding",
    "Reminder",
    "Task",
    "TaskType",
    "Trash",
    "TrashKind",
    "WorkSession",
    "new_id",
]
