"""Task and work session models."""

import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..utils.time import format_timestamp, parse_optional_timestamp, parse_timestamp, utc_now


def new_id() -> str:
    """Generate a short unique id (base36 millisecond clock + random suffix)."""
    millis = int(time.time() * 1000)
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    stamp = ""
    while millis:
        millis, rem = divmod(millis, 36)
        stamp = digits[rem] + stamp
    return stamp + secrets.token_hex(4)


def pick(data: dict[str, Any], key: str, legacy_key: str, default: Any = None) -> Any:
    """Read a field by its current name, falling back to the legacy camelCase name."""
    if key in data:
        return data[key]
    return data.get(legacy_key, default)


class TaskType(Enum):
    """Kinds of billable work."""

    DOCUMENT = "document"
    MEETING = "meeting"
    CONSULTATION = "consultation"
    OTHER = "other"


# Task type labels written by older data files
LEGACY_TASK_TYPES = {
    "文书": TaskType.DOCUMENT,
    "会议": TaskType.MEETING,
    "咨询": TaskType.CONSULTATION,
    "其他": TaskType.OTHER,
}


def parse_task_type(value: Optional[str]) -> TaskType:
    """Read a task type, accepting legacy labels."""
    if not value:
        return TaskType.DOCUMENT
    if value in LEGACY_TASK_TYPES:
        return LEGACY_TASK_TYPES[value]
    return TaskType(value)


@dataclass(frozen=True)
class WorkSession:
    """One contiguous interval of timed work. `end` is None while open."""

    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": format_timestamp(self.start),
            "end": format_timestamp(self.end),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkSession":
        return cls(
            start=parse_timestamp(data["start"]),
            end=parse_optional_timestamp(data.get("end")),
        )


@dataclass
class Task:
    """A unit of billable work belonging to a case.

    Attributes:
        id: Unique identifier
        task_type: Kind of work
        custom_type: Free-text label when task_type is OTHER
        desc: Short description of the work
        assignee: Person doing the work
        notes: Free-form notes
        created_at: When the task was created
        completed_at: When the task was last marked completed
        sessions: Ordered work sessions; only the last may be open
        is_running: True while the last session is open
        is_completed: True once the work is marked done
    """

    id: str
    desc: str = ""
    task_type: TaskType = TaskType.DOCUMENT
    custom_type: Optional[str] = None
    assignee: str = ""
    notes: str = ""
    created_at: datetime = field(default_factory=utc_now)
    completed_at: Optional[datetime] = None
    sessions: list[WorkSession] = field(default_factory=list)
    is_running: bool = False
    is_completed: bool = False

    @classmethod
    def create(
        cls,
        desc: str = "",
        task_type: TaskType = TaskType.DOCUMENT,
        assignee: str = "",
        created_at: Optional[datetime] = None,
    ) -> "Task":
        """Create a fresh, idle task with a new id."""
        return cls(
            id=new_id(),
            desc=desc,
            task_type=task_type,
            assignee=assignee,
            created_at=created_at or utc_now(),
        )

    @property
    def open_session(self) -> Optional[WorkSession]:
        """The most recent open session, searched from the end."""
        for session in reversed(self.sessions):
            if session.is_open:
                return session
        return None

    @property
    def type_label(self) -> str:
        """Display label for the task type."""
        if self.task_type == TaskType.OTHER and self.custom_type:
            return self.custom_type
        return self.task_type.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "id": self.id,
            "type": self.task_type.value,
            "desc": self.desc,
            "assignee": self.assignee,
            "notes": self.notes,
            "created_at": format_timestamp(self.created_at),
            "completed_at": format_timestamp(self.completed_at),
            "sessions": [s.to_dict() for s in self.sessions],
            "is_running": self.is_running,
            "is_completed": self.is_completed,
        }
        if self.custom_type:
            result["custom_type"] = self.custom_type
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Create from dictionary (current or legacy camelCase keys)."""
        created_at = parse_optional_timestamp(pick(data, "created_at", "createdAt"))

        return cls(
            id=data["id"],
            desc=data.get("desc", ""),
            task_type=parse_task_type(data.get("type")),
            custom_type=pick(data, "custom_type", "customType"),
            assignee=data.get("assignee", ""),
            notes=data.get("notes", ""),
            created_at=created_at or utc_now(),
            completed_at=parse_optional_timestamp(pick(data, "completed_at", "completedAt")),
            sessions=[WorkSession.from_dict(s) for s in data.get("sessions") or []],
            is_running=bool(pick(data, "is_running", "isRunning", False)),
            is_completed=bool(pick(data, "is_completed", "isCompleted", False)),
        )
