"""Billable time export.

One row per live task with its tracked hours and working period, suitable for
opening in a spreadsheet.
"""

import csv
import io
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from ..models import Case, Task
from ..tracking.timer import Now, task_duration
from ..utils.time import format_datetime, resolve_now

CSV_HEADERS = [
    "Case",
    "Task Type",
    "Description",
    "Assignee",
    "Status",
    "Start",
    "End",
    "Hours",
]


@dataclass
class TaskTimeRow:
    """Tracked time for one task."""

    case_name: str
    task_type: str
    desc: str
    assignee: str
    status: str
    start: Optional[datetime]
    end: Optional[datetime]
    seconds: int

    @property
    def hours(self) -> float:
        return round(self.seconds / 3600, 2)

    def as_csv_row(self) -> list[str]:
        return [
            self.case_name,
            self.task_type,
            self.desc,
            self.assignee,
            self.status,
            format_datetime(self.start),
            format_datetime(self.end),
            f"{self.hours:.2f}",
        ]


def task_period(task: Task) -> tuple[Optional[datetime], Optional[datetime]]:
    """
    Working period of a task.

    Start is the first session's start, or the creation time for a task that
    was never timed. End is the completion time, else the last session's end.
    """
    start = task.sessions[0].start if task.sessions else task.created_at
    end = task.completed_at
    if end is None and task.sessions:
        end = task.sessions[-1].end
    return start, end


def _status(task: Task) -> str:
    if task.is_completed:
        return "completed"
    if task.is_running:
        return "running"
    return "open"


def task_time_rows(cases: Iterable[Case], now: Now = None) -> list[TaskTimeRow]:
    """Build export rows for every live task of every case."""
    current = resolve_now(now)
    rows = []
    for case in cases:
        for task in case.tasks:
            start, end = task_period(task)
            rows.append(TaskTimeRow(
                case_name=case.name,
                task_type=task.type_label,
                desc=task.desc,
                assignee=task.assignee,
                status=_status(task),
                start=start,
                end=end,
                seconds=task_duration(task, current),
            ))
    return rows


def format_time_csv(rows: Iterable[TaskTimeRow]) -> str:
    """
    Format export rows as CSV.

    Args:
        rows: Rows to format

    Returns:
        CSV string with a header line
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow(row.as_csv_row())
    return buffer.getvalue()


def export_tasks_csv(cases: Iterable[Case], path: Path, now: Now = None) -> Path:
    """Write the time export for all cases to a CSV file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # BOM so spreadsheet programs detect UTF-8
    with open(path, "w", encoding="utf-8-sig", newline="") as f:
        f.write(format_time_csv(task_time_rows(cases, now)))

    return path
