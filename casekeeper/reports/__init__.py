"""Report generation for casekeeper."""

from .time_export import (
    CSV_HEADERS,
    TaskTimeRow,
    export_tasks_csv,
    format_time_csv,
    task_period,
    task_time_rows,
)

__all__ = [
    "CSV_HEADERS",
    "TaskTimeRow",
    "export_tasks_csv",
    "format_time_csv",
    "task_period",
    "task_time_rows",
]
