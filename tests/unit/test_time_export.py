"""Tests for the billable time CSV export."""

import csv
from datetime import datetime, timedelta, timezone
from pathlib import Path

from casekeeper.models import Case, Task, TaskType, WorkSession
from casekeeper.reports import (
    CSV_HEADERS,
    export_tasks_csv,
    format_time_csv,
    task_period,
    task_time_rows,
)
from casekeeper.tracking import complete_task, start_task

T0 = datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def hours_later(hours: float) -> datetime:
    return T0 + timedelta(hours=hours)


class TestTaskPeriod:
    """Tests for task_period()."""

    def test_zero_sessions_uses_created_at(self):
        """A never-timed task starts at its creation time and has no end."""
        task = Task(id="t", created_at=T0)

        assert task_period(task) == (T0, None)

    def test_completed_uses_completed_at(self):
        """End is completed_at when set."""
        task = complete_task(start_task(Task(id="t", created_at=T0), hours_later(1)), hours_later(2))

        assert task_period(task) == (hours_later(1), hours_later(2))

    def test_open_task_uses_last_session_end(self):
        """Without completion, end is the last session's end."""
        task = Task(
            id="t",
            created_at=T0,
            sessions=[
                WorkSession(start=hours_later(1), end=hours_later(2)),
                WorkSession(start=hours_later(3), end=hours_later(4)),
            ],
        )

        assert task_period(task) == (hours_later(1), hours_later(4))

    def test_running_task_has_no_end(self):
        """A running task's last session is open."""
        task = start_task(Task(id="t", created_at=T0), hours_later(1))

        assert task_period(task) == (hours_later(1), None)


class TestTaskTimeRows:
    """Tests for task_time_rows()."""

    def test_rows_for_all_live_tasks(self):
        """Each live task of each case gets a row with hours."""
        billed = Task(
            id="t1",
            desc="Draft motion",
            task_type=TaskType.DOCUMENT,
            assignee="J. Doe",
            created_at=T0,
            sessions=[WorkSession(start=T0, end=hours_later(1.5))],
        )
        running = start_task(Task(id="t2", desc="Call", created_at=T0), hours_later(2))
        cases = [
            Case(id="a", name="Case A", tasks=[billed]),
            Case(id="b", name="Case B", tasks=[running, Task(id="t3", created_at=T0)]),
        ]

        rows = task_time_rows(cases, hours_later(2.25))

        assert [r.case_name for r in rows] == ["Case A", "Case B", "Case B"]
        assert rows[0].hours == 1.5
        assert rows[0].status == "open"
        assert rows[1].hours == 0.25
        assert rows[1].status == "running"
        assert rows[2].seconds == 0
        assert rows[2].start == T0

    def test_trashed_tasks_excluded(self, sample_case: Case):
        """Tasks in the trash are not exported."""
        from casekeeper.trash import soft_delete

        case = soft_delete(sample_case, "tasks", "task-1")

        rows = task_time_rows([case], T0)

        assert len(rows) == 1


class TestCsvOutput:
    """Tests for CSV formatting and writing."""

    def test_format_has_header(self):
        """The first line is the header."""
        text = format_time_csv([])

        assert text.strip() == ",".join(CSV_HEADERS)

    def test_quotes_commas(self):
        """Fields with commas are quoted."""
        task = Task(id="t", desc="Review, sign", created_at=T0, sessions=[WorkSession(start=T0, end=hours_later(1))])
        text = format_time_csv(task_time_rows([Case(id="c", name="Smith, Jones", tasks=[task])], T0))

        rows = list(csv.reader(text.splitlines()))

        assert rows[1][0] == "Smith, Jones"
        assert rows[1][2] == "Review, sign"
        assert rows[1][-1] == "1.00"

    def test_export_file(self, tmp_path: Path, sample_case: Case):
        """export_tasks_csv() writes a UTF-8 CSV with a BOM."""
        path = export_tasks_csv([sample_case], tmp_path / "out" / "hours.csv", T0)

        raw = path.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")

        with open(path, encoding="utf-8-sig", newline="") as f:
            rows = list(csv.reader(f))

        assert rows[0] == CSV_HEADERS
        assert len(rows) == 3
