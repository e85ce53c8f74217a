"""Shared pytest fixtures for casekeeper tests."""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest


T0 = datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def at(seconds: float = 0, minutes: float = 0) -> datetime:
    """Timestamp relative to 2025-01-15 10:00:00 UTC."""
    return T0 + timedelta(minutes=minutes, seconds=seconds)


@pytest.fixture
def idle_task():
    """A task that has never been timed."""
    from casekeeper.models import Task

    return Task(id="task-1", desc="Draft complaint", created_at=T0)


@pytest.fixture
def running_task(idle_task):
    """A task started at 10:00:00."""
    from casekeeper.tracking import start_task

    return start_task(idle_task, T0)


@pytest.fixture
def sample_case():
    """A case with one item of every deletable kind."""
    from casekeeper.models import Case, Deadline, Log, Reminder, Task

    return Case(
        id="case-A",
        name="Acme v. Widget Co.",
        tasks=[
            Task(id="task-1", desc="Draft complaint", created_at=T0),
            Task(id="task-2", desc="Client meeting", created_at=T0),
        ],
        logs=[Log(id="log-1", date=T0, content="Filed with court")],
        reminders=[Reminder(id="rem-1", date="2025-01-20", time="09:00", title="Call client")],
        deadlines=[Deadline(id="dl-1", date="2025-02-01", title="Answer due")],
    )


@pytest.fixture
def two_running_cases():
    """Case A with T1 started at 10:00, case B with T2 started at 10:05."""
    from casekeeper.models import Case, Task, WorkSession

    t1 = Task(
        id="T1",
        desc="Research",
        created_at=T0,
        sessions=[WorkSession(start=at(minutes=0))],
        is_running=True,
    )
    t2 = Task(
        id="T2",
        desc="Drafting",
        created_at=T0,
        sessions=[WorkSession(start=at(minutes=5))],
        is_running=True,
    )
    return [
        Case(id="A", name="Case A", tasks=[t1]),
        Case(id="B", name="Case B", tasks=[t2]),
    ]


@pytest.fixture
def ref_store(tmp_path: Path):
    """Timer reference store in a temp directory."""
    from casekeeper.storage import TimerRefStore

    return TimerRefStore(tmp_path / "timer_ref.yaml")


@pytest.fixture
def snapshot_store(tmp_path: Path):
    """Snapshot store in a temp directory."""
    from casekeeper.storage import SnapshotStore

    return SnapshotStore(tmp_path / "database.json")


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch):
    """Point the CLI at temp data files and reset global settings."""
    from casekeeper.config import configure

    monkeypatch.setenv("CASEKEEPER_DATA_FILE", str(tmp_path / "database.json"))
    monkeypatch.setenv("CASEKEEPER_TIMER_REF_FILE", str(tmp_path / "timer_ref.yaml"))
    monkeypatch.setenv("CASEKEEPER_EXPORT_DIR", str(tmp_path / "exports"))
    monkeypatch.setenv("CASEKEEPER_TICK_INTERVAL", "0.05")
    configure(None)
    yield tmp_path
    configure(None)

    # Handlers created inside CliRunner point at its closed streams
    logger = logging.getLogger("casekeeper")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_snapshot_json() -> dict:
    """Data file written by an older version (camelCase keys, no trash)."""
    return {
        "cases": [
            {
                "id": "c1",
                "name": "Legacy matter",
                "type": "诉讼",
                "status": "active",
                "clientContactName": "Jane Roe",
                "clients": [{"id": "p1", "name": "Acme", "type": "company", "idCode": "9131"}],
                "tasks": [
                    {
                        "id": "t1",
                        "type": "会议",
                        "desc": "Kickoff",
                        "assignee": "",
                        "notes": "",
                        "createdAt": "2025-01-15T09:00:00.000Z",
                        "completedAt": None,
                        "sessions": [
                            {"start": "2025-01-15T10:00:00.000Z", "end": "2025-01-15T10:30:00.000Z"}
                        ],
                        "isRunning": False,
                        "isCompleted": False,
                    }
                ],
                "logs": [],
                "reminders": [],
                "deadlines": [],
            },
            {"id": "c2", "name": "Bare case"},
        ],
        "parties": [{"id": "p1", "name": "Acme", "type": "company"}],
    }
