"""Tests for locating the running task."""

from datetime import datetime, timezone

import yaml

from casekeeper.models import Case, Task, WorkSession
from casekeeper.storage import TimerRef, TimerRefStore
from casekeeper.tracking import ActiveTimerLocator, find_by_ref, find_running_task, pause_task
from casekeeper.trash import soft_delete

T0 = datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


class TestFindRunningTask:
    """Tests for find_running_task()."""

    def test_latest_start_wins(self, two_running_cases):
        """With two running tasks, the later-started one is chosen."""
        found = find_running_task(two_running_cases)

        assert found is not None
        assert found.case.id == "B"
        assert found.task.id == "T2"

    def test_order_does_not_matter(self, two_running_cases):
        """The choice is by start time, not scan order."""
        found = find_running_task(list(reversed(two_running_cases)))

        assert found.task.id == "T2"

    def test_flag_without_open_session_is_ignored(self):
        """A task marked running with only closed sessions is not a candidate."""
        task = Task(
            id="t",
            created_at=T0,
            sessions=[WorkSession(start=T0, end=T0)],
            is_running=True,
        )

        assert find_running_task([Case(id="c", name="C", tasks=[task])]) is None

    def test_open_session_without_flag_is_ignored(self):
        """An open session on a task not marked running is not a candidate."""
        task = Task(id="t", created_at=T0, sessions=[WorkSession(start=T0)])

        assert find_running_task([Case(id="c", name="C", tasks=[task])]) is None

    def test_nothing_running(self, sample_case):
        """No running task yields None."""
        assert find_running_task([sample_case]) is None


class TestFindByRef:
    """Tests for find_by_ref()."""

    def test_resolves(self, sample_case):
        """A valid reference resolves to its case and task."""
        found = find_by_ref([sample_case], TimerRef(case_id="case-A", task_id="task-2"))

        assert found.case is sample_case
        assert found.task.id == "task-2"

    def test_missing_case_or_task(self, sample_case):
        """Stale references resolve to None."""
        assert find_by_ref([sample_case], TimerRef(case_id="nope", task_id="task-1")) is None
        assert find_by_ref([sample_case], TimerRef(case_id="case-A", task_id="nope")) is None
        assert find_by_ref([sample_case], None) is None


class TestActiveTimerLocator:
    """Tests for ActiveTimerLocator."""

    def test_running_task_is_remembered(self, two_running_cases, ref_store: TimerRefStore):
        """A found running task is persisted as the last reference."""
        locator = ActiveTimerLocator(ref_store)

        found = locator.locate(two_running_cases)

        assert (found.case.id, found.task.id) == ("B", "T2")
        assert ref_store.load() == TimerRef(case_id="B", task_id="T2")

    def test_fallback_to_remembered_task(self, ref_store: TimerRefStore):
        """With nothing running, the remembered task is returned."""
        case = Case(id="A", name="Case A", tasks=[Task(id="T1", created_at=T0)])
        ref_store.save(TimerRef(case_id="A", task_id="T1"))

        found = ActiveTimerLocator(ref_store).locate([case])

        assert found.case is case
        assert found.task.id == "T1"

    def test_fallback_to_deleted_task_is_none(self, ref_store: TimerRefStore):
        """If the remembered task was trashed, there is no active task."""
        case = Case(id="A", name="Case A", tasks=[Task(id="T1", created_at=T0)])
        ref_store.save(TimerRef(case_id="A", task_id="T1"))

        trashed = soft_delete(case, "tasks", "T1")

        assert ActiveTimerLocator(ref_store).locate([trashed]) is None

    def test_survives_pause(self, two_running_cases, ref_store: TimerRefStore):
        """After pausing, a fresh locator still shows the last running task."""
        ActiveTimerLocator(ref_store).locate(two_running_cases)

        case_a, case_b = two_running_cases
        paused_b = case_b.replace_task(pause_task(case_b.tasks[0], T0.replace(minute=30)))
        paused_a = case_a.replace_task(pause_task(case_a.tasks[0], T0.replace(minute=30)))

        found = ActiveTimerLocator(TimerRefStore(ref_store.path)).locate([paused_a, paused_b])

        assert found.task.id == "T2"
        assert found.task.is_running is False

    def test_no_reference_and_nothing_running(self, sample_case, ref_store: TimerRefStore):
        """Without a reference or running task, the result is None."""
        assert ActiveTimerLocator(ref_store).locate([sample_case]) is None
        assert not ref_store.path.exists()

    def test_reads_case_data_only(self, two_running_cases, ref_store: TimerRefStore):
        """Locating does not change the cases."""
        before = [c.to_dict() for c in two_running_cases]

        ActiveTimerLocator(ref_store).locate(two_running_cases)

        assert [c.to_dict() for c in two_running_cases] == before

    def test_reference_file_is_yaml(self, two_running_cases, ref_store: TimerRefStore):
        """The reference file holds case_id, task_id and minimized."""
        ActiveTimerLocator(ref_store).locate(two_running_cases)

        data = yaml.safe_load(ref_store.path.read_text())

        assert data == {"case_id": "B", "task_id": "T2", "minimized": False}
