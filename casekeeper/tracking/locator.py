"""Locate the globally running task across all cases."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..models.case import Case
from ..models.task import Task
from ..storage.timer_ref import TimerRef, TimerRefStore
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ActiveTimer:
    """A task together with the case that owns it."""

    case: Case
    task: Task

    @property
    def ref(self) -> TimerRef:
        return TimerRef(case_id=self.case.id, task_id=self.task.id)


def running_tasks(cases: Iterable[Case]) -> list[tuple[ActiveTimer, datetime]]:
    """
    Every task marked running that also has an open session.

    Returns:
        (ActiveTimer, start of its latest open session) pairs in scan order
    """
    found = []
    for case in cases:
        for task in case.tasks:
            if not task.is_running:
                continue
            session = task.open_session
            if session is None:
                continue
            found.append((ActiveTimer(case=case, task=task), session.start))
    return found


def find_running_task(cases: Iterable[Case]) -> Optional[ActiveTimer]:
    """
    Find the running task.

    Only one task should ever run. If the data says otherwise, the one whose
    open session started last wins.
    """
    best: Optional[ActiveTimer] = None
    best_start: Optional[datetime] = None

    candidates = running_tasks(cases)
    if len(candidates) > 1:
        logger.warning(f"{len(candidates)} tasks are marked running; using the latest started")

    for timer, started in candidates:
        if best_start is None or started > best_start:
            best, best_start = timer, started
    return best


def find_by_ref(cases: Iterable[Case], ref: Optional[TimerRef]) -> Optional[ActiveTimer]:
    """Resolve a remembered reference against the current cases."""
    if ref is None:
        return None
    for case in cases:
        if case.id != ref.case_id:
            continue
        task = case.get_task(ref.task_id)
        return ActiveTimer(case=case, task=task) if task else None
    return None


class ActiveTimerLocator:
    """Finds the task the timer widget should show.

    A running task always wins and is remembered in the reference store.
    With nothing running, the last remembered task is shown if it still exists.
    """

    def __init__(self, ref_store: TimerRefStore):
        self.ref_store = ref_store

    def locate(self, cases: list[Case]) -> Optional[ActiveTimer]:
        running = find_running_task(cases)
        if running is not None:
            self.ref_store.save(running.ref)
            return running

        found = find_by_ref(cases, self.ref_store.load())
        if found is None:
            logger.debug("No active or remembered task")
        return found
