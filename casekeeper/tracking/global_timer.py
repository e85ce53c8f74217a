"""Single-timer entry point: at most one task runs across all cases."""

from typing import Optional

from ..exceptions import NotFoundError
from ..models.case import Case, TrashKind
from ..utils.logging import get_logger
from ..utils.time import resolve_now
from .timer import Now, pause_task, start_task

logger = get_logger(__name__)


def pause_all(cases: list[Case], now: Now = None, keep_task_id: Optional[str] = None) -> list[Case]:
    """
    Pause every running task except `keep_task_id`.

    Returns:
        New case list; cases without running tasks are passed through as-is
    """
    paused_at = resolve_now(now)
    result = []
    for case in cases:
        updated = case
        for task in case.running_tasks:
            if task.id == keep_task_id:
                continue
            logger.info(f"Pausing task {task.id} in case {case.id} before starting another")
            updated = updated.replace_task(pause_task(task, paused_at))
        result.append(updated)
    return result


def start_timer(cases: list[Case], case_id: str, task_id: str, now: Now = None) -> list[Case]:
    """
    Start a task's timer, pausing any other running task first.

    Args:
        cases: All cases
        case_id: Case owning the task
        task_id: Task to start
        now: Current time

    Returns:
        New case list with the task started. A completed task is not
        started and nothing else is paused.

    Raises:
        NotFoundError: If the case or the task does not exist
    """
    target = next((c for c in cases if c.id == case_id), None)
    if target is None:
        raise NotFoundError("case", case_id)
    task = target.get_task(task_id)
    if task is None:
        raise NotFoundError(TrashKind.TASK.value, task_id)
    if task.is_completed:
        logger.debug(f"Task {task_id} is completed; leaving all timers as they are")
        return list(cases)

    started_at = resolve_now(now)
    cases = pause_all(cases, started_at, keep_task_id=task_id)

    result = []
    for case in cases:
        if case.id == case_id:
            case = case.replace_task(start_task(case.get_task(task_id), started_at))
        result.append(case)
    return result
