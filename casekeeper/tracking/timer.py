"""Task timer state machine.

Every operation takes a Task and returns a new Task; the input is left
untouched. Work sessions form an append-only log and total duration is always
recomputed from them.
"""

import math
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Union

from ..exceptions import InvalidRangeError
from ..models.task import Task, WorkSession
from ..utils.logging import get_logger
from ..utils.time import Clock, TimestampLike, parse_timestamp, resolve_now

logger = get_logger(__name__)

Now = Union[datetime, Clock, None]


def compute_duration(
    sessions: Iterable[WorkSession],
    is_running: bool,
    now: Now = None,
) -> int:
    """
    Sum the length of a task's work sessions.

    Closed sessions count end - start. An open session counts now - start,
    but only while the task is running.

    Args:
        sessions: Work sessions of one task
        is_running: Whether the task's timer is running
        now: Current time (datetime, clock callable, or None for wall clock)

    Returns:
        Whole seconds (floored), never negative
    """
    current: Optional[datetime] = None
    total = 0.0

    for session in sessions:
        if session.end is not None:
            total += (session.end - session.start).total_seconds()
        elif is_running:
            if current is None:
                current = resolve_now(now)
            total += (current - session.start).total_seconds()

    return max(0, math.floor(total))


def task_duration(task: Task, now: Now = None) -> int:
    """Total tracked seconds for a task."""
    return compute_duration(task.sessions, task.is_running, now)


def _close_open_session(sessions: list[WorkSession], end: datetime) -> list[WorkSession]:
    """Copy of `sessions` with the most recent open one closed at `end`."""
    closed = list(sessions)
    for index in range(len(closed) - 1, -1, -1):
        if closed[index].is_open:
            closed[index] = replace(closed[index], end=end)
            break
    return closed


def start_task(task: Task, now: Now = None) -> Task:
    """
    Start the timer on a task.

    No-op if the task is already running or completed.

    Returns:
        Task with a new open session and is_running set
    """
    if task.is_running or task.is_completed:
        logger.debug(f"Start ignored for task {task.id} (running={task.is_running}, completed={task.is_completed})")
        return task

    started = resolve_now(now)
    logger.debug(f"Starting task {task.id} at {started.isoformat()}")
    return replace(
        task,
        sessions=[*task.sessions, WorkSession(start=started)],
        is_running=True,
    )


def pause_task(task: Task, now: Now = None) -> Task:
    """
    Pause a running task.

    No-op if the task is not running.

    Returns:
        Task with its open session closed and is_running cleared
    """
    if not task.is_running:
        logger.debug(f"Pause ignored for task {task.id} (not running)")
        return task

    ended = resolve_now(now)
    logger.debug(f"Pausing task {task.id} at {ended.isoformat()}")
    return replace(
        task,
        sessions=_close_open_session(task.sessions, ended),
        is_running=False,
    )


def complete_task(task: Task, now: Now = None) -> Task:
    """
    Mark a task completed, closing its open session first if running.

    Returns:
        Task with is_completed set and completed_at stamped
    """
    finished = resolve_now(now)
    done = pause_task(task, finished)
    return replace(done, is_completed=True, completed_at=finished)


def reopen_task(task: Task) -> Task:
    """Clear the completed flag. Sessions and completed_at are kept; the timer stays stopped."""
    if not task.is_completed:
        logger.debug(f"Reopen ignored for task {task.id} (not completed)")
        return task
    return replace(task, is_completed=False)


def add_manual_session(task: Task, start: TimestampLike, end: TimestampLike) -> Task:
    """
    Record a closed session entered by hand.

    Args:
        task: Task to add time to
        start: Session start (datetime or ISO string)
        end: Session end (datetime or ISO string)

    Returns:
        Task with one more closed session; is_running unchanged

    Raises:
        InvalidRangeError: If either bound is unparsable or end <= start
    """
    try:
        start_at = parse_timestamp(start)
        end_at = parse_timestamp(end)
    except (TypeError, ValueError) as e:
        raise InvalidRangeError(start, end, f"Invalid time range: {e}") from e

    if end_at <= start_at:
        raise InvalidRangeError(start, end)

    logger.debug(f"Adding manual session to task {task.id}: {start_at.isoformat()} - {end_at.isoformat()}")
    return replace(task, sessions=[*task.sessions, WorkSession(start=start_at, end=end_at)])
