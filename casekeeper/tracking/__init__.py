"""Task time tracking.

- timer: start/pause/complete/reopen state machine and duration
- global_timer: start a task while keeping a single running timer
- locator: find the running (or last remembered) task across cases
- ticker: cancellable periodic display refresh
"""

from .global_timer import pause_all, start_timer
from .locator import (
    ActiveTimer,
    ActiveTimerLocator,
    find_by_ref,
    find_running_task,
    running_tasks,
)
from .ticker import DisplayTicker
from .timer import (
    add_manual_session,
    complete_task,
    compute_duration,
    pause_task,
    reopen_task,
    start_task,
    task_duration,
)

__all__ = [
    # Timer
    "add_manual_session",
    "complete_task",
    "compute_duration",
    "pause_task",
    "reopen_task",
    "start_task",
    "task_duration",
    # Single timer
    "pause_all",
    "start_timer",
    # Locator
    "ActiveTimer",
    "ActiveTimerLocator",
    "find_by_ref",
    "find_running_task",
    "running_tasks",
    # Ticker
    "DisplayTicker",
]
