"""casekeeper - Legal case manager with billable time tracking."""

__version__ = "0.1.0"

from .models import AppData, Case, Task, WorkSession

__all__ = [
    "__version__",
    "AppData",
    "Case",
    "Task",
    "WorkSession",
]
