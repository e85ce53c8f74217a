"""Persisted last-known timer reference.

A small YAML file remembering which task the timer widget last showed, so
the widget survives a restart even after the task was paused.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TimerRef:
    """Pointer to a task inside a case."""

    case_id: str
    task_id: str


class TimerRefStore:
    """Reads and writes the timer reference file.

    File layout:
        case_id: <id>
        task_id: <id>
        minimized: false
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable timer reference {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def load(self) -> Optional[TimerRef]:
        """Return the remembered reference, or None."""
        data = self._read()
        case_id = data.get("case_id")
        task_id = data.get("task_id")
        if not case_id or not task_id:
            return None
        return TimerRef(case_id=str(case_id), task_id=str(task_id))

    def save(self, ref: TimerRef) -> None:
        """Remember a reference, keeping the minimized flag."""
        data = self._read()
        if data.get("case_id") == ref.case_id and data.get("task_id") == ref.task_id:
            return
        data.update(case_id=ref.case_id, task_id=ref.task_id)
        data.setdefault("minimized", False)
        self._write(data)

    def clear(self) -> None:
        """Forget the reference, keeping the minimized flag."""
        data = self._read()
        data.pop("case_id", None)
        data.pop("task_id", None)
        self._write(data)

    @property
    def minimized(self) -> bool:
        return bool(self._read().get("minimized", False))

    def set_minimized(self, value: bool) -> None:
        data = self._read()
        data["minimized"] = bool(value)
        self._write(data)
