"""Persistence for casekeeper.

- snapshot: the JSON data file with every case and party
- timer_ref: the YAML file remembering the last timer shown
"""

from .snapshot import BACKUP_PREFIX, SnapshotStore, dump_snapshot, parse_snapshot
from .timer_ref import TimerRef, TimerRefStore

__all__ = [
    "BACKUP_PREFIX",
    "SnapshotStore",
    "TimerRef",
    "TimerRefStore",
    "dump_snapshot",
    "parse_snapshot",
]
