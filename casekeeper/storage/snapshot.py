"""JSON data file holding the whole application snapshot.

The file is read and written wholesale: there are no partial updates. Loading
fills in collections missing from older files.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

from ..exceptions import SnapshotError
from ..models.snapshot import AppData
from ..utils.logging import get_logger

logger = get_logger(__name__)

BACKUP_PREFIX = "casekeeper_backup_"


def parse_snapshot(text: str, source: str = "") -> AppData:
    """
    Parse snapshot JSON text.

    Raises:
        SnapshotError: If the text is not a readable snapshot
    """
    try:
        data: Union[dict[str, Any], list] = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(source, f"invalid JSON: {e.msg}") from e

    if not isinstance(data, (dict, list)):
        raise SnapshotError(source, "expected an object or a list of cases")

    try:
        return AppData.from_dict(data)
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise SnapshotError(source, f"malformed record: {e}") from e


def read_snapshot_text(path: Path) -> str:
    """
    Read a snapshot file as UTF-8 text.

    Raises:
        SnapshotError: If the file cannot be read or is not UTF-8
    """
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise SnapshotError(str(path), f"not UTF-8 text: {e.reason}") from e
    except OSError as e:
        raise SnapshotError(str(path), e.strerror or str(e)) from e


def dump_snapshot(data: AppData) -> str:
    """Serialize a snapshot as indented JSON."""
    return json.dumps(data.to_dict(), indent=2, ensure_ascii=False)


class SnapshotStore:
    """Get/replace access to the data file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> AppData:
        """
        Load the snapshot. A missing file yields an empty snapshot.

        Raises:
            SnapshotError: If the file exists but cannot be parsed
        """
        if not self.path.exists():
            logger.debug(f"No data file at {self.path}; starting empty")
            return AppData()

        return parse_snapshot(read_snapshot_text(self.path), str(self.path))

    def save(self, data: AppData) -> Path:
        """Overwrite the data file with the given snapshot."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(dump_snapshot(data))
        tmp_path.replace(self.path)

        logger.debug(f"Saved {len(data.cases)} cases to {self.path}")
        return self.path

    def import_json(self, text: str) -> AppData:
        """Replace the stored snapshot with one parsed from JSON text."""
        data = parse_snapshot(text, "import")
        self.save(data)
        logger.info(f"Imported {len(data.cases)} cases and {len(data.parties)} parties")
        return data

    def import_file(self, path: Path) -> AppData:
        """Replace the stored snapshot with the contents of a JSON file."""
        return self.import_json(read_snapshot_text(Path(path)))

    def export_backup(self, directory: Path, today: Optional[date] = None) -> Path:
        """Write a dated copy of the current snapshot into `directory`."""
        today = today or date.today()
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        backup_path = directory / f"{BACKUP_PREFIX}{today.isoformat()}.json"
        with open(backup_path, "w", encoding="utf-8") as f:
            f.write(dump_snapshot(self.load()))

        logger.info(f"Wrote backup {backup_path}")
        return backup_path
