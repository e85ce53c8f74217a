"""Tests for the data file and timer reference stores."""

import json
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
import yaml

from casekeeper.exceptions import SnapshotError
from casekeeper.models import AppData, Case, Task
from casekeeper.storage import BACKUP_PREFIX, SnapshotStore, TimerRef, TimerRefStore
from casekeeper.tracking import start_task

T0 = datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


class TestSnapshotStore:
    """Tests for SnapshotStore."""

    def test_load_missing_file_is_empty(self, snapshot_store: SnapshotStore):
        """A missing data file loads as an empty snapshot."""
        data = snapshot_store.load()

        assert data.cases == []
        assert data.parties == []

    def test_save_and_load(self, snapshot_store: SnapshotStore, sample_case: Case):
        """Save a snapshot and load it back unchanged."""
        running = start_task(Task(id="t9", created_at=T0), T0)
        sample_case.add_task(running)
        snapshot_store.save(AppData(cases=[sample_case]))

        loaded = snapshot_store.load()

        assert loaded.cases == [sample_case]
        assert loaded.get_case("case-A").get_task("t9").is_running is True

    def test_save_creates_parent_dirs(self, tmp_path: Path):
        """save() creates missing directories."""
        store = SnapshotStore(tmp_path / "deep" / "nested" / "database.json")

        store.save(AppData())

        assert store.exists()

    def test_save_overwrites_wholesale(self, snapshot_store: SnapshotStore, sample_case: Case):
        """Each save replaces the whole document."""
        snapshot_store.save(AppData(cases=[sample_case]))
        snapshot_store.save(AppData())

        raw = json.loads(snapshot_store.path.read_text(encoding="utf-8"))

        assert raw["cases"] == []
        assert not snapshot_store.path.with_suffix(".json.tmp").exists()

    def test_unicode_preserved(self, snapshot_store: SnapshotStore):
        """Non-ASCII text is written as-is."""
        snapshot_store.save(AppData(cases=[Case(id="c", name="张三诉李四")]))

        assert "张三诉李四" in snapshot_store.path.read_text(encoding="utf-8")
        assert snapshot_store.load().cases[0].name == "张三诉李四"

    def test_invalid_json(self, snapshot_store: SnapshotStore):
        """Unparsable files raise SnapshotError."""
        snapshot_store.path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SnapshotError):
            snapshot_store.load()

    def test_non_utf8_file(self, snapshot_store: SnapshotStore):
        """A data file that is not UTF-8 raises SnapshotError."""
        snapshot_store.path.write_bytes(b'{"cases": [{"id": "\xff\xfe"}]}')

        with pytest.raises(SnapshotError, match="not UTF-8"):
            snapshot_store.load()

    def test_import_file_non_utf8(self, snapshot_store: SnapshotStore, tmp_path: Path):
        """import_file() rejects non-UTF-8 input and keeps the stored data."""
        snapshot_store.save(AppData(cases=[Case(id="keep", name="Keep")]))
        bad = tmp_path / "bad.json"
        bad.write_bytes(b"\xff\xfe{}")

        with pytest.raises(SnapshotError):
            snapshot_store.import_file(bad)

        assert snapshot_store.load().cases[0].id == "keep"

    def test_malformed_record(self, snapshot_store: SnapshotStore):
        """A case without an id raises SnapshotError."""
        snapshot_store.path.write_text(json.dumps({"cases": [{"name": "no id"}]}), encoding="utf-8")

        with pytest.raises(SnapshotError):
            snapshot_store.load()

    def test_import_json_migrates(self, snapshot_store: SnapshotStore, sample_snapshot_json: dict):
        """import_json() replaces the data file with migrated content."""
        data = snapshot_store.import_json(json.dumps(sample_snapshot_json, ensure_ascii=False))

        assert len(data.cases) == 2
        raw = json.loads(snapshot_store.path.read_text(encoding="utf-8"))
        assert raw["cases"][1]["trash"] == {"tasks": [], "logs": [], "reminders": [], "deadlines": []}
        assert raw["cases"][1]["litigation"] == {"proceedings": []}

    def test_import_invalid_keeps_existing(self, snapshot_store: SnapshotStore, sample_case: Case):
        """A failed import leaves the data file alone."""
        snapshot_store.save(AppData(cases=[sample_case]))

        with pytest.raises(SnapshotError):
            snapshot_store.import_json("42")

        assert snapshot_store.load().cases == [sample_case]

    def test_export_backup(self, snapshot_store: SnapshotStore, sample_case: Case, tmp_path: Path):
        """export_backup() writes a dated copy."""
        snapshot_store.save(AppData(cases=[sample_case]))

        path = snapshot_store.export_backup(tmp_path / "backups", today=date(2025, 1, 15))

        assert path.name == f"{BACKUP_PREFIX}2025-01-15.json"
        assert json.loads(path.read_text(encoding="utf-8"))["cases"][0]["id"] == "case-A"


class TestTimerRefStore:
    """Tests for TimerRefStore."""

    def test_load_missing(self, ref_store: TimerRefStore):
        """No file means no reference and not minimized."""
        assert ref_store.load() is None
        assert ref_store.minimized is False

    def test_save_and_load(self, ref_store: TimerRefStore):
        """A saved reference loads back."""
        ref_store.save(TimerRef(case_id="A", task_id="T1"))

        assert TimerRefStore(ref_store.path).load() == TimerRef(case_id="A", task_id="T1")

    def test_minimized_independent_of_ref(self, ref_store: TimerRefStore):
        """Saving a reference keeps the minimized flag and vice versa."""
        ref_store.set_minimized(True)
        ref_store.save(TimerRef(case_id="A", task_id="T1"))

        assert ref_store.minimized is True

        ref_store.set_minimized(False)
        assert ref_store.load() == TimerRef(case_id="A", task_id="T1")

    def test_clear(self, ref_store: TimerRefStore):
        """clear() forgets the reference only."""
        ref_store.save(TimerRef(case_id="A", task_id="T1"))
        ref_store.set_minimized(True)

        ref_store.clear()

        assert ref_store.load() is None
        assert ref_store.minimized is True

    def test_corrupt_file_is_no_reference(self, ref_store: TimerRefStore):
        """An unreadable file is treated as no reference."""
        ref_store.path.write_text("case_id: [unclosed", encoding="utf-8")

        assert ref_store.load() is None

    def test_non_mapping_file(self, ref_store: TimerRefStore):
        """A YAML file that is not a mapping is ignored."""
        ref_store.path.write_text("- just\n- a list\n", encoding="utf-8")

        assert ref_store.load() is None

    def test_file_is_human_readable(self, ref_store: TimerRefStore):
        """The file is plain YAML."""
        ref_store.save(TimerRef(case_id="A", task_id="T1"))

        content = ref_store.path.read_text(encoding="utf-8")

        assert "case_id: A" in content
        assert yaml.safe_load(content)["task_id"] == "T1"
