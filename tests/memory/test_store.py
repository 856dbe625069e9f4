"""Tests for persistent project memory."""

import json as _json
import pathlib as _pathlib

import pytest as _pytest

import spawner.memory as memory


class _Clock:
    """Manually advanced clock (seconds)."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


class TestProjectMemory:
    """Tests for ProjectMemory."""

    def test_set_and_get(self, tmp_path: _pathlib.Path) -> None:
        store = memory.ProjectMemory(tmp_path / "memory.json", clock=_Clock())
        entry = store.set("stack", "nextjs")

        assert entry.key == "stack"
        assert entry.value == "nextjs"
        assert entry.timestamp == 1_700_000_000_000
        assert store.get("stack") == entry

    def test_get_missing_key(self, tmp_path: _pathlib.Path) -> None:
        store = memory.ProjectMemory(tmp_path / "memory.json")
        assert store.get("nope") is None

    def test_set_overwrites(self, tmp_path: _pathlib.Path) -> None:
        clock = _Clock()
        store = memory.ProjectMemory(tmp_path / "memory.json", clock=clock)
        store.set("db", "mysql")
        clock.now += 1
        store.set("db", "postgres")

        assert len(store) == 1
        assert store.get("db").value == "postgres"

    def test_list_newest_first(self, tmp_path: _pathlib.Path) -> None:
        clock = _Clock()
        store = memory.ProjectMemory(tmp_path / "memory.json", clock=clock)
        store.set("first", "1")
        clock.now += 5
        store.set("second", "2")
        clock.now += 5
        store.set("third", "3")

        assert [e.key for e in store.list()] == ["third", "second", "first"]

    def test_persists_across_instances(self, tmp_path: _pathlib.Path) -> None:
        path = tmp_path / "nested" / "memory.json"
        memory.ProjectMemory(path, clock=_Clock()).set("auth", "clerk")

        reloaded = memory.ProjectMemory(path)
        assert reloaded.get("auth").value == "clerk"

    def test_file_format(self, tmp_path: _pathlib.Path) -> None:
        path = tmp_path / "memory.json"
        memory.ProjectMemory(path, clock=_Clock()).set("stack", "nextjs")

        data = _json.loads(path.read_text())
        assert data == {
            "stack": {"key": "stack", "value": "nextjs", "timestamp": 1_700_000_000_000}
        }

    def test_corrupt_file_starts_empty(self, tmp_path: _pathlib.Path) -> None:
        path = tmp_path / "memory.json"
        path.write_text("{not json")

        store = memory.ProjectMemory(path)
        assert len(store) == 0

        store.set("fresh", "start")
        assert memory.ProjectMemory(path).get("fresh").value == "start"

    def test_non_object_file_starts_empty(self, tmp_path: _pathlib.Path) -> None:
        path = tmp_path / "memory.json"
        path.write_text("[1, 2, 3]")
        assert len(memory.ProjectMemory(path)) == 0

    def test_entry_round_trip(self) -> None:
        entry = memory.MemoryEntry(key="k", value="v", timestamp=5)
        assert memory.MemoryEntry.from_dict(entry.to_dict()) == entry

    def test_save_failure_keeps_entry(
        self, tmp_path: _pathlib.Path, caplog: _pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level("ERROR")
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("occupied")
        store = memory.ProjectMemory(blocker / "memory.json", clock=_Clock())

        entry = store.set("stack", "nextjs")

        assert entry.value == "nextjs"
        assert store.get("stack") == entry
        assert "Failed to save memory" in caplog.text
        assert not (blocker / "memory.json").exists()
