from __future__ import annotations

import json
from pathlib import Path

import pytest

from fleetsync.storage import FileKeyValueStore, MemoryKeyValueStore, StoredCollection


def test_file_store_round_trips_and_lists_keys(tmp_path: Path) -> None:
    store = FileKeyValueStore(tmp_path / "data")
    assert store.keys() == []
    assert store.get_item("app_vehicles") is None

    store.set_item("app_vehicles", "[]")
    store.set_item("app_drivers", '[{"id":"1"}]')

    assert store.get_item("app_drivers") == '[{"id":"1"}]'
    assert store.keys() == ["app_drivers", "app_vehicles"]
    assert sorted(p.name for p in (tmp_path / "data").iterdir()) == ["app_drivers.json", "app_vehicles.json"]

    store.remove_item("app_drivers")
    store.remove_item("app_drivers")
    assert store.keys() == ["app_vehicles"]


def test_file_store_overwrites_whole_value(tmp_path: Path) -> None:
    store = FileKeyValueStore(tmp_path)
    store.set_item("app_payments", "x" * 100)
    store.set_item("app_payments", "short")
    assert store.get_item("app_payments") == "short"


@pytest.mark.parametrize("key", ["", "../escape", "a/b", "with space"])
def test_file_store_rejects_unsafe_keys(tmp_path: Path, key: str) -> None:
    with pytest.raises(ValueError):
        FileKeyValueStore(tmp_path).set_item(key, "[]")


def test_load_fails_soft(tmp_path: Path) -> None:
    store = FileKeyValueStore(tmp_path)
    stored = StoredCollection(store)
    store.set_item("app_broken", "{not json")
    store.set_item("app_object", '{"id": "1"}')
    store.set_item("app_mixed", '[{"id": "1"}, 2, "x", null, {"id": "2"}]')
    (tmp_path / "app_binary.json").write_bytes(b"\xff\xfe[not utf8")

    assert stored.load("app_missing") == []
    assert stored.load("app_broken") == []
    assert stored.load("app_binary") == []
    assert stored.load("app_object") == []
    assert stored.load("app_mixed") == [{"id": "1"}, {"id": "2"}]


def test_save_overwrites_with_json_array() -> None:
    store = MemoryKeyValueStore()
    stored = StoredCollection(store)

    stored.save("app_drivers", [{"id": "1", "name": "José"}, {"id": "2"}])
    stored.save("app_drivers", [{"id": "3"}])

    raw = store.get_item("app_drivers")
    assert raw is not None
    assert json.loads(raw) == [{"id": "3"}]
    stored.save("app_drivers", [{"id": "1", "name": "José"}])
    assert "José" in (store.get_item("app_drivers") or "")


def test_clear_all_removes_only_fleet_keys() -> None:
    store = MemoryKeyValueStore(
        {
            "app_vehicles": "[]",
            "app_free_days": "[]",
            "app_custom": "[]",
            "theme": "dark",
        }
    )

    removed = StoredCollection(store).clear_all()

    assert removed == ["app_custom", "app_free_days", "app_vehicles"]
    assert store.keys() == ["theme"]
