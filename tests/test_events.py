from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from fleetsync.state.events import ChangeKind, CollectionChanged
from fleetsync.state.persistence import LocalPersistence
from fleetsync.storage import MemoryKeyValueStore, StoredCollection


def test_storage_key_is_normalized_and_required() -> None:
    event = CollectionChanged(storage_key="  app_vehicles ", change=ChangeKind.ADD)
    assert event.storage_key == "app_vehicles"
    assert event.items == ()

    with pytest.raises(ValidationError):
        CollectionChanged(storage_key="   ", change=ChangeKind.ADD)


def test_persistence_writes_its_own_key_only() -> None:
    store = MemoryKeyValueStore()
    persist = LocalPersistence(StoredCollection(store), "app_drivers")

    persist(CollectionChanged(storage_key="app_vehicles", change=ChangeKind.ADD, items=({"id": "1"},)))
    assert store.get_item("app_vehicles") is None

    persist(CollectionChanged(storage_key="app_drivers", change=ChangeKind.ADD, items=({"id": "2"},)))
    assert json.loads(store.get_item("app_drivers") or "null") == [{"id": "2"}]


def test_persistence_skips_load_events() -> None:
    store = MemoryKeyValueStore({"app_drivers": '[{"id": "1"}]'})
    persist = LocalPersistence(StoredCollection(store), "app_drivers")

    persist(CollectionChanged(storage_key="app_drivers", change=ChangeKind.LOAD, items=()))

    assert store.get_item("app_drivers") == '[{"id": "1"}]'
