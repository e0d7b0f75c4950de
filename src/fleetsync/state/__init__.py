"""Synchronization layer.

This package owns the in-memory collections: it is the only code allowed
to mutate them, and it keeps each one consistent with its backing store.
"""

from fleetsync.state.engine import CollectionConfig, LocalBacked, RemoteBacked, SyncedCollection, SyncMode
from fleetsync.state.events import ChangeKind, CollectionChanged
from fleetsync.state.persistence import LocalPersistence

__all__ = [
    "ChangeKind",
    "CollectionChanged",
    "CollectionConfig",
    "LocalBacked",
    "LocalPersistence",
    "RemoteBacked",
    "SyncMode",
    "SyncedCollection",
]
