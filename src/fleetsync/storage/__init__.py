"""Local durable storage for entity collections."""

from fleetsync.storage.collection import StoredCollection
from fleetsync.storage.keyvalue import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__all__ = [
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "StoredCollection",
]
