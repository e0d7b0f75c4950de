"""Local persistence subscriber."""

from __future__ import annotations

import logging

from fleetsync.state.events import ChangeKind, CollectionChanged
from fleetsync.storage.collection import StoredCollection

_logger = logging.getLogger(__name__)


class LocalPersistence:
    """Mirror every collection change into the local store, whole-array overwrite.

    Attached automatically to local-only collections. ``load`` events are
    skipped since the snapshot came from the store in the first place.
    """

    def __init__(self, stored: StoredCollection, storage_key: str) -> None:
        self._stored = stored
        self._key = storage_key

    def __call__(self, event: CollectionChanged) -> None:
        if event.storage_key != self._key or event.change == ChangeKind.LOAD:
            return
        self._stored.save(self._key, event.items)
        _logger.debug("Persisted %d items to %s after %s", len(event.items), self._key, event.change)
