"""Read/write whole entity collections to a key/value store."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from fleetsync._constants import LOCAL_KEY_PREFIX, STORAGE_KEYS
from fleetsync.storage.keyvalue import KeyValueStore

_logger = logging.getLogger(__name__)


class StoredCollection:
    """JSON-array snapshots of entity collections, one key per kind.

    Pure serialization: no validation happens here.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def load(self, key: str) -> list[dict[str, Any]]:
        """Return the records stored under *key*.

        Fails soft: a missing key, unreadable or undecodable file, non-JSON or a
        non-array document all yield ``[]``. Non-object array items are
        skipped.
        """
        try:
            raw = self._store.get_item(key)
        except OSError as exc:
            _logger.warning("Could not read stored collection %s: %s", key, exc)
            return []
        except UnicodeDecodeError:
            _logger.warning("Stored collection %s is not valid UTF-8; ignoring it", key)
            return []
        if raw is None:
            return []
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError:
            _logger.warning("Stored collection %s is not valid JSON; ignoring it", key)
            return []
        if not isinstance(decoded, list):
            _logger.warning("Stored collection %s is not an array; ignoring it", key)
            return []
        return [item for item in decoded if isinstance(item, dict)]

    def save(self, key: str, items: Iterable[Mapping[str, Any]]) -> None:
        """Overwrite *key* with the full collection."""
        payload = json.dumps([dict(item) for item in items], ensure_ascii=False, separators=(",", ":"))
        self._store.set_item(key, payload)

    def clear_all(self) -> list[str]:
        """Remove every fleet key (known or ``app_``-prefixed). Returns the removed keys."""
        existing = self._store.keys()
        targets = sorted(k for k in existing if k in STORAGE_KEYS or k.startswith(LOCAL_KEY_PREFIX))
        for key in targets:
            self._store.remove_item(key)
        _logger.info("Cleared %d local collections", len(targets))
        return targets
