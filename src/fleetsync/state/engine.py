"""Synchronization engine.

A :class:`SyncedCollection` owns one in-memory collection of entities and
keeps it consistent with exactly one backing store, chosen once when the
collection is built:

* :class:`LocalBacked` - memory is mutated directly and a
  :class:`~fleetsync.state.persistence.LocalPersistence` subscriber
  overwrites the stored array after every change. If that write fails,
  memory is put back as it was.
* :class:`RemoteBacked` - every mutation is attempted against the remote
  table first; memory only changes once the remote store confirms.

Failures are never raised to the caller. They are logged, kept as
``last_failure``/``error`` and reported through the notifier, and the
operation returns ``False``.
"""

from __future__ import annotations

import contextlib
import logging
import secrets
import time
from collections.abc import AsyncIterator, Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import ValidationError

from fleetsync.exceptions import (
    LocalSaveFailed,
    RemoteDeleteFailed,
    RemoteReadFailed,
    RemoteWriteFailed,
    SyncError,
    ValidationFailed,
)
from fleetsync.models._base import FleetBaseModel
from fleetsync.notifications import LoggingNotifier, Notification, NotificationVariant, Notifier
from fleetsync.remote import RemoteCollectionClient, RemoteFailure
from fleetsync.state.events import ChangeKind, CollectionChanged
from fleetsync.state.persistence import LocalPersistence
from fleetsync.storage.collection import StoredCollection
from fleetsync.transformers import EntityShape, IdentityShape
from fleetsync.validators import Validator

_logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=FleetBaseModel)

Listener = Callable[[CollectionChanged], None]


class SyncMode(StrEnum):
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class CollectionConfig(Generic[EntityT]):
    """Per-collection configuration, immutable for the collection's lifetime.

    Parameters
    ----------
    model : type[EntityT]
        Entity model for every item of the collection.
    storage_key : str
        Local store key (also identifies the collection in events).
    table : str or None
        Remote table. Without one the collection is local-only.
    prefer_remote : bool
        Use the remote table when one is configured and a client exists.
    validator : Validator or None
        Gate run on ``add``/``update`` payloads.
    shape : EntityShape or None
        Application <-> remote field mapping; identity when absent.
    on_add, on_update, on_delete
        Lifecycle callbacks invoked after a successful mutation.
    """

    model: type[EntityT]
    storage_key: str
    table: str | None = None
    prefer_remote: bool = True
    validator: Validator | None = None
    shape: EntityShape | None = None
    on_add: Callable[[EntityT], None] | None = None
    on_update: Callable[[str, dict[str, Any]], None] | None = None
    on_delete: Callable[[str], None] | None = None


@dataclass(frozen=True)
class LocalBacked:
    stored: StoredCollection

    mode: ClassVar[SyncMode] = SyncMode.LOCAL


@dataclass(frozen=True)
class RemoteBacked:
    client: RemoteCollectionClient
    table: str
    shape: EntityShape

    mode: ClassVar[SyncMode] = SyncMode.REMOTE


Backend = LocalBacked | RemoteBacked


def resolve_backend(
    config: CollectionConfig[Any],
    stored: StoredCollection,
    remote: RemoteCollectionClient | None,
) -> Backend:
    """Pick the backing store once; a remote request without table or client falls back to local."""
    if config.prefer_remote and config.table and remote is not None:
        return RemoteBacked(client=remote, table=config.table, shape=config.shape or IdentityShape())
    if config.prefer_remote and (config.table or remote is not None):
        _logger.info(
            "Collection %s falls back to local-only (table=%s, remote client=%s)",
            config.storage_key,
            config.table,
            "yes" if remote is not None else "no",
        )
    return LocalBacked(stored=stored)


def _time_id() -> str:
    """Millisecond wall-clock id."""
    return str(time.time_ns() // 1_000_000)


def _validation_reasons(exc: ValidationError) -> list[str]:
    reasons: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        reasons.append(f"{loc}: {err.get('msg', 'invalid value')}" if loc else str(err.get("msg")))
    return reasons


def _json_fields(entity: FleetBaseModel, keys: Iterable[str], *, drop_none: bool) -> dict[str, Any]:
    """JSON-ready values of *entity* for the application fields named in *keys*."""
    dumped = entity.model_dump(by_alias=True, mode="json")
    fields: dict[str, Any] = {}
    for key in keys:
        if key not in dumped:
            continue
        value = dumped[key]
        if drop_none and value is None:
            continue
        fields[key] = value
    return fields


class SyncedCollection(Generic[EntityT]):
    """In-memory collection of one entity kind, authoritative for the UI.

    Usage::

        vehicles = SyncedCollection(config, stored=stored, remote=client)
        await vehicles.load()
        ok = await vehicles.add({"plate": "ABC-123", "brand": "Toyota"})

    Operations for one collection are expected to run on a single event
    loop. Overlapping remote calls are allowed to race; whichever
    completes last determines the final memory state.
    """

    def __init__(
        self,
        config: CollectionConfig[EntityT],
        *,
        stored: StoredCollection,
        remote: RemoteCollectionClient | None = None,
        notifier: Notifier | None = None,
        id_factory: Callable[[], str] = _time_id,
    ) -> None:
        self._config = config
        self._backend: Backend = resolve_backend(config, stored, remote)
        self._notifier: Notifier = notifier or LoggingNotifier()
        self._id_factory = id_factory
        self._items: list[EntityT] = []
        self._listeners: list[Listener] = []
        self._pending = 0
        self._failure: SyncError | None = None
        self._loaded = False

        if isinstance(self._backend, LocalBacked):
            self._items = self._read_local(self._backend.stored)
            self._loaded = True
            self.subscribe(LocalPersistence(self._backend.stored, config.storage_key))

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def config(self) -> CollectionConfig[EntityT]:
        return self._config

    @property
    def mode(self) -> SyncMode:
        return self._backend.mode

    @property
    def items(self) -> tuple[EntityT, ...]:
        """Snapshot of the collection in insertion order."""
        return tuple(self._items)

    @property
    def loading(self) -> bool:
        """``True`` while any remote call for this collection is outstanding."""
        return self._pending > 0

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def error(self) -> str | None:
        """Message of the last failure, ``None`` after a clean operation."""
        return self._failure.message if self._failure is not None else None

    @property
    def last_failure(self) -> SyncError | None:
        return self._failure

    def get(self, entity_id: str) -> EntityT | None:
        for item in self._items:
            if item.id == entity_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[EntityT]:
        return iter(tuple(self._items))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Populate memory from the active store (re-reads the local store, or refreshes)."""
        if isinstance(self._backend, RemoteBacked):
            await self.refresh()
            return
        self._items = self._read_local(self._backend.stored)
        self._loaded = True
        self._emit(ChangeKind.LOAD)

    async def add(self, data: Mapping[str, Any]) -> bool:
        """Create an entity from *data* (any ``id`` in it is ignored)."""
        self._failure = None
        payload = self._config.model.app_keys(data)
        payload.pop("id", None)

        rejected = self._validate(payload, partial=False)
        if rejected is not None:
            return self._fail(rejected)

        backend = self._backend
        if isinstance(backend, RemoteBacked):
            candidate = self._materialize({**payload, "id": "pending"})
            if isinstance(candidate, ValidationFailed):
                return self._fail(candidate)
            row = backend.shape.to_remote(_json_fields(candidate, payload.keys(), drop_none=True))
            async with self._remote_call():
                result = await backend.client.insert(backend.table, row)
            if isinstance(result, RemoteFailure):
                return self._fail(RemoteWriteFailed(result.message, code=result.code))
            entity = self._materialize(backend.shape.from_remote(result))
            if isinstance(entity, ValidationFailed):
                return self._fail(RemoteWriteFailed(f"Stored row is not a valid {self._model_name}: {entity.message}"))
        else:
            entity = self._materialize({**payload, "id": self._new_id()})
            if isinstance(entity, ValidationFailed):
                return self._fail(entity)

        previous = list(self._items)
        self._upsert(entity)
        unsaved = self._commit(previous, ChangeKind.ADD, entity.id)
        if unsaved is not None:
            return self._fail(unsaved)
        if self._config.on_add is not None:
            self._config.on_add(entity)
        self._notify("Item added", "The item was registered successfully")
        return True

    async def update(self, entity_id: str, data: Mapping[str, Any]) -> bool:
        """Shallow-merge *data* into the entity with *entity_id*.

        No existence check is made: an unknown id changes nothing and the
        call still succeeds.
        """
        self._failure = None
        patch = self._config.model.app_keys(data)
        patch.pop("id", None)

        rejected = self._validate(patch, partial=True)
        if rejected is not None:
            return self._fail(rejected)

        current = self.get(entity_id)
        base = current.to_app_dict() if current is not None else {}
        merged = self._materialize({**base, **patch, "id": entity_id})
        if isinstance(merged, ValidationFailed):
            return self._fail(merged)

        backend = self._backend
        if isinstance(backend, RemoteBacked):
            row = backend.shape.to_remote(_json_fields(merged, patch.keys(), drop_none=False))
            if row:
                async with self._remote_call():
                    result = await backend.client.update(backend.table, entity_id, row)
                if isinstance(result, RemoteFailure):
                    return self._fail(RemoteWriteFailed(result.message, code=result.code))

        previous = list(self._items)
        if self._merge_into_memory(entity_id, patch):
            unsaved = self._commit(previous, ChangeKind.UPDATE, entity_id)
            if unsaved is not None:
                return self._fail(unsaved)
        if self._config.on_update is not None:
            self._config.on_update(entity_id, dict(patch))
        self._notify("Item updated", "The data was updated successfully")
        return True

    async def remove(self, entity_id: str) -> bool:
        """Delete the entity with *entity_id* (remote row first when remote-backed)."""
        self._failure = None
        backend = self._backend
        if isinstance(backend, RemoteBacked):
            async with self._remote_call():
                result = await backend.client.delete(backend.table, entity_id)
            if isinstance(result, RemoteFailure):
                return self._fail(RemoteDeleteFailed(result.message, code=result.code))

        previous = list(self._items)
        self._items = [item for item in self._items if item.id != entity_id]
        if len(self._items) != len(previous):
            unsaved = self._commit(previous, ChangeKind.REMOVE, entity_id)
            if unsaved is not None:
                return self._fail(unsaved)
        if self._config.on_delete is not None:
            self._config.on_delete(entity_id)
        self._notify("Item removed", "The item was removed successfully")
        return True

    async def refresh(self) -> None:
        """Replace memory with the full remote table. No-op for local-only collections.

        Concurrent refreshes are not deduplicated; the last one to finish wins.
        On failure memory keeps its last known state.
        """
        backend = self._backend
        if not isinstance(backend, RemoteBacked):
            _logger.debug("refresh() on local-only collection %s ignored", self._config.storage_key)
            return

        self._failure = None
        async with self._remote_call():
            result = await backend.client.list(backend.table)
        if isinstance(result, RemoteFailure):
            self._fail(RemoteReadFailed(result.message, code=result.code))
            return

        entities: list[EntityT] = []
        seen: set[str] = set()
        for row in result:
            entity = self._materialize(backend.shape.from_remote(row))
            if isinstance(entity, ValidationFailed):
                _logger.warning("Skipping invalid %s row from %s: %s", self._model_name, backend.table, entity.message)
                continue
            if entity.id in seen:
                continue
            seen.add(entity.id)
            entities.append(entity)

        self._items = entities
        self._loaded = True
        self._emit(ChangeKind.REFRESH)
        _logger.debug("Refreshed %s: %d items", backend.table, len(entities))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @property
    def _model_name(self) -> str:
        return self._config.model.__name__

    @contextlib.asynccontextmanager
    async def _remote_call(self) -> AsyncIterator[None]:
        self._pending += 1
        try:
            yield
        finally:
            self._pending -= 1

    def _read_local(self, stored: StoredCollection) -> list[EntityT]:
        entities: list[EntityT] = []
        seen: set[str] = set()
        for row in stored.load(self._config.storage_key):
            entity = self._materialize(row)
            if isinstance(entity, ValidationFailed):
                _logger.warning(
                    "Skipping invalid %s in %s: %s", self._model_name, self._config.storage_key, entity.message
                )
                continue
            if entity.id in seen:
                _logger.warning("Duplicate id %s in %s; keeping the first", entity.id, self._config.storage_key)
                continue
            seen.add(entity.id)
            entities.append(entity)
        return entities

    def _validate(self, payload: Mapping[str, Any], *, partial: bool) -> ValidationFailed | None:
        validator = self._config.validator
        if validator is None:
            return None
        result = validator.validate(payload, partial=partial)
        if result.is_valid:
            return None
        return ValidationFailed(result.errors)

    def _materialize(self, data: Mapping[str, Any]) -> EntityT | ValidationFailed:
        try:
            return self._config.model.model_validate(dict(data))
        except ValidationError as exc:
            return ValidationFailed(_validation_reasons(exc))

    def _new_id(self) -> str:
        existing = {item.id for item in self._items}
        candidate = self._id_factory()
        while candidate in existing:
            if candidate.isdigit():
                candidate = str(int(candidate) + 1)
            else:
                candidate = f"{candidate}-{secrets.token_hex(2)}"
        return candidate

    def _upsert(self, entity: EntityT) -> None:
        for index, item in enumerate(self._items):
            if item.id == entity.id:
                self._items[index] = entity
                return
        self._items.append(entity)

    def _merge_into_memory(self, entity_id: str, patch: Mapping[str, Any]) -> bool:
        """Apply *patch* to the entity as it is in memory now. Returns whether anything matched."""
        for index, item in enumerate(self._items):
            if item.id != entity_id:
                continue
            merged = self._materialize({**item.to_app_dict(), **patch, "id": entity_id})
            if isinstance(merged, ValidationFailed):
                # Only reachable if memory changed under a racing call; keep the current item.
                _logger.warning("Could not merge update into %s %s: %s", self._model_name, entity_id, merged.message)
                return False
            self._items[index] = merged
            return True
        return False

    def _emit(self, change: ChangeKind, entity_id: str | None = None) -> None:
        if not self._listeners:
            return
        event = CollectionChanged(
            storage_key=self._config.storage_key,
            change=change,
            entity_id=entity_id,
            items=tuple(item.to_app_dict() for item in self._items),
        )
        for listener in list(self._listeners):
            listener(event)

    def _commit(self, previous: list[EntityT], change: ChangeKind, entity_id: str) -> LocalSaveFailed | None:
        """Announce a memory change; restore *previous* if the local store could not be written."""
        try:
            self._emit(change, entity_id)
        except OSError as exc:
            if not isinstance(self._backend, LocalBacked):
                raise
            # The store keeps its last complete write, which matches *previous*.
            self._items = previous
            return LocalSaveFailed(f"Could not write {self._config.storage_key}: {exc}")
        return None

    def _notify(self, title: str, description: str) -> None:
        self._notifier.notify(Notification(title=title, description=description))

    def _fail(self, error: SyncError) -> bool:
        self._failure = error
        _logger.warning("%s on %s: %s", type(error).__name__, self._config.storage_key, error.message)
        self._notifier.notify(
            Notification(
                title=error.title,
                description=error.message,
                variant=NotificationVariant.DESTRUCTIVE,
            )
        )
        return False
