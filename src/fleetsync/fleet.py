"""High-level async facade over every fleet collection."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, cast

import aiohttp

from fleetsync import _constants as c
from fleetsync.config import FleetSyncConfig
from fleetsync.days_not_worked import DaysNotWorkedService
from fleetsync.exceptions import FleetSyncError
from fleetsync.models import (
    CardexItem,
    Discount,
    Driver,
    FleetBaseModel,
    Investor,
    Maintenance,
    Payment,
    Settlement,
    SystemSettings,
    Vehicle,
)
from fleetsync.notifications import LoggingNotifier, Notifier
from fleetsync.remote import RemoteCollectionClient, create_remote_client
from fleetsync.state.engine import CollectionConfig, SyncedCollection, SyncMode
from fleetsync.storage import FileKeyValueStore, KeyValueStore, StoredCollection
from fleetsync.transformers import (
    CARDEX_SHAPE,
    DISCOUNT_SHAPE,
    DRIVER_SHAPE,
    INVESTOR_SHAPE,
    MAINTENANCE_SHAPE,
    PAYMENT_SHAPE,
    SETTINGS_SHAPE,
    SETTLEMENT_SHAPE,
    VEHICLE_SHAPE,
    ShapeTransformer,
)
from fleetsync.validators import DRIVER_VALIDATOR, INVESTOR_VALIDATOR, VEHICLE_VALIDATOR, Validator

_logger = logging.getLogger(__name__)


class EntityKind(StrEnum):
    VEHICLES = "vehicles"
    PAYMENTS = "payments"
    INVESTORS = "investors"
    DRIVERS = "drivers"
    MAINTENANCE = "maintenance"
    CARDEX = "cardex"
    DISCOUNTS = "discounts"
    SETTINGS = "settings"
    SETTLEMENTS = "settlements"


@dataclass(frozen=True)
class EntitySpec:
    """Static wiring for one entity kind."""

    model: type[FleetBaseModel]
    storage_key: str
    table: str
    shape: ShapeTransformer
    validator: Validator | None = None


ENTITY_SPECS: dict[EntityKind, EntitySpec] = {
    EntityKind.VEHICLES: EntitySpec(Vehicle, c.STORAGE_VEHICLES, c.TABLE_VEHICLES, VEHICLE_SHAPE, VEHICLE_VALIDATOR),
    EntityKind.PAYMENTS: EntitySpec(Payment, c.STORAGE_PAYMENTS, c.TABLE_PAYMENTS, PAYMENT_SHAPE),
    EntityKind.INVESTORS: EntitySpec(
        Investor, c.STORAGE_INVESTORS, c.TABLE_INVESTORS, INVESTOR_SHAPE, INVESTOR_VALIDATOR
    ),
    EntityKind.DRIVERS: EntitySpec(Driver, c.STORAGE_DRIVERS, c.TABLE_DRIVERS, DRIVER_SHAPE, DRIVER_VALIDATOR),
    EntityKind.MAINTENANCE: EntitySpec(Maintenance, c.STORAGE_MAINTENANCE, c.TABLE_MAINTENANCE, MAINTENANCE_SHAPE),
    EntityKind.CARDEX: EntitySpec(CardexItem, c.STORAGE_CARDEX, c.TABLE_CARDEX, CARDEX_SHAPE),
    EntityKind.DISCOUNTS: EntitySpec(Discount, c.STORAGE_DISCOUNTS, c.TABLE_DISCOUNTS, DISCOUNT_SHAPE),
    EntityKind.SETTINGS: EntitySpec(SystemSettings, c.STORAGE_SETTINGS, c.TABLE_SETTINGS, SETTINGS_SHAPE),
    EntityKind.SETTLEMENTS: EntitySpec(Settlement, c.STORAGE_SETTLEMENTS, c.TABLE_SETTLEMENTS, SETTLEMENT_SHAPE),
}


@dataclass(frozen=True)
class CollectionHooks:
    """Lifecycle callbacks for one kind, handed to its collection on creation."""

    on_add: Callable[[Any], None] | None = None
    on_update: Callable[[str, dict[str, Any]], None] | None = None
    on_delete: Callable[[str], None] | None = None


class FleetData:
    """Every fleet collection behind one object.

    Usage::

        async with FleetData(FleetSyncConfig.from_env()) as fleet:
            vehicles = await fleet.open(EntityKind.VEHICLES)
            await vehicles.add({"plate": "ABC-123", ...})

    Collections are created on first use and live as long as this object.
    Whether each one is remote-backed is decided at that moment, so a
    configuration with remote credentials must be entered (``async with``)
    before any collection is requested.
    """

    def __init__(
        self,
        config: FleetSyncConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        store: KeyValueStore | None = None,
        notifier: Notifier | None = None,
        hooks: dict[EntityKind, CollectionHooks] | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._stored = StoredCollection(store if store is not None else FileKeyValueStore(config.storage_dir))
        self._notifier: Notifier = notifier or LoggingNotifier()
        self._hooks = dict(hooks or {})
        self._remote: RemoteCollectionClient | None = None
        self._entered = False
        self._collections: dict[EntityKind, SyncedCollection[Any]] = {}

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FleetData:
        if self._config.has_remote and self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._remote = create_remote_client(self._config, self._http_session)
        self._entered = True
        _logger.info("FleetData opened (%s)", "remote" if self._remote is not None else "local-only")
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._remote = None
        self._entered = False
        self._collections.clear()

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    @property
    def config(self) -> FleetSyncConfig:
        return self._config

    @property
    def remote(self) -> RemoteCollectionClient | None:
        return self._remote

    def _require_ready(self) -> None:
        if self._config.has_remote and not self._entered:
            raise FleetSyncError("FleetData not initialized. Use 'async with FleetData(...) as fleet:'")

    def collection(self, kind: EntityKind) -> SyncedCollection[Any]:
        """The collection for *kind*, created on first use."""
        existing = self._collections.get(kind)
        if existing is not None:
            return existing
        self._require_ready()

        spec = ENTITY_SPECS[kind]
        hooks = self._hooks.get(kind, CollectionHooks())
        config: CollectionConfig[Any] = CollectionConfig(
            model=spec.model,
            storage_key=spec.storage_key,
            table=spec.table,
            validator=spec.validator,
            shape=spec.shape,
            on_add=hooks.on_add,
            on_update=hooks.on_update,
            on_delete=hooks.on_delete,
        )
        created: SyncedCollection[Any] = SyncedCollection(
            config,
            stored=self._stored,
            remote=self._remote,
            notifier=self._notifier,
        )
        self._collections[kind] = created
        _logger.debug("Created %s collection (%s)", kind, created.mode)
        return created

    async def open(self, kind: EntityKind) -> SyncedCollection[Any]:
        """Like :meth:`collection`, also loading remote-backed collections on first use."""
        created = self.collection(kind)
        if not created.loaded:
            await created.load()
        return created

    @property
    def vehicles(self) -> SyncedCollection[Vehicle]:
        return cast("SyncedCollection[Vehicle]", self.collection(EntityKind.VEHICLES))

    @property
    def payments(self) -> SyncedCollection[Payment]:
        return cast("SyncedCollection[Payment]", self.collection(EntityKind.PAYMENTS))

    @property
    def investors(self) -> SyncedCollection[Investor]:
        return cast("SyncedCollection[Investor]", self.collection(EntityKind.INVESTORS))

    @property
    def drivers(self) -> SyncedCollection[Driver]:
        return cast("SyncedCollection[Driver]", self.collection(EntityKind.DRIVERS))

    @property
    def days_not_worked(self) -> DaysNotWorkedService | None:
        """Related-table service; ``None`` without a remote store."""
        if self._remote is None:
            return None
        return DaysNotWorkedService(self._remote)

    async def clear_local_data(self) -> list[str]:
        """Wipe the local store and reload every local-only collection already open."""
        removed = self._stored.clear_all()
        for existing in self._collections.values():
            if existing.mode == SyncMode.LOCAL:
                await existing.load()
        return removed
