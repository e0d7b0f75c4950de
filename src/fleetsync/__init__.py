"""fleetsync - keep fleet entity collections in sync with a local or remote store."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fleetsync")
except PackageNotFoundError:
    __version__ = "0+local"
from fleetsync.config import FleetSyncConfig
from fleetsync.days_not_worked import DaysNotWorkedService
from fleetsync.exceptions import (
    FleetSyncConfigError,
    FleetSyncError,
    LocalSaveFailed,
    RemoteDeleteFailed,
    RemoteReadFailed,
    RemoteTransportError,
    RemoteWriteFailed,
    SyncError,
    ValidationFailed,
)
from fleetsync.fleet import ENTITY_SPECS, CollectionHooks, EntityKind, EntitySpec, FleetData
from fleetsync.models import (
    CardexItem,
    Discount,
    Driver,
    Investor,
    Maintenance,
    Payment,
    Settlement,
    SystemSettings,
    Vehicle,
)
from fleetsync.notifications import CollectingNotifier, LoggingNotifier, Notification, NotificationVariant, Notifier
from fleetsync.remote import RemoteCollectionClient, RemoteFailure
from fleetsync.state import ChangeKind, CollectionChanged, CollectionConfig, SyncedCollection, SyncMode
from fleetsync.storage import FileKeyValueStore, MemoryKeyValueStore, StoredCollection
from fleetsync.transformers import IdentityShape, ShapeTransformer
from fleetsync.validators import RequiredFields, ValidationResult

__all__ = [
    "__version__",
    "CardexItem",
    "ChangeKind",
    "CollectingNotifier",
    "CollectionChanged",
    "CollectionConfig",
    "CollectionHooks",
    "DaysNotWorkedService",
    "Discount",
    "Driver",
    "ENTITY_SPECS",
    "EntityKind",
    "EntitySpec",
    "FileKeyValueStore",
    "FleetData",
    "FleetSyncConfig",
    "FleetSyncConfigError",
    "FleetSyncError",
    "IdentityShape",
    "Investor",
    "LocalSaveFailed",
    "LoggingNotifier",
    "Maintenance",
    "MemoryKeyValueStore",
    "Notification",
    "NotificationVariant",
    "Notifier",
    "Payment",
    "RemoteCollectionClient",
    "RemoteDeleteFailed",
    "RemoteFailure",
    "RemoteReadFailed",
    "RemoteTransportError",
    "RemoteWriteFailed",
    "RequiredFields",
    "Settlement",
    "ShapeTransformer",
    "StoredCollection",
    "SyncError",
    "SyncMode",
    "SyncedCollection",
    "SystemSettings",
    "ValidationFailed",
    "ValidationResult",
    "Vehicle",
]
