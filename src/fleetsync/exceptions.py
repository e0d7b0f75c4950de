"""Custom exception hierarchy for fleetsync."""

from __future__ import annotations

from collections.abc import Sequence


class FleetSyncError(Exception):
    """Base exception for all fleetsync errors."""


class FleetSyncConfigError(FleetSyncError):
    """Invalid or missing configuration."""


class RemoteTransportError(FleetSyncError):
    """HTTP-level failure talking to the remote store (network, non-2xx, invalid JSON).

    Only raised inside the remote layer; :class:`~fleetsync.remote.RemoteCollectionClient`
    converts it into a :class:`~fleetsync.remote.RemoteFailure` value.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
        table: str = "",
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.table = table
        super().__init__(message)


class SyncError(FleetSyncError):
    """A failed collection operation.

    Sync errors are terminal at the synchronization layer: the engine
    builds them, logs them, keeps the last one and reports it through the
    notifier. They are never raised out of
    :class:`~fleetsync.state.engine.SyncedCollection`.
    """

    title: str = "Operation failed"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationFailed(SyncError):
    """Data was rejected before any backend was touched."""

    title = "Validation error"

    def __init__(self, reasons: Sequence[str]) -> None:
        self.reasons: tuple[str, ...] = tuple(reasons)
        super().__init__("\n".join(self.reasons))


class RemoteReadFailed(SyncError):
    """Listing the remote table failed (refresh or initial load)."""

    title = "Could not load data"


class RemoteWriteFailed(SyncError):
    """Insert or update against the remote table failed."""

    title = "Could not save data"


class RemoteDeleteFailed(SyncError):
    """Deleting a remote row failed."""

    title = "Could not delete data"


class LocalSaveFailed(SyncError):
    """Writing a local-only collection to the key/value store failed."""

    title = "Could not save data"
