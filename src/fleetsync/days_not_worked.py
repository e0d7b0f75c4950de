"""Days a vehicle did not work, kept in the ``days_not_worked`` table.

Vehicle rows never carry these dates; this service reads and rewrites the
related rows for one vehicle at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fleetsync._constants import TABLE_DAYS_NOT_WORKED
from fleetsync.remote import RemoteCollectionClient, RemoteFailure

_logger = logging.getLogger(__name__)


class DaysNotWorkedService:
    """CRUD over ``days_not_worked`` rows (``vehicle_id``, ``date``)."""

    def __init__(self, client: RemoteCollectionClient, *, table: str = TABLE_DAYS_NOT_WORKED) -> None:
        self._client = client
        self._table = table

    async def get_by_vehicle(self, vehicle_id: str) -> list[str]:
        """Dates (``YYYY-MM-DD``) recorded for *vehicle_id*, sorted; ``[]`` on failure."""
        result = await self._client.list_where(self._table, {"vehicle_id": vehicle_id})
        if isinstance(result, RemoteFailure):
            _logger.error("Could not load days not worked for %s: %s", vehicle_id, result.message)
            return []
        return sorted({str(row["date"]) for row in result if row.get("date")})

    async def replace_for_vehicle(self, vehicle_id: str, dates: Iterable[str]) -> bool:
        """Make the stored dates for *vehicle_id* exactly *dates*.

        Deletes every existing row first, then inserts the new set. Not
        transactional: a failed insert leaves the vehicle with no dates.
        """
        unique = sorted(set(dates))
        deleted = await self._client.delete_where(self._table, {"vehicle_id": vehicle_id})
        if isinstance(deleted, RemoteFailure):
            _logger.error("Could not clear days not worked for %s: %s", vehicle_id, deleted.message)
            return False

        if unique:
            inserted = await self._client.insert_many(
                self._table,
                [{"vehicle_id": vehicle_id, "date": day} for day in unique],
            )
            if isinstance(inserted, RemoteFailure):
                _logger.error("Could not insert days not worked for %s: %s", vehicle_id, inserted.message)
                return False

        _logger.info("Days not worked for %s replaced (%d dates)", vehicle_id, len(unique))
        return True

    async def remove_day(self, vehicle_id: str, day: str) -> bool:
        result = await self._client.delete_where(self._table, {"vehicle_id": vehicle_id, "date": day})
        if isinstance(result, RemoteFailure):
            _logger.error("Could not remove %s for %s: %s", day, vehicle_id, result.message)
            return False
        return True
