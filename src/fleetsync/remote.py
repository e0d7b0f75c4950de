"""Remote collection client: row-level CRUD against named tables.

Every public method returns either data or a :class:`RemoteFailure`
value. Transport errors never cross this boundary as exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import aiohttp
from pydantic import BaseModel, ConfigDict

from fleetsync._transport import PREFER_REPRESENTATION, PostgrestTransport, Transport, eq
from fleetsync.config import FleetSyncConfig
from fleetsync.exceptions import RemoteTransportError

_logger = logging.getLogger(__name__)

Row = dict[str, Any]


class RemoteFailure(BaseModel):
    """Structured failure returned instead of raising."""

    model_config = ConfigDict(frozen=True)

    message: str
    code: str | None = None

    @classmethod
    def from_error(cls, exc: RemoteTransportError) -> RemoteFailure:
        code = exc.code if exc.code is not None else (str(exc.status_code) if exc.status_code else None)
        return cls(message=str(exc), code=code)


def _as_rows(data: Any, table: str) -> list[Row]:
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list) and all(isinstance(item, dict) for item in data):
        return list(data)
    raise RemoteTransportError(f"Unexpected response shape from {table}: {type(data).__name__}", table=table)


def _filter_params(filters: Mapping[str, Any]) -> dict[str, str]:
    return {column: eq(value) for column, value in filters.items()}


class RemoteCollectionClient:
    """Thin list/insert/update/delete contract over a :class:`Transport`."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def _rows(
        self,
        op: str,
        method: str,
        table: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        prefer: str | None = None,
    ) -> list[Row] | RemoteFailure:
        try:
            data = await self._transport.request(method, table, params=params, body=body, prefer=prefer)
            return _as_rows(data, table)
        except RemoteTransportError as exc:
            _logger.warning("Remote %s on %s failed: %s", op, table, exc)
            return RemoteFailure.from_error(exc)

    async def list(self, table: str) -> list[Row] | RemoteFailure:
        """All rows of *table*."""
        return await self.list_where(table, {})

    async def list_where(self, table: str, filters: Mapping[str, Any]) -> list[Row] | RemoteFailure:
        """Rows whose columns equal every value in *filters*."""
        params = {"select": "*", **_filter_params(filters)}
        return await self._rows("list", "GET", table, params=params)

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row | RemoteFailure:
        """Insert one row and return it as stored (server-assigned ``id`` included)."""
        result = await self._rows("insert", "POST", table, body=dict(row), prefer=PREFER_REPRESENTATION)
        if isinstance(result, RemoteFailure):
            return result
        if not result:
            return RemoteFailure(message=f"Insert into {table} returned no row")
        return result[0]

    async def insert_many(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[Row] | RemoteFailure:
        if not rows:
            return []
        return await self._rows(
            "insert",
            "POST",
            table,
            body=[dict(row) for row in rows],
            prefer=PREFER_REPRESENTATION,
        )

    async def update(self, table: str, row_id: str, row: Mapping[str, Any]) -> Row | RemoteFailure:
        """Update the row addressed by *row_id*.

        Returns the updated row, or ``{}`` when no row matched.
        """
        result = await self._rows(
            "update",
            "PATCH",
            table,
            params={"id": eq(row_id)},
            body=dict(row),
            prefer=PREFER_REPRESENTATION,
        )
        if isinstance(result, RemoteFailure):
            return result
        return result[0] if result else {}

    async def delete(self, table: str, row_id: str) -> None | RemoteFailure:
        return await self.delete_where(table, {"id": row_id})

    async def delete_where(self, table: str, filters: Mapping[str, Any]) -> None | RemoteFailure:
        if not filters:
            # Never issue an unfiltered DELETE.
            return RemoteFailure(message=f"Refusing to delete from {table} without a filter")
        result = await self._rows("delete", "DELETE", table, params=_filter_params(filters))
        if isinstance(result, RemoteFailure):
            return result
        return None


def create_remote_client(
    config: FleetSyncConfig,
    http_session: aiohttp.ClientSession | None,
) -> RemoteCollectionClient | None:
    """Build a client, or ``None`` when the remote store is not usable."""
    if not config.has_remote or http_session is None:
        return None
    return RemoteCollectionClient(PostgrestTransport(config, http_session))
