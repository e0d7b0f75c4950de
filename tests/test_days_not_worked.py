from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from fleetsync.days_not_worked import DaysNotWorkedService
from fleetsync.exceptions import RemoteTransportError
from fleetsync.remote import RemoteCollectionClient


class _DaysTransport:
    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self.rows = list(rows or [])
        self.calls: list[tuple[str, dict[str, str], Any]] = []
        self.fail_on: str | None = None

    async def request(
        self,
        method: str,
        table: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        prefer: str | None = None,
    ) -> Any:
        assert table == "days_not_worked"
        self.calls.append((method, dict(params or {}), body))
        if method == self.fail_on:
            raise RemoteTransportError("network")
        filters = {k: v.removeprefix("eq.") for k, v in (params or {}).items() if k != "select"}

        def matches(row: dict[str, Any]) -> bool:
            return all(str(row.get(k)) == v for k, v in filters.items())

        if method == "GET":
            return [row for row in self.rows if matches(row)]
        if method == "DELETE":
            self.rows = [row for row in self.rows if not matches(row)]
            return None
        if method == "POST":
            self.rows.extend(body)
            return body
        raise AssertionError(method)


def _service(transport: _DaysTransport) -> DaysNotWorkedService:
    return DaysNotWorkedService(RemoteCollectionClient(transport))


@pytest.mark.asyncio
async def test_get_by_vehicle_returns_sorted_unique_dates() -> None:
    transport = _DaysTransport(
        [
            {"vehicle_id": "v-1", "date": "2026-01-03"},
            {"vehicle_id": "v-1", "date": "2026-01-01"},
            {"vehicle_id": "v-1", "date": "2026-01-03"},
            {"vehicle_id": "v-2", "date": "2026-01-02"},
        ]
    )

    assert await _service(transport).get_by_vehicle("v-1") == ["2026-01-01", "2026-01-03"]


@pytest.mark.asyncio
async def test_get_by_vehicle_is_empty_on_failure() -> None:
    transport = _DaysTransport([{"vehicle_id": "v-1", "date": "2026-01-01"}])
    transport.fail_on = "GET"

    assert await _service(transport).get_by_vehicle("v-1") == []


@pytest.mark.asyncio
async def test_replace_for_vehicle_rewrites_only_that_vehicle() -> None:
    transport = _DaysTransport(
        [
            {"vehicle_id": "v-1", "date": "2026-01-01"},
            {"vehicle_id": "v-2", "date": "2026-01-02"},
        ]
    )
    service = _service(transport)

    assert await service.replace_for_vehicle("v-1", ["2026-02-02", "2026-02-01", "2026-02-02"]) is True

    assert [call[0] for call in transport.calls] == ["DELETE", "POST"]
    assert await service.get_by_vehicle("v-1") == ["2026-02-01", "2026-02-02"]
    assert await service.get_by_vehicle("v-2") == ["2026-01-02"]


@pytest.mark.asyncio
async def test_replace_with_no_dates_only_deletes() -> None:
    transport = _DaysTransport([{"vehicle_id": "v-1", "date": "2026-01-01"}])

    assert await _service(transport).replace_for_vehicle("v-1", []) is True
    assert [call[0] for call in transport.calls] == ["DELETE"]
    assert transport.rows == []


@pytest.mark.asyncio
async def test_replace_stops_when_delete_fails() -> None:
    transport = _DaysTransport([{"vehicle_id": "v-1", "date": "2026-01-01"}])
    transport.fail_on = "DELETE"

    assert await _service(transport).replace_for_vehicle("v-1", ["2026-03-01"]) is False
    assert [call[0] for call in transport.calls] == ["DELETE"]


@pytest.mark.asyncio
async def test_remove_day_filters_on_vehicle_and_date() -> None:
    transport = _DaysTransport(
        [
            {"vehicle_id": "v-1", "date": "2026-01-01"},
            {"vehicle_id": "v-1", "date": "2026-01-02"},
        ]
    )

    assert await _service(transport).remove_day("v-1", "2026-01-01") is True
    assert transport.calls[0][1] == {"vehicle_id": "eq.v-1", "date": "eq.2026-01-01"}
    assert transport.rows == [{"vehicle_id": "v-1", "date": "2026-01-02"}]
