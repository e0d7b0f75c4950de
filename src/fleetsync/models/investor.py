"""Investor and settlement models."""

from __future__ import annotations

from pydantic import Field

from fleetsync.models._base import ActiveStatus, FleetBaseModel, FleetEnum
from fleetsync.models.vehicle import Vehicle


class Investor(FleetBaseModel):
    """A vehicle owner who receives periodic settlements.

    ``vehicles`` is a convenience relation filled by callers; it is never
    sent to the remote store.
    """

    name: str | None = None
    contact: str | None = None
    document_id: str | None = None
    vehicle_count: int | None = None
    status: ActiveStatus | None = None
    bank_name: str | None = None
    bank_account: str | None = None
    last_payment: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    vehicles: list[Vehicle] = Field(default_factory=list)


class SettlementStatus(FleetEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    UNKNOWN = "unknown"


class Settlement(FleetBaseModel):
    """Periodic statement of what is owed to an investor."""

    investor_id: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    created_at: str | None = None
    total_amount: float | None = None
    paid_amount: float | None = None
    balance: float | None = None
    status: SettlementStatus | None = None
