"""Payment model."""

from __future__ import annotations

from fleetsync.models._base import FleetBaseModel, FleetEnum


class PaymentMethod(FleetEnum):
    CASH = "cash"
    TRANSFER = "transfer"
    UNKNOWN = "unknown"


class PaymentStatus(FleetEnum):
    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"
    ANALYSING = "analysing"
    UNKNOWN = "unknown"


class Payment(FleetBaseModel):
    """A driver payment against a vehicle."""

    date: str | None = None
    amount: float | None = None
    concept: str | None = None
    payment_method: PaymentMethod | None = None
    status: PaymentStatus | None = None
    vehicle_id: str | None = None
    receipt_number: str | None = None
    bank_name: str | None = None
    """Only meaningful for transfers."""
    transfer_number: str | None = None
