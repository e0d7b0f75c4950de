"""Maintenance, cardex and discount records tied to a vehicle."""

from __future__ import annotations

from pydantic import Field

from fleetsync.models._base import FleetBaseModel, FleetEnum


class MaintenanceType(FleetEnum):
    MECHANICAL = "mechanical"
    BODY_PAINT = "body_paint"
    UNKNOWN = "unknown"


class MaintenanceStatus(FleetEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class CardexType(FleetEnum):
    OIL_CHANGE = "oil_change"
    FILTER_CHANGE = "filter_change"
    SPARK_PLUGS = "spark_plugs"
    BATTERY = "battery"
    OTHER = "other"
    UNKNOWN = "unknown"


class DiscountType(FleetEnum):
    INSURANCE = "insurance"
    REPAIR = "repair"
    MAINTENANCE = "maintenance"
    OTHER = "other"
    UNKNOWN = "unknown"


class DiscountFrequency(FleetEnum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    BIANNUAL = "biannual"
    ANNUAL = "annual"
    UNKNOWN = "unknown"


class Maintenance(FleetBaseModel):
    vehicle_id: str | None = None
    date: str | None = None
    description: str | None = None
    cost: float | None = None
    cost_materials: float | None = None
    cost_labor: float | None = None
    sale_price: float | None = None
    status: MaintenanceStatus | None = None
    type: MaintenanceType | None = None
    proforma_number: str | None = None
    is_insurance_covered: bool | None = None


class CardexItem(FleetBaseModel):
    """A scheduled service entry (oil, filters, plugs...)."""

    vehicle_id: str | None = None
    type: CardexType | None = None
    date: str | None = None
    description: str | None = None
    next_scheduled_date: str | None = None
    kilometers_at_service: int | None = None
    next_service_kilometers: int | None = None
    cost: float | None = None
    complete: bool | None = None


class Discount(FleetBaseModel):
    vehicle_id: str | None = None
    type: DiscountType | None = None
    description: str | None = None
    amount: float | None = None
    date: str | None = None
    apply_to_months: list[str] = Field(default_factory=list)
    """Months (``YYYY-MM``) the discount applies to."""
    recurring: bool | None = None
    frequency: DiscountFrequency | None = None
