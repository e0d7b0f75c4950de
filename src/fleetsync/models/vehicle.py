"""Vehicle model and the records nested under it."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fleetsync.models._base import FleetBaseModel, FleetEnum
from fleetsync.models.maintenance import CardexItem, Discount, Maintenance


class VehicleStatus(FleetEnum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"
    UNKNOWN = "unknown"


class InsurancePayment(BaseModel):
    """A single premium payment on an insurance policy."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True, alias_generator=to_camel)

    id: str
    date: str | None = None
    amount: float | None = None
    description: str | None = None


class InsurancePolicy(BaseModel):
    """Insurance policy attached to a vehicle (local store only)."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True, alias_generator=to_camel)

    id: str
    policy_number: str | None = None
    company: str | None = None
    contact: str | None = None
    amount: float | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_investor_paying: bool | None = None
    payments: list[InsurancePayment] = Field(default_factory=list)


class Vehicle(FleetBaseModel):
    """A vehicle in the fleet.

    The relational lists (maintenance history, cardex, discounts, days not
    worked, insurance policies) live in their own remote tables and are
    never part of a ``vehicles`` row.
    """

    plate: str | None = None
    brand: str | None = None
    model: str | None = None
    year: str | None = None
    status: VehicleStatus | None = None
    investor: str | None = None
    """Investor id owning the vehicle."""
    daily_rate: float | None = None
    driver_name: str | None = None
    driver_phone: str | None = None
    driver_id: str | None = None
    contract_start_date: str | None = None
    total_installments: int | None = None
    paid_installments: int | None = None
    installment_amount: float | None = None
    total_paid: float | None = None
    next_maintenance: str | None = None
    monthly_earnings: float | None = None

    maintenance_history: list[Maintenance] = Field(default_factory=list)
    cardex: list[CardexItem] = Field(default_factory=list)
    discounts: list[Discount] = Field(default_factory=list)
    days_not_worked: list[str] = Field(default_factory=list)
    insurance_policies: list[InsurancePolicy] = Field(default_factory=list)
