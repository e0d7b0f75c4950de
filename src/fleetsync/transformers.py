"""Bidirectional field-name mapping between the application and remote shapes.

The application shape uses camelCase keys (the entity aliases); the remote
tables use snake_case columns. Each entity kind has an explicit column
table. Application fields without an entry travel under the same name,
and relational fields that live in other tables are excluded from rows.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

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


class EntityShape(Protocol):
    """Strategy converting one entity kind between the two shapes."""

    def to_remote(self, data: Mapping[str, Any]) -> dict[str, Any]:
        ...

    def from_remote(self, row: Mapping[str, Any]) -> dict[str, Any]:
        ...


class IdentityShape:
    """Used when a collection has no transformer configured."""

    def to_remote(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return dict(data)

    def from_remote(self, row: Mapping[str, Any]) -> dict[str, Any]:
        return dict(row)


class ShapeTransformer:
    """Column mapping for one entity model.

    Parameters
    ----------
    model : type[FleetBaseModel]
        Entity model; its aliases are the known application fields.
    columns : Mapping[str, str]
        ``{application field: remote column}``.
    exclude : Iterable[str]
        Application fields that are never part of a remote row.

    ``to_remote`` only emits keys present in its input, so absent fields
    are never sent as null. ``from_remote`` drops columns that are neither
    mapped nor a known field (``created_at`` and friends).
    """

    def __init__(
        self,
        model: type[FleetBaseModel],
        columns: Mapping[str, str],
        *,
        exclude: Iterable[str] = (),
    ) -> None:
        known = model.app_field_names()
        unknown = (set(columns) | set(exclude)) - known
        if unknown:
            raise ValueError(f"{model.__name__} has no fields {sorted(unknown)}")
        self._model = model
        self._known = known
        self._exclude = frozenset(exclude)
        self._to_remote: dict[str, str] = dict(columns)
        self._from_remote: dict[str, str] = {column: field for field, column in columns.items()}
        if len(self._from_remote) != len(self._to_remote):
            raise ValueError(f"{model.__name__} column mapping is not one-to-one")

    @property
    def model(self) -> type[FleetBaseModel]:
        return self._model

    def column_for(self, field: str) -> str:
        return self._to_remote.get(field, field)

    def to_remote(self, data: Mapping[str, Any]) -> dict[str, Any]:
        row: dict[str, Any] = {}
        for key, value in data.items():
            if key in self._exclude:
                continue
            row[self.column_for(key)] = value
        return row

    def from_remote(self, row: Mapping[str, Any]) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for column, value in row.items():
            field = self._from_remote.get(column)
            if field is None:
                # Identity-mapped fields only; a renamed field never arrives under its own name.
                if column not in self._known or column in self._exclude or column in self._to_remote:
                    continue
                field = column
            data[field] = value
        return data


VEHICLE_SHAPE = ShapeTransformer(
    Vehicle,
    {
        "dailyRate": "daily_rate",
        "driverName": "driver_name",
        "driverPhone": "driver_phone",
        "driverId": "driver_id",
        "contractStartDate": "contract_start_date",
        "totalInstallments": "total_installments",
        "paidInstallments": "paid_installments",
        "installmentAmount": "installment_amount",
        "totalPaid": "total_paid",
        "nextMaintenance": "next_maintenance",
        "monthlyEarnings": "monthly_earnings",
    },
    exclude=("maintenanceHistory", "cardex", "discounts", "daysNotWorked", "insurancePolicies"),
)

PAYMENT_SHAPE = ShapeTransformer(
    Payment,
    {
        "paymentMethod": "payment_method",
        "vehicleId": "vehicle_id",
        "receiptNumber": "receipt_number",
        "bankName": "bank_name",
        "transferNumber": "transfer_number",
    },
)

INVESTOR_SHAPE = ShapeTransformer(
    Investor,
    {
        "documentId": "document_id",
        "vehicleCount": "vehicle_count",
        "bankName": "bank_name",
        "bankAccount": "bank_account",
        "lastPayment": "last_payment",
        "firstName": "first_name",
        "lastName": "last_name",
    },
    exclude=("vehicles",),
)

DRIVER_SHAPE = ShapeTransformer(
    Driver,
    {
        "licenseNumber": "license_number",
        "licenseExpiry": "license_expiry",
        "documentId": "document_id",
        "emergencyContact": "emergency_contact",
        "emergencyPhone": "emergency_phone",
        "vehicleId": "vehicle_id",
    },
)

MAINTENANCE_SHAPE = ShapeTransformer(
    Maintenance,
    {
        "vehicleId": "vehicle_id",
        "costMaterials": "cost_materials",
        "costLabor": "cost_labor",
        "salePrice": "sale_price",
        "proformaNumber": "proforma_number",
        "isInsuranceCovered": "is_insurance_covered",
    },
)

CARDEX_SHAPE = ShapeTransformer(
    CardexItem,
    {
        "vehicleId": "vehicle_id",
        "nextScheduledDate": "next_scheduled_date",
        "kilometersAtService": "kilometers_at_service",
        "nextServiceKilometers": "next_service_kilometers",
    },
)

DISCOUNT_SHAPE = ShapeTransformer(
    Discount,
    {
        "vehicleId": "vehicle_id",
        "applyToMonths": "apply_to_months",
    },
)

SETTINGS_SHAPE = ShapeTransformer(
    SystemSettings,
    {
        "gpsMonthlyFee": "gps_monthly_fee",
        "dateFormat": "date_format",
    },
)

SETTLEMENT_SHAPE = ShapeTransformer(
    Settlement,
    {
        "investorId": "investor_id",
        "startDate": "start_date",
        "endDate": "end_date",
        "createdAt": "created_at",
        "totalAmount": "total_amount",
        "paidAmount": "paid_amount",
    },
)
