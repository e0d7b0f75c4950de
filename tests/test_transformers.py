from __future__ import annotations

from typing import Any

import pytest

from fleetsync.fleet import ENTITY_SPECS, EntityKind
from fleetsync.models import Vehicle
from fleetsync.transformers import INVESTOR_SHAPE, VEHICLE_SHAPE, IdentityShape, ShapeTransformer

SAMPLES: dict[EntityKind, dict[str, Any]] = {
    EntityKind.VEHICLES: {
        "id": "v-1",
        "plate": "ABC-123",
        "brand": "Toyota",
        "model": "Corolla",
        "year": "2021",
        "status": "active",
        "investor": "inv-1",
        "dailyRate": 150.0,
        "driverName": "Juan",
        "driverPhone": "555-1",
        "driverId": "d-1",
        "contractStartDate": "2026-01-01",
        "totalInstallments": 24,
        "paidInstallments": 3,
        "installmentAmount": 500.0,
        "totalPaid": 1500.0,
        "nextMaintenance": "2026-03-01",
        "monthlyEarnings": 4200.0,
    },
    EntityKind.PAYMENTS: {
        "id": "p-1",
        "date": "2026-01-05",
        "amount": 150.0,
        "concept": "Daily rate",
        "paymentMethod": "transfer",
        "status": "completed",
        "vehicleId": "v-1",
        "receiptNumber": "R-1",
        "bankName": "BNB",
        "transferNumber": "T-9",
    },
    EntityKind.INVESTORS: {
        "id": "i-1",
        "name": "Maria Lopez",
        "contact": "555-2",
        "documentId": "1234567",
        "vehicleCount": 2,
        "status": "active",
        "bankName": "BCP",
        "bankAccount": "000-111",
        "lastPayment": "2026-01-31",
        "firstName": "Maria",
        "lastName": "Lopez",
    },
    EntityKind.DRIVERS: {
        "id": "d-1",
        "name": "Juan",
        "phone": "555-1",
        "ci": "998877",
        "email": "juan@example.com",
        "address": "Av. Siempre Viva",
        "licenseNumber": "L-1",
        "licenseExpiry": "2027-01-01",
        "status": "active",
        "documentId": "998877",
        "emergencyContact": "Ana",
        "emergencyPhone": "555-3",
        "vehicleId": "v-1",
    },
    EntityKind.MAINTENANCE: {
        "id": "m-1",
        "vehicleId": "v-1",
        "date": "2026-02-01",
        "description": "Brakes",
        "cost": 300.0,
        "costMaterials": 200.0,
        "costLabor": 100.0,
        "salePrice": 350.0,
        "status": "completed",
        "type": "mechanical",
        "proformaNumber": "PF-1",
        "isInsuranceCovered": False,
    },
    EntityKind.CARDEX: {
        "id": "c-1",
        "vehicleId": "v-1",
        "type": "oil_change",
        "date": "2026-02-01",
        "description": "Synthetic oil",
        "nextScheduledDate": "2026-05-01",
        "kilometersAtService": 42000,
        "nextServiceKilometers": 47000,
        "cost": 80.0,
        "complete": True,
    },
    EntityKind.DISCOUNTS: {
        "id": "x-1",
        "vehicleId": "v-1",
        "type": "insurance",
        "description": "Policy",
        "amount": 90.0,
        "date": "2026-01-01",
        "applyToMonths": ["2026-01", "2026-02"],
        "recurring": True,
        "frequency": "monthly",
    },
    EntityKind.SETTINGS: {
        "id": "s-1",
        "gpsMonthlyFee": 25.0,
        "currency": "BOB",
        "dateFormat": "dd/MM/yyyy",
        "timezone": "America/La_Paz",
    },
    EntityKind.SETTLEMENTS: {
        "id": "st-1",
        "investorId": "i-1",
        "startDate": "2026-01-01",
        "endDate": "2026-01-31",
        "createdAt": "2026-02-01T10:00:00Z",
        "totalAmount": 3000.0,
        "paidAmount": 2500.0,
        "balance": 500.0,
        "status": "pending",
    },
}


@pytest.mark.parametrize("kind", list(EntityKind))
def test_remote_round_trip_reproduces_every_field(kind: EntityKind) -> None:
    spec = ENTITY_SPECS[kind]
    sample = SAMPLES[kind]

    row = spec.shape.to_remote(sample)
    assert spec.shape.from_remote(row) == sample

    entity = spec.model.model_validate(spec.shape.from_remote(row))
    assert entity.to_app_dict() == {**entity.to_app_dict(), **sample}


def test_remote_rows_use_snake_case_columns() -> None:
    for kind, spec in ENTITY_SPECS.items():
        row = spec.shape.to_remote(SAMPLES[kind])
        assert all(not any(ch.isupper() for ch in column) for column in row), kind


def test_absent_fields_are_not_sent_and_null_is() -> None:
    assert VEHICLE_SHAPE.to_remote({"plate": "X-1"}) == {"plate": "X-1"}
    assert VEHICLE_SHAPE.to_remote({"driverId": None}) == {"driver_id": None}


def test_relational_fields_never_reach_a_row() -> None:
    row = VEHICLE_SHAPE.to_remote(
        {
            "plate": "X-1",
            "maintenanceHistory": [],
            "cardex": [],
            "discounts": [],
            "daysNotWorked": ["2026-01-01"],
            "insurancePolicies": [],
        }
    )
    assert row == {"plate": "X-1"}
    assert INVESTOR_SHAPE.to_remote({"name": "Maria", "vehicles": [{"id": "v-1"}]}) == {"name": "Maria"}


def test_unknown_columns_are_ignored_on_the_way_back() -> None:
    data = VEHICLE_SHAPE.from_remote(
        {
            "id": "1",
            "created_at": "2026-01-01T00:00:00Z",
            "updated_at": "2026-01-02T00:00:00Z",
            "daily_rate": 80,
            "dailyRate": 1,
            "days_not_worked": ["2026-01-01"],
        }
    )
    assert data == {"id": "1", "dailyRate": 80}


def test_unmapped_application_keys_pass_through() -> None:
    assert VEHICLE_SHAPE.to_remote({"plate": "X-1", "extra": 1}) == {"plate": "X-1", "extra": 1}
    assert VEHICLE_SHAPE.column_for("plate") == "plate"
    assert VEHICLE_SHAPE.column_for("dailyRate") == "daily_rate"


def test_mapping_must_name_known_fields() -> None:
    with pytest.raises(ValueError, match="no fields"):
        ShapeTransformer(Vehicle, {"wheels": "wheel_count"})


def test_mapping_must_be_one_to_one() -> None:
    with pytest.raises(ValueError, match="one-to-one"):
        ShapeTransformer(Vehicle, {"driverName": "driver", "driverId": "driver"})


def test_identity_shape_copies() -> None:
    shape = IdentityShape()
    row = {"id": "1", "anything": 2}
    assert shape.to_remote(row) == row
    assert shape.from_remote(row) is not row
