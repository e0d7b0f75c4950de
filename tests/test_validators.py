from __future__ import annotations

from fleetsync.validators import DRIVER_VALIDATOR, INVESTOR_VALIDATOR, VEHICLE_VALIDATOR, RequiredFields


def test_complete_vehicle_is_valid() -> None:
    result = VEHICLE_VALIDATOR.validate(
        {"plate": "ABC-123", "brand": "Toyota", "model": "Corolla", "investor": "inv-1", "dailyRate": 150}
    )
    assert result.is_valid
    assert result.errors == ()


def test_missing_and_falsy_fields_are_reported_in_rule_order() -> None:
    result = DRIVER_VALIDATOR.validate({"name": "Juan", "phone": "", "licenseNumber": "L-1"})
    assert not result.is_valid
    assert result.errors == (
        "The driver phone is required",
        "The CI number is required",
        "The license expiry date is required",
    )


def test_zero_daily_rate_counts_as_missing() -> None:
    result = VEHICLE_VALIDATOR.validate({"dailyRate": 0}, partial=True)
    assert result.errors == ("The daily rate is required",)


def test_partial_checks_only_present_fields() -> None:
    assert INVESTOR_VALIDATOR.validate({"contact": "555-2"}, partial=True).is_valid
    result = INVESTOR_VALIDATOR.validate({"contact": "555-2", "bankAccount": None}, partial=True)
    assert result.errors == ("The bank account is required",)


def test_custom_rules() -> None:
    validator = RequiredFields([("amount", "Amount is required")])
    assert validator.fields == ("amount",)
    assert validator.validate({}).errors == ("Amount is required",)
    assert validator.validate({}, partial=True).is_valid
