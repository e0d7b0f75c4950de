"""Pre-mutation validation strategies.

A validator is a pure check run on application-shaped data before any
backend is touched. It never raises; it returns a
:class:`ValidationResult` with human-readable reasons.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: tuple[str, ...] = Field(default_factory=tuple)

    @classmethod
    def from_errors(cls, errors: Sequence[str]) -> ValidationResult:
        return cls(is_valid=not errors, errors=tuple(errors))


class Validator(Protocol):
    def validate(self, data: Mapping[str, Any], *, partial: bool = False) -> ValidationResult:
        """Check *data*.

        With ``partial=True`` (updates) only the fields present in *data*
        are checked, so a patch touching one field is not rejected for the
        fields it leaves alone.
        """
        ...


class RequiredFields:
    """Fails every rule whose field is missing or falsy.

    Rules are ``(application field, message)`` pairs; messages are reported
    in rule order.
    """

    def __init__(self, rules: Sequence[tuple[str, str]]) -> None:
        self._rules: tuple[tuple[str, str], ...] = tuple(rules)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(field for field, _ in self._rules)

    def validate(self, data: Mapping[str, Any], *, partial: bool = False) -> ValidationResult:
        errors: list[str] = []
        for field, message in self._rules:
            if partial and field not in data:
                continue
            if not data.get(field):
                errors.append(message)
        return ValidationResult.from_errors(errors)


VEHICLE_VALIDATOR = RequiredFields(
    [
        ("plate", "The vehicle plate is required"),
        ("brand", "The vehicle brand is required"),
        ("model", "The vehicle model is required"),
        ("investor", "An investor must be assigned to the vehicle"),
        ("dailyRate", "The daily rate is required"),
    ]
)

INVESTOR_VALIDATOR = RequiredFields(
    [
        ("name", "The investor name is required"),
        ("contact", "The investor contact is required"),
        ("documentId", "The identity document is required"),
        ("bankAccount", "The bank account is required"),
    ]
)

DRIVER_VALIDATOR = RequiredFields(
    [
        ("name", "The driver name is required"),
        ("phone", "The driver phone is required"),
        ("ci", "The CI number is required"),
        ("licenseNumber", "The license number is required"),
        ("licenseExpiry", "The license expiry date is required"),
    ]
)
