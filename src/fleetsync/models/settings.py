"""System-wide settings record."""

from __future__ import annotations

from fleetsync.models._base import FleetBaseModel


class SystemSettings(FleetBaseModel):
    gps_monthly_fee: float | None = None
    currency: str | None = None
    date_format: str | None = None
    timezone: str | None = None
