"""Driver model."""

from __future__ import annotations

from fleetsync.models._base import ActiveStatus, FleetBaseModel


class Driver(FleetBaseModel):
    name: str | None = None
    phone: str | None = None
    ci: str | None = None
    """National identity card number."""
    email: str | None = None
    address: str | None = None
    license_number: str | None = None
    license_expiry: str | None = None
    status: ActiveStatus | None = None
    document_id: str | None = None
    emergency_contact: str | None = None
    emergency_phone: str | None = None
    vehicle_id: str | None = None
