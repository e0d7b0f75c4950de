"""Entity models for the fleet collections."""

from fleetsync.models._base import ActiveStatus, FleetBaseModel, FleetEnum
from fleetsync.models.driver import Driver
from fleetsync.models.investor import Investor, Settlement, SettlementStatus
from fleetsync.models.maintenance import (
    CardexItem,
    CardexType,
    Discount,
    DiscountFrequency,
    DiscountType,
    Maintenance,
    MaintenanceStatus,
    MaintenanceType,
)
from fleetsync.models.payment import Payment, PaymentMethod, PaymentStatus
from fleetsync.models.settings import SystemSettings
from fleetsync.models.vehicle import InsurancePayment, InsurancePolicy, Vehicle, VehicleStatus

__all__ = [
    "ActiveStatus",
    "CardexItem",
    "CardexType",
    "Discount",
    "DiscountFrequency",
    "DiscountType",
    "Driver",
    "FleetBaseModel",
    "FleetEnum",
    "InsurancePayment",
    "InsurancePolicy",
    "Investor",
    "Maintenance",
    "MaintenanceStatus",
    "MaintenanceType",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Settlement",
    "SettlementStatus",
    "SystemSettings",
    "Vehicle",
    "VehicleStatus",
]
