"""Storage keys, remote table names and HTTP constants."""

from __future__ import annotations

USER_AGENT = "fleetsync/1 (+aiohttp)"

#: Every local key written by fleetsync starts with this prefix.
LOCAL_KEY_PREFIX = "app_"

STORAGE_VEHICLES = "app_vehicles"
STORAGE_PAYMENTS = "app_payments"
STORAGE_INVESTORS = "app_investors"
STORAGE_DRIVERS = "app_drivers"
STORAGE_MAINTENANCE = "app_maintenance"
STORAGE_CARDEX = "app_cardex"
STORAGE_DISCOUNTS = "app_discounts"
STORAGE_SETTINGS = "app_settings"
STORAGE_SETTLEMENTS = "app_settlements"
STORAGE_FREE_DAYS = "app_free_days"
STORAGE_DAYS_NOT_WORKED = "app_days_not_worked"

STORAGE_KEYS: frozenset[str] = frozenset(
    {
        STORAGE_VEHICLES,
        STORAGE_PAYMENTS,
        STORAGE_INVESTORS,
        STORAGE_DRIVERS,
        STORAGE_MAINTENANCE,
        STORAGE_CARDEX,
        STORAGE_DISCOUNTS,
        STORAGE_SETTINGS,
        STORAGE_SETTLEMENTS,
        STORAGE_FREE_DAYS,
        STORAGE_DAYS_NOT_WORKED,
    }
)

TABLE_VEHICLES = "vehicles"
TABLE_PAYMENTS = "payments"
TABLE_INVESTORS = "investors"
TABLE_DRIVERS = "drivers"
TABLE_MAINTENANCE = "maintenance"
TABLE_CARDEX = "cardex"
TABLE_DISCOUNTS = "discounts"
TABLE_SETTINGS = "settings"
TABLE_SETTLEMENTS = "settlements"
TABLE_DAYS_NOT_WORKED = "days_not_worked"

#: PostgREST path prefix for table resources.
REST_PATH = "/rest/v1"
