"""Base model and enum for fleet entities.

Every entity inherits from :class:`FleetBaseModel` which provides:

* ``alias_generator=to_camel`` so the application shape (camelCase keys,
  as held in the local store and accepted by ``add``/``update``) maps to
  snake_case attributes.
* ``populate_by_name=True`` so either spelling is accepted on input.
* :meth:`FleetBaseModel.to_app_dict` / :meth:`FleetBaseModel.app_keys`
  for moving between models and application-shaped dicts.

Status enums inherit from :class:`FleetEnum` which adds an ``UNKNOWN``
member and a ``_missing_`` hook so unexpected values coming back from the
remote store do not make a whole row unreadable.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FleetEnum(StrEnum):
    """Base for entity status/type enums.

    Every subclass **must** define ``UNKNOWN = "unknown"``.
    """

    @classmethod
    def _missing_(cls, value: object) -> FleetEnum:
        if hasattr(cls, "UNKNOWN"):
            unknown: FleetEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class ActiveStatus(FleetEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    UNKNOWN = "unknown"


class FleetBaseModel(BaseModel):
    """Base for every stored entity.

    ``id`` is assigned when the entity is created (locally or by the
    remote store) and never reassigned. Every other field has a default
    so that partially specified records can always be materialized.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )

    id: str

    def to_app_dict(self) -> dict[str, Any]:
        """Application-shaped dict: camelCase keys, unset (``None``) fields omitted."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    @classmethod
    def field_aliases(cls) -> dict[str, str]:
        """Map attribute name -> application (camelCase) name."""
        return {name: info.alias or to_camel(name) for name, info in cls.model_fields.items()}

    @classmethod
    def app_field_names(cls) -> frozenset[str]:
        return frozenset(cls.field_aliases().values())

    @classmethod
    def app_keys(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        """Normalize *data* so known fields use their application name.

        Keys that are neither an attribute name nor an alias are kept as-is.
        """
        aliases = cls.field_aliases()
        return {aliases.get(key, key): value for key, value in data.items()}
