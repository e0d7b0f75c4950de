"""Collection change events.

The engine raises one of these after every successful mutation of an
in-memory collection. Subscribers (local persistence, UI refreshers)
react to them; none of them may mutate the collection.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChangeKind(StrEnum):
    LOAD = "load"
    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"
    REFRESH = "refresh"


class CollectionChanged(BaseModel):
    """Snapshot of a collection right after it changed."""

    model_config = ConfigDict(frozen=True)

    storage_key: str = Field(..., description="Storage key of the collection")
    change: ChangeKind
    entity_id: str | None = Field(default=None, description="Entity touched by add/update/remove")
    items: tuple[dict[str, Any], ...] = Field(default_factory=tuple, description="Application-shaped snapshot")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("storage_key")
    @classmethod
    def _normalize_key(cls, value: str) -> str:
        key = value.strip()
        if not key:
            raise ValueError("storage_key must be non-empty")
        return key
