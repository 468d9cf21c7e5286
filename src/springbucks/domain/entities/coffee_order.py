from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..value_objects.ids import OrderId
from .coffee import Coffee


class CoffeeOrder(BaseModel):
    """An order holding non-owning references to persisted coffees.

    ``state`` is an opaque status code. It may be ``None`` in memory, but the
    store rejects saving an order without one.
    """

    id: OrderId | None = Field(default=None, description="Assigned by storage on first save")
    items: list[Coffee] = Field(default_factory=list, description="Ordered coffees")
    state: int | None = Field(default=None, description="Opaque status code")
    customer: str | None = Field(default=None, description="Customer name")
    create_time: datetime | None = Field(default=None, description="Set once on first save")
    update_time: datetime | None = Field(default=None, description="Refreshed on every save")

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("create_time", "update_time")
    @classmethod
    def _ensure_utc(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return v
        if v.tzinfo is None:
            raise ValueError("timestamps must be timezone-aware")
        return v.astimezone(timezone.utc)
