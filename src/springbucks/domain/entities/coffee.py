from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..value_objects.ids import CoffeeId
from ..value_objects.money import Money


class Coffee(BaseModel):
    id: CoffeeId | None = Field(default=None, description="Assigned by storage on first save")
    name: str | None = Field(default=None, description="Menu label")
    price: Money | None = Field(default=None, description="Unit price")
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
