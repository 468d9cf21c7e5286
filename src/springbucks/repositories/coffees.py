from __future__ import annotations

from ..domain.entities import Coffee
from ..domain.value_objects.ids import CoffeeId
from .base import CrudRepo


class CoffeesRepo(CrudRepo[Coffee, CoffeeId]):
    """Repository interface for :class:`Coffee` menu entries.

    Deleting a coffee that an order still references raises
    :class:`~springbucks.domain.errors.ConstraintViolationError`; remove it
    from every referencing order's ``items`` first.
    """

    def _entity_name(self) -> str:
        return "coffee"
