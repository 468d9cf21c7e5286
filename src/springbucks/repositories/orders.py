from __future__ import annotations

from abc import abstractmethod
from typing import Iterator

from ..domain.entities import CoffeeOrder
from ..domain.value_objects.ids import CoffeeId, OrderId
from .base import CrudRepo


class OrdersRepo(CrudRepo[CoffeeOrder, OrderId]):
    """Repository interface for :class:`CoffeeOrder` entities."""

    @abstractmethod
    def find_by_item(self, coffee_id: CoffeeId) -> Iterator[CoffeeOrder]:
        """Lazily yield every order whose items include ``coffee_id``."""

    def _entity_name(self) -> str:
        return "order"
