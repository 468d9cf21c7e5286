from __future__ import annotations

from dataclasses import dataclass, field

from springbucks.domain.entities import Coffee, CoffeeOrder
from springbucks.domain.value_objects.money import DEFAULT_CURRENCY, Money
from springbucks.logging_config import get_logger
from springbucks.repositories.coffees import CoffeesRepo
from springbucks.repositories.orders import OrdersRepo


@dataclass
class SeedResult:
    coffees: list[Coffee] = field(default_factory=list)
    orders: list[CoffeeOrder] = field(default_factory=list)


class SeedService:
    """Populate an empty store with the sample menu and two orders.

    - Saves espresso and latte before any order that references them.
    - Any repository failure propagates and stops the remaining steps.
    """

    def __init__(
        self,
        coffees: CoffeesRepo,
        orders: OrdersRepo,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._coffees = coffees
        self._orders = orders
        self._currency = currency
        self._logger = get_logger()

    def init_orders(self) -> SeedResult:
        result = SeedResult()

        espresso = self._save_coffee("espresso", 100)
        latte = self._save_coffee("latte", 150)
        result.coffees.extend([espresso, latte])

        result.orders.append(self._save_order("Li Lei", [espresso]))
        result.orders.append(self._save_order("Li Lei", [espresso, latte]))
        return result

    def log_contents(self) -> None:
        for coffee in self._coffees.find_all():
            self._logger.info("Loading %s", coffee)
        for order in self._orders.find_all():
            self._logger.info("Loading %s", order)

    def _save_coffee(self, name: str, amount: int) -> Coffee:
        coffee = self._coffees.save(Coffee(name=name, price=Money.of(self._currency, amount)))
        self._logger.info("Coffee: %s", coffee)
        return coffee

    def _save_order(self, customer: str, items: list[Coffee]) -> CoffeeOrder:
        order = self._orders.save(CoffeeOrder(customer=customer, items=items, state=0))
        self._logger.info("Order: %s", order)
        return order
