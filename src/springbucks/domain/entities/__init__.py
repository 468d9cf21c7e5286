from .coffee import Coffee
from .coffee_order import CoffeeOrder

__all__ = [
    "Coffee",
    "CoffeeOrder",
]
