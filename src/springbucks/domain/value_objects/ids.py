from typing import NewType

CoffeeId = NewType("CoffeeId", int)
OrderId = NewType("OrderId", int)
