from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Iterator, Optional, Sequence

from ...db.schema import ensure_schema
from ...domain.entities import Coffee, CoffeeOrder
from ...domain.errors import ConstraintViolationError, NotFoundError
from ...domain.value_objects.ids import CoffeeId, OrderId
from ...infrastructure.money_codec import MoneyCodec
from ...logging_config import get_logger
from ..orders import OrdersRepo
from .coffees_sqlite import coffee_from_row
from .hooks import Clock, constraint_errors, from_db_time, next_update_time, to_db_time, utcnow

ORDER_COLUMNS = "id, state, customer, create_time, update_time"


class OrdersRepoSqlite(OrdersRepo):
    """SQLite implementation of :class:`OrdersRepo`.

    Membership lives in ``t_order_coffee``. Each save replaces the order's
    membership rows with the current ``items``, keeping their list order.
    Items are loaded with a second query per order.
    """

    def __init__(
        self, conn: sqlite3.Connection, codec: MoneyCodec, *, clock: Clock = utcnow
    ) -> None:
        self._conn = conn
        self._codec = codec
        self._clock = clock
        self._logger = get_logger()
        ensure_schema(self._conn)

    def save(self, order: CoffeeOrder) -> CoffeeOrder:
        item_ids = [self._persisted_id(coffee) for coffee in order.items]
        if order.id is None:
            now = next_update_time(self._clock, None)
            created: Optional[datetime] = now
            with constraint_errors("t_order"), self._conn:
                cur = self._conn.execute(
                    """
                    INSERT INTO t_order (state, customer, create_time, update_time)
                    VALUES (?, ?, ?, ?)
                    """,
                    (order.state, order.customer, to_db_time(now), to_db_time(now)),
                )
                rowid = cur.lastrowid
                if rowid is None:
                    raise RuntimeError("SQLite insert failed: no lastrowid (table: t_order)")
                order_id = OrderId(int(rowid))
                self._replace_items(order_id, item_ids)
        else:
            order_id = order.id
            created, previous = self._stored_times(order_id)
            now = next_update_time(self._clock, previous)
            with constraint_errors("t_order"), self._conn:
                self._conn.execute(
                    "UPDATE t_order SET state = ?, customer = ?, update_time = ? WHERE id = ?",
                    (order.state, order.customer, to_db_time(now), order_id),
                )
                self._replace_items(order_id, item_ids)
        order.id = order_id
        order.create_time = created
        order.update_time = now
        self._logger.info(
            "Saved order",
            extra={
                "entity": "order",
                "entity_id": order_id,
                "table": "t_order",
                "item_ids": item_ids,
            },
        )
        return order

    @staticmethod
    def _persisted_id(coffee: Coffee) -> CoffeeId:
        if coffee.id is None:
            raise ConstraintViolationError(
                f"Coffee {coffee.name!r} must be saved before an order can reference it"
            )
        return coffee.id

    def _replace_items(self, order_id: OrderId, item_ids: Sequence[CoffeeId]) -> None:
        self._conn.execute("DELETE FROM t_order_coffee WHERE coffee_order_id = ?", (order_id,))
        self._conn.executemany(
            "INSERT INTO t_order_coffee (coffee_order_id, items_id) VALUES (?, ?)",
            [(order_id, item_id) for item_id in item_ids],
        )

    def _stored_times(self, order_id: int) -> tuple[Optional[datetime], Optional[datetime]]:
        row = self._conn.execute(
            "SELECT create_time, update_time FROM t_order WHERE id = ?", (order_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"No order with id {order_id}")
        return from_db_time(row[0]), from_db_time(row[1])

    def _load_items(self, order_id: int) -> list[Coffee]:
        cur = self._conn.execute(
            """
            SELECT m.id, m.name, m.price, m.create_time, m.update_time
            FROM t_order_coffee oc
            JOIN t_menu m ON m.id = oc.items_id
            WHERE oc.coffee_order_id = ?
            ORDER BY oc.rowid
            """,
            (order_id,),
        )
        return [coffee_from_row(row, self._codec) for row in cur.fetchall()]

    def _order_from_row(self, row: Sequence[object]) -> CoffeeOrder:
        # row: (id, state, customer, create_time, update_time)
        return CoffeeOrder(
            id=row[0],
            items=self._load_items(int(row[0])),  # type: ignore[arg-type]
            state=row[1],
            customer=row[2],
            create_time=from_db_time(row[3]),
            update_time=from_db_time(row[4]),
        )

    def find_by_id(self, order_id: OrderId) -> Optional[CoffeeOrder]:
        cur = self._conn.execute(
            f"SELECT {ORDER_COLUMNS} FROM t_order WHERE id = ?",
            (order_id,),
        )
        row = cur.fetchone()
        if row:
            return self._order_from_row(row)
        return None

    def find_all(self) -> Iterator[CoffeeOrder]:
        cur = self._conn.execute(f"SELECT {ORDER_COLUMNS} FROM t_order ORDER BY id")
        for row in cur:
            yield self._order_from_row(row)

    def find_by_item(self, coffee_id: CoffeeId) -> Iterator[CoffeeOrder]:
        cur = self._conn.execute(
            f"""
            SELECT {ORDER_COLUMNS} FROM t_order
            WHERE id IN (SELECT coffee_order_id FROM t_order_coffee WHERE items_id = ?)
            ORDER BY id
            """,
            (coffee_id,),
        )
        for row in cur:
            yield self._order_from_row(row)

    def count(self) -> int:
        (total,) = self._conn.execute("SELECT COUNT(*) FROM t_order").fetchone()
        return int(total)

    def delete_by_id(self, order_id: OrderId) -> None:
        with constraint_errors("t_order"), self._conn:
            self._conn.execute("DELETE FROM t_order_coffee WHERE coffee_order_id = ?", (order_id,))
            cur = self._conn.execute("DELETE FROM t_order WHERE id = ?", (order_id,))
        if cur.rowcount == 0:
            raise NotFoundError(f"No order with id {order_id}")
        self._logger.info(
            "Deleted order", extra={"entity": "order", "entity_id": order_id, "table": "t_order"}
        )
