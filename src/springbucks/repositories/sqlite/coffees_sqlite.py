from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Iterator, Optional, Sequence

from ...db.schema import ensure_schema
from ...domain.entities import Coffee
from ...domain.errors import ConstraintViolationError, NotFoundError
from ...domain.value_objects.ids import CoffeeId
from ...infrastructure.money_codec import MoneyCodec
from ...logging_config import get_logger
from ..coffees import CoffeesRepo
from .hooks import Clock, constraint_errors, from_db_time, next_update_time, to_db_time, utcnow

COFFEE_COLUMNS = "id, name, price, create_time, update_time"


def coffee_from_row(row: Sequence[object], codec: MoneyCodec) -> Coffee:
    # row: (id, name, price, create_time, update_time)
    return Coffee(
        id=row[0],
        name=row[1],
        price=codec.decode(row[2]),
        create_time=from_db_time(row[3]),
        update_time=from_db_time(row[4]),
    )


class CoffeesRepoSqlite(CoffeesRepo):
    """SQLite implementation of :class:`CoffeesRepo`.

    Example:
        >>> import sqlite3
        >>> from springbucks.domain.value_objects.money import Money
        >>> conn = sqlite3.connect(":memory:")
        >>> repo = CoffeesRepoSqlite(conn, MoneyCodec("TWD"))
        >>> coffee = repo.save(Coffee(name="espresso", price=Money.of("TWD", 100)))
        >>> repo.get_by_id(coffee.id).price
        Money(amount=Decimal('100.00'), currency='TWD')
    """

    def __init__(
        self, conn: sqlite3.Connection, codec: MoneyCodec, *, clock: Clock = utcnow
    ) -> None:
        self._conn = conn
        self._codec = codec
        self._clock = clock
        self._logger = get_logger()
        ensure_schema(self._conn)

    def save(self, coffee: Coffee) -> Coffee:
        price = self._codec.encode(coffee.price)
        if coffee.id is None:
            now = next_update_time(self._clock, None)
            with constraint_errors("t_menu"), self._conn:
                cur = self._conn.execute(
                    """
                    INSERT INTO t_menu (name, price, create_time, update_time)
                    VALUES (?, ?, ?, ?)
                    """,
                    (coffee.name, price, to_db_time(now), to_db_time(now)),
                )
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite insert failed: no lastrowid (table: t_menu)")
            coffee.id = CoffeeId(int(rowid))
            coffee.create_time = now
        else:
            created, previous = self._stored_times(coffee.id)
            now = next_update_time(self._clock, previous)
            with constraint_errors("t_menu"), self._conn:
                self._conn.execute(
                    "UPDATE t_menu SET name = ?, price = ?, update_time = ? WHERE id = ?",
                    (coffee.name, price, to_db_time(now), coffee.id),
                )
            coffee.create_time = created
        coffee.update_time = now
        self._logger.info(
            "Saved coffee", extra={"entity": "coffee", "entity_id": coffee.id, "table": "t_menu"}
        )
        return coffee

    def _stored_times(self, coffee_id: int) -> tuple[Optional[datetime], Optional[datetime]]:
        row = self._conn.execute(
            "SELECT create_time, update_time FROM t_menu WHERE id = ?", (coffee_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"No coffee with id {coffee_id}")
        return from_db_time(row[0]), from_db_time(row[1])

    def find_by_id(self, coffee_id: CoffeeId) -> Optional[Coffee]:
        cur = self._conn.execute(
            f"SELECT {COFFEE_COLUMNS} FROM t_menu WHERE id = ?",
            (coffee_id,),
        )
        row = cur.fetchone()
        if row:
            return coffee_from_row(row, self._codec)
        return None

    def find_all(self) -> Iterator[Coffee]:
        cur = self._conn.execute(f"SELECT {COFFEE_COLUMNS} FROM t_menu ORDER BY id")
        for row in cur:
            yield coffee_from_row(row, self._codec)

    def count(self) -> int:
        (total,) = self._conn.execute("SELECT COUNT(*) FROM t_menu").fetchone()
        return int(total)

    def delete_by_id(self, coffee_id: CoffeeId) -> None:
        (refs,) = self._conn.execute(
            "SELECT COUNT(*) FROM t_order_coffee WHERE items_id = ?", (coffee_id,)
        ).fetchone()
        if refs:
            raise ConstraintViolationError(
                f"Coffee {coffee_id} is still referenced by {refs} order item(s)"
            )
        with constraint_errors("t_menu"), self._conn:
            cur = self._conn.execute("DELETE FROM t_menu WHERE id = ?", (coffee_id,))
        if cur.rowcount == 0:
            raise NotFoundError(f"No coffee with id {coffee_id}")
        self._logger.info(
            "Deleted coffee", extra={"entity": "coffee", "entity_id": coffee_id, "table": "t_menu"}
        )
