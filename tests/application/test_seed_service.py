from __future__ import annotations

import logging
import sqlite3

import pytest
from _pytest.logging import LogCaptureFixture

from springbucks.application.services.seed_service import SeedService
from springbucks.db.schema import row_counts
from springbucks.domain.errors import ConversionError
from springbucks.domain.value_objects.money import Money
from springbucks.infrastructure.money_codec import MoneyCodec
from springbucks.logging_config import LOG_NAME, get_logger
from springbucks.repositories.sqlite.coffees_sqlite import CoffeesRepoSqlite
from springbucks.repositories.sqlite.orders_sqlite import OrdersRepoSqlite


def _service(conn: sqlite3.Connection, currency: str = "TWD") -> SeedService:
    codec = MoneyCodec("TWD")
    return SeedService(
        CoffeesRepoSqlite(conn, codec), OrdersRepoSqlite(conn, codec), currency=currency
    )


def test_seed_writes_expected_rows() -> None:
    conn = sqlite3.connect(":memory:")
    result = _service(conn).init_orders()

    assert row_counts(conn) == {"t_menu": 2, "t_order": 2, "t_order_coffee": 3}
    espresso, latte = result.coffees
    assert espresso.price == Money.of("TWD", 100)
    assert latte.price == Money.of("TWD", 150)
    single, double = result.orders
    assert [c.id for c in single.items] == [espresso.id]
    assert [c.id for c in double.items] == [espresso.id, latte.id]
    assert all(o.customer == "Li Lei" and o.state == 0 for o in result.orders)
    assert all(o.id is not None and o.create_time is not None for o in result.orders)
    conn.close()


def test_seed_logs_each_entity(caplog: LogCaptureFixture) -> None:
    conn = sqlite3.connect(":memory:")
    svc = _service(conn)
    logger = get_logger()
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger=LOG_NAME)
    try:
        svc.init_orders()
        svc.log_contents()
    finally:
        logger.removeHandler(caplog.handler)

    messages = [r.getMessage() for r in caplog.records]
    assert sum(m.startswith("Coffee: ") for m in messages) == 2
    assert sum(m.startswith("Order: ") for m in messages) == 2
    assert sum(m.startswith("Loading ") for m in messages) == 4
    conn.close()


def test_seed_failure_aborts_remaining_work() -> None:
    conn = sqlite3.connect(":memory:")
    # codec stores TWD only, so a USD menu cannot be written
    with pytest.raises(ConversionError):
        _service(conn, currency="USD").init_orders()
    assert row_counts(conn) == {"t_menu": 0, "t_order": 0, "t_order_coffee": 0}
    conn.close()
