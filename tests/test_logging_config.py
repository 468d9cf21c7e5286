import json
import logging
from collections.abc import Generator
from logging.handlers import RotatingFileHandler

import pytest
from _pytest.logging import LogCaptureFixture

from springbucks.logging_config import LOG_NAME, JsonFormatter, get_logger


@pytest.fixture(autouse=True)
def reset_logger_handlers() -> Generator[None, None, None]:
    """Ensure tests run with a clean logger state."""
    logger = logging.getLogger(LOG_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


def test_json_formatter_returns_json_with_extras() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Saved coffee %s",
        args=("espresso",),
        exc_info=None,
    )
    record.coffee_id = 7
    formatted = formatter.format(record)
    data = json.loads(formatted)
    assert data["level"] == "INFO"
    assert data["logger"] == "test"
    assert data["message"] == "Saved coffee espresso"
    assert data["extra"] == {"coffee_id": 7}


def test_json_formatter_includes_exception_text() -> None:
    formatter = JsonFormatter()
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys

        record = logging.LogRecord(
            name="test",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="failed",
            args=(),
            exc_info=sys.exc_info(),
        )
    data = json.loads(formatter.format(record))
    assert "RuntimeError: boom" in data["exc_info"]
    assert "extra" not in data


def test_get_logger_configures_two_handlers() -> None:
    logger = get_logger()
    assert len(logger.handlers) == 2
    assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
    assert logger.propagate is False
    assert get_logger() is logger
    assert len(logger.handlers) == 2


def test_repository_extras_reach_the_formatter(caplog: LogCaptureFixture) -> None:
    import sqlite3

    from springbucks.domain.entities import Coffee
    from springbucks.infrastructure.money_codec import MoneyCodec
    from springbucks.repositories.sqlite.coffees_sqlite import CoffeesRepoSqlite

    conn = sqlite3.connect(":memory:")
    repo = CoffeesRepoSqlite(conn, MoneyCodec("TWD"))
    logger = get_logger()
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger=LOG_NAME)
    try:
        coffee = repo.save(Coffee(name="espresso"))
    finally:
        logger.removeHandler(caplog.handler)
        conn.close()

    saved = [r for r in caplog.records if r.getMessage() == "Saved coffee"]
    assert len(saved) == 1
    data = json.loads(JsonFormatter().format(saved[0]))
    assert data["entity"] == "coffee"
    assert data["entity_id"] == coffee.id
    assert data["table"] == "t_menu"
    assert "extra" not in data


def test_context_fields_are_top_level_and_other_extras_stay_nested() -> None:
    record = logging.LogRecord(
        name=LOG_NAME,
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Saved order",
        args=(),
        exc_info=None,
    )
    record.entity = "order"
    record.entity_id = 3
    record.table = "t_order"
    record.item_ids = [1, 2]
    data = json.loads(JsonFormatter().format(record))
    assert data["entity"] == "order"
    assert data["entity_id"] == 3
    assert data["table"] == "t_order"
    assert data["extra"] == {"item_ids": [1, 2]}


def test_constraint_violation_is_logged_with_table(caplog: LogCaptureFixture) -> None:
    import sqlite3

    from springbucks.domain.entities import CoffeeOrder
    from springbucks.domain.errors import ConstraintViolationError
    from springbucks.infrastructure.money_codec import MoneyCodec
    from springbucks.repositories.sqlite.orders_sqlite import OrdersRepoSqlite

    conn = sqlite3.connect(":memory:")
    repo = OrdersRepoSqlite(conn, MoneyCodec("TWD"))
    logger = get_logger()
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger=LOG_NAME)
    try:
        with pytest.raises(ConstraintViolationError):
            repo.save(CoffeeOrder(customer="Li Lei"))
    finally:
        logger.removeHandler(caplog.handler)
        conn.close()

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    data = json.loads(JsonFormatter().format(errors[0]))
    assert data["table"] == "t_order"
    assert "NOT NULL" in data["extra"]["error"]
