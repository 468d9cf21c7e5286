from __future__ import annotations

from pathlib import Path

import pytest

from springbucks.db.connection import connect
from springbucks.db.schema import drop_schema, ensure_schema, row_counts
from springbucks.domain.errors import StorageConnectionError


def test_connect_creates_parent_directories(tmp_path: Path) -> None:
    db = tmp_path / "a" / "b" / "store.sqlite3"
    conn = connect(db)
    try:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    finally:
        conn.close()
    assert db.exists()


def test_connect_unreachable_path_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(StorageConnectionError):
        connect(blocker / "store.sqlite3")


def test_connection_error_is_builtin_connection_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(ConnectionError):
        connect(blocker / "sub" / "store.sqlite3")


def test_ensure_schema_is_idempotent() -> None:
    conn = connect(":memory:")
    ensure_schema(conn)
    ensure_schema(conn)
    assert row_counts(conn) == {"t_menu": 0, "t_order": 0, "t_order_coffee": 0}
    conn.close()


def test_drop_schema_removes_tables_with_rows() -> None:
    conn = connect(":memory:")
    ensure_schema(conn)
    conn.execute("INSERT INTO t_menu (id, name, price) VALUES (1, 'espresso', 10000)")
    conn.execute("INSERT INTO t_order (id, state) VALUES (1, 0)")
    conn.execute("INSERT INTO t_order_coffee (coffee_order_id, items_id) VALUES (1, 1)")
    conn.commit()

    drop_schema(conn)
    tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert tables.isdisjoint({"t_menu", "t_order", "t_order_coffee"})

    ensure_schema(conn)
    assert row_counts(conn) == {"t_menu": 0, "t_order": 0, "t_order_coffee": 0}
    conn.close()
