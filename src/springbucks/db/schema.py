"""Schema for the menu, order and order-item tables."""

from __future__ import annotations

import sqlite3

SCHEMA_SQL = """
-- Menu entries; price holds minor units of the configured currency
CREATE TABLE IF NOT EXISTS t_menu (
    id              INTEGER PRIMARY KEY,
    name            TEXT,
    price           INTEGER,
    create_time     TEXT,
    update_time     TEXT
);

-- Orders; state is an opaque status code
CREATE TABLE IF NOT EXISTS t_order (
    id              INTEGER PRIMARY KEY,
    state           INTEGER NOT NULL,
    customer        TEXT,
    create_time     TEXT,
    update_time     TEXT
);

-- One row per (order, coffee) membership; coffees cannot be deleted while referenced
CREATE TABLE IF NOT EXISTS t_order_coffee (
    coffee_order_id INTEGER NOT NULL REFERENCES t_order(id),
    items_id        INTEGER NOT NULL REFERENCES t_menu(id)
);

CREATE INDEX IF NOT EXISTS idx_order_coffee_order ON t_order_coffee(coffee_order_id);
CREATE INDEX IF NOT EXISTS idx_order_coffee_item ON t_order_coffee(items_id);
"""

TABLES = ("t_menu", "t_order", "t_order_coffee")

DROP_SQL = """
DROP TABLE IF EXISTS t_order_coffee;
DROP TABLE IF EXISTS t_order;
DROP TABLE IF EXISTS t_menu;
"""


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Create all tables if missing. Safe to call multiple times."""
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.executescript(SCHEMA_SQL)
    conn.commit()


def drop_schema(conn: sqlite3.Connection) -> None:
    """Drop all tables, join table first."""
    conn.executescript(DROP_SQL)
    conn.commit()


def row_counts(conn: sqlite3.Connection) -> dict[str, int]:
    return {
        table: int(conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0])
        for table in TABLES
    }
