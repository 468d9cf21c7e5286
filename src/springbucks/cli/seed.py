from __future__ import annotations

import argparse
from typing import Mapping, Sequence

from springbucks.application.services.seed_service import SeedService
from springbucks.db.connection import connect
from springbucks.db.schema import drop_schema, row_counts
from springbucks.infrastructure.money_codec import MoneyCodec
from springbucks.repositories.sqlite.coffees_sqlite import CoffeesRepoSqlite
from springbucks.repositories.sqlite.orders_sqlite import OrdersRepoSqlite


def _format_counts(counts: Mapping[str, int]) -> str:
    return " ".join(f"{table}={n}" for table, n in counts.items())


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Seed the coffee menu and sample orders")
    p.add_argument("--db", metavar="PATH", help="SQLite database file (default: from settings)")
    p.add_argument(
        "--show", action="store_true", help="Log every stored coffee and order after seeding"
    )
    p.add_argument(
        "--keep",
        action="store_true",
        help="Seed on top of existing rows instead of starting from empty tables",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """Seed the store and print table row counts.

    Startup begins from empty tables: existing menu, order and order-item rows are
    dropped before seeding, so every run leaves the same contents. ``--keep``
    appends to what is already stored.
    """
    from springbucks.config.settings import settings

    parser = build_parser()
    args = parser.parse_args(argv)

    db_path = args.db or settings.db_path
    codec = MoneyCodec(settings.currency)

    conn = connect(db_path)
    try:
        if not args.keep:
            drop_schema(conn)
        svc = SeedService(
            CoffeesRepoSqlite(conn, codec),
            OrdersRepoSqlite(conn, codec),
            currency=settings.currency,
        )
        svc.init_orders()
        if args.show:
            svc.log_contents()
        counts = row_counts(conn)
    finally:
        conn.close()

    print(f"Seeding done. {_format_counts(counts)}")
    print(f"DB: {db_path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
