from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path


def main() -> int:
    # Ensure the package under 'src' is importable without installation
    src_dir = Path(__file__).resolve().parents[1] / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    from springbucks.db.connection import connect
    from springbucks.db.schema import ensure_schema

    parser = argparse.ArgumentParser(description="Initialize SQLite database schema")
    parser.add_argument(
        "--db",
        default=os.path.join("data", "springbucks.sqlite3"),
        help="Path to SQLite DB file (will be created if missing)",
    )
    args = parser.parse_args()

    db_path = os.path.abspath(args.db)

    conn = connect(db_path)
    try:
        ensure_schema(conn)
    finally:
        conn.close()

    print(f"Initialized schema at: {db_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
