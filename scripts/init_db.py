from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.punch_bridge.punch_bridge.container import build_connection
from src.punch_bridge.punch_bridge.database.bootstrap import apply_schema, list_tables
from src.punch_bridge.punch_bridge.main import load_settings


def main() -> None:
    settings = load_settings()
    conn = build_connection(
        db_engine=settings["DB_ENGINE"],
        sqlite_path=settings.get("SQLITE_PATH", ""),
        db_config=settings.get("DB_CONFIG"),
    )

    apply_schema(conn)
    tables = list_tables(conn)
    print(f"OK: Applied schema -> {conn.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
