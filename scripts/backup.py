"""Backup the punch database.

SQLite uses the online backup API (safe while the bridge is running).
MySQL prefers `mysqldump` (if installed).
"""

from __future__ import annotations

import sqlite3
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.punch_bridge.punch_bridge.container import build_connection
from src.punch_bridge.punch_bridge.database.connection import SQLiteConnection
from src.punch_bridge.punch_bridge.main import load_settings


def backup_sqlite(conn_factory: SQLiteConnection, out_file: Path) -> None:
    src = conn_factory.connect()
    dst = sqlite3.connect(str(out_file))
    try:
        src.backup(dst)
    finally:
        dst.close()
        src.close()


def backup_mysql(db: dict, out_file: Path) -> None:
    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        db["database"],
        "punches",
    ]

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools.")


def main() -> None:
    settings = load_settings()
    conn = build_connection(
        db_engine=settings["DB_ENGINE"],
        sqlite_path=settings.get("SQLITE_PATH", ""),
        db_config=settings.get("DB_CONFIG"),
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")

    if isinstance(conn, SQLiteConnection):
        out_file = out_dir / f"punches_{ts}.sqlite"
        backup_sqlite(conn, out_file)
    else:
        out_file = out_dir / f"punches_{ts}.sql"
        backup_mysql(settings["DB_CONFIG"], out_file)

    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
