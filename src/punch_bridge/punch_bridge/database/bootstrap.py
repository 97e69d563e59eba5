from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from ..core.enums import DBEngine
from ..core.exceptions import StorageError
from .base import db_cursor, fetchall
from .connection import DatabaseConnection, MySQLConnection, SQLiteConnection

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parent / "sql"


def schema_path_for(engine: DBEngine) -> Path:
    return SQL_DIR / f"{DBEngine(engine).value}_schema.sql"


# A statement is a run of quoted literals or characters other than ";" and quotes.
_STATEMENT_RE = re.compile(r"""(?:'[^']*'|"[^"]*"|`[^`]*`|[^;'"`])+""")


def _strip_comment_lines(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_schema_statements(sql: str) -> Iterable[str]:
    for m in _STATEMENT_RE.finditer(_strip_comment_lines(sql)):
        stmt = m.group().strip()
        if stmt:
            yield stmt


def enable_wal(conn_factory: SQLiteConnection) -> None:
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("PRAGMA journal_mode = WAL")


def ensure_database_exists(conn_factory: MySQLConnection) -> None:
    database = conn_factory.config.database
    try:
        conn = conn_factory.connect(with_database=False)
    except conn_factory.errors as exc:
        raise StorageError(f"cannot connect to {conn_factory.describe()}: {exc}") from exc
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    except conn_factory.errors as exc:
        raise StorageError(f"cannot create database {database}: {exc}") from exc
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Optional[str | Path] = None) -> None:
    """Create the punches table and its indexes (idempotent)."""

    schema_path = Path(schema_path) if schema_path else schema_path_for(conn_factory.engine)
    sql = schema_path.read_text(encoding="utf-8")

    if isinstance(conn_factory, SQLiteConnection):
        conn_factory.ensure_parent_dir()
        enable_wal(conn_factory)
    else:
        ensure_database_exists(conn_factory)

    with db_cursor(conn_factory) as (_, cur):
        for stmt in iter_schema_statements(sql):
            cur.execute(stmt)

    logger.info("schema ready on %s (%s)", conn_factory.describe(), conn_factory.engine.value)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory) as (_, cur):
        if conn_factory.engine is DBEngine.SQLITE:
            cur.execute("SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name")
        else:
            cur.execute("SHOW TABLES")
        rows = fetchall(cur)
    return [next(iter(r.values())) for r in rows]
