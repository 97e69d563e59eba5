from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List

from ..core.exceptions import StorageError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection):
    """Yield ``(conn, cur)`` inside one transaction.

    Commits on success, rolls back on error, and re-raises driver errors as
    ``StorageError``.
    """

    try:
        conn = conn_factory.connect()
    except conn_factory.errors as exc:
        raise StorageError(f"cannot connect to {conn_factory.describe()}: {exc}") from exc

    try:
        cur = conn_factory.cursor(conn)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except (*conn_factory.errors, OverflowError) as exc:
        conn.rollback()
        raise StorageError(str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return [dict(r) for r in rows or []]
