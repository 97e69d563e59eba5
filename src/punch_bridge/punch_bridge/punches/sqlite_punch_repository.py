from __future__ import annotations

from typing import Optional, Sequence

from ..database.base import db_cursor, fetchall
from ..database.connection import SQLiteConnection
from .model import NormalizedPunch, PunchRecord
from .repository import PunchRepository


class SQLitePunchRepository(PunchRepository):
    def __init__(self, conn_factory: SQLiteConnection):
        self._conn_factory = conn_factory

    def insert(self, punch: NormalizedPunch) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO punches (
                    device_sn, enrollid, punch_time, inout, mode, event, verifymode,
                    temp, image_base64, raw_json, received_at
                ) VALUES (
                    :device_sn, :enrollid, :punch_time, :inout, :mode, :event, :verifymode,
                    :temp, :image_base64, :raw_json, :received_at
                )
                """,
                punch.to_params(),
            )
            return int(cur.lastrowid)

    def list_latest(self, limit: int) -> Sequence[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT *
                FROM punches
                ORDER BY datetime(punch_time) DESC, id DESC
                LIMIT ?
                """,
                (int(limit),),
            )
            return [PunchRecord.from_row(r) for r in fetchall(cur)]

    def list_logs(self, *, since: Optional[str], limit: int, offset: int) -> Sequence[PunchRecord]:
        clauses = []
        params: list[object] = []

        if since:
            clauses.append("datetime(punch_time) >= datetime(?)")
            params.append(str(since))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT *
                FROM punches
                {where}
                ORDER BY datetime(punch_time) DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                tuple(params),
            )
            return [PunchRecord.from_row(r) for r in fetchall(cur)]

    def list_by_employee(self, *, enrollid: int, limit: int, offset: int) -> Sequence[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT *
                FROM punches
                WHERE enrollid = ?
                ORDER BY datetime(punch_time) DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (int(enrollid), int(limit), int(offset)),
            )
            return [PunchRecord.from_row(r) for r in fetchall(cur)]
