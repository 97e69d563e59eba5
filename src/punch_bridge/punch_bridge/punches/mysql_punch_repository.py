from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_timestamp
from ..database.base import db_cursor, fetchall
from ..database.connection import MySQLConnection
from .model import NormalizedPunch, PunchRecord
from .repository import PunchRepository

_COLUMNS = (
    "id, device_sn, enrollid, punch_time, `inout`, mode, `event`, verifymode, "
    "temp, image_base64, raw_json, received_at"
)


class MySQLPunchRepository(PunchRepository):
    """MySQL store. Ordering uses ``punch_at``, filled from ``punch_time`` on insert."""

    def __init__(self, conn_factory: MySQLConnection):
        self._conn_factory = conn_factory

    def insert(self, punch: NormalizedPunch) -> int:
        params = punch.to_params()
        params["punch_at"] = parse_timestamp(punch.punch_time)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO punches (
                    device_sn, enrollid, punch_time, punch_at, `inout`, mode, `event`, verifymode,
                    temp, image_base64, raw_json, received_at
                ) VALUES (
                    %(device_sn)s, %(enrollid)s, %(punch_time)s, %(punch_at)s, %(inout)s, %(mode)s,
                    %(event)s, %(verifymode)s, %(temp)s, %(image_base64)s, %(raw_json)s, %(received_at)s
                )
                """,
                params,
            )
            return int(cur.lastrowid)

    def list_latest(self, limit: int) -> Sequence[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                ORDER BY punch_at DESC, id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [PunchRecord.from_row(r) for r in fetchall(cur)]

    def list_logs(self, *, since: Optional[str], limit: int, offset: int) -> Sequence[PunchRecord]:
        clauses = []
        params: list[object] = []

        if since:
            since_at = parse_timestamp(since)
            if since_at is None:
                # Matches SQLite, where datetime() of garbage is NULL and filters everything.
                return []
            clauses.append("punch_at >= %s")
            params.append(since_at)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                {where}
                ORDER BY punch_at DESC, id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params),
            )
            return [PunchRecord.from_row(r) for r in fetchall(cur)]

    def list_by_employee(self, *, enrollid: int, limit: int, offset: int) -> Sequence[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                WHERE enrollid = %s
                ORDER BY punch_at DESC, id DESC
                LIMIT %s OFFSET %s
                """,
                (int(enrollid), int(limit), int(offset)),
            )
            return [PunchRecord.from_row(r) for r in fetchall(cur)]
