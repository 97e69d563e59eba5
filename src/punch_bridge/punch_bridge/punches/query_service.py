from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from ..common.validators import clamp_limit, clamp_offset, require_positive_int
from ..core.constants import (
    DEFAULT_LATEST_LIMIT,
    DEFAULT_OFFSET,
    DEFAULT_PAGE_LIMIT,
    MAX_LATEST_LIMIT,
    MAX_PAGE_LIMIT,
)
from .model import PunchRecord
from .repository import PunchRepository


def _rows(rows: Sequence[PunchRecord]) -> list[Dict[str, Any]]:
    return [r.to_dict() for r in rows]


@dataclass(frozen=True)
class LatestPage:
    limit: int
    rows: Sequence[PunchRecord]

    def to_dict(self) -> Dict[str, Any]:
        return {"count": len(self.rows), "limit": self.limit, "rows": _rows(self.rows)}


@dataclass(frozen=True)
class LogsPage:
    limit: int
    offset: int
    since: Optional[str]
    rows: Sequence[PunchRecord]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": len(self.rows),
            "limit": self.limit,
            "offset": self.offset,
            "since": self.since,
            "rows": _rows(self.rows),
        }


@dataclass(frozen=True)
class EmployeePage:
    enrollid: int
    limit: int
    offset: int
    rows: Sequence[PunchRecord]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": len(self.rows),
            "enrollid": self.enrollid,
            "limit": self.limit,
            "offset": self.offset,
            "rows": _rows(self.rows),
        }


class PunchQueryService:
    """Read side of the punch log: clamps paging input, then asks the store."""

    def __init__(self, punches: PunchRepository):
        self._punches = punches

    def latest(self, limit: Any = None) -> LatestPage:
        limit = clamp_limit(limit, default=DEFAULT_LATEST_LIMIT, maximum=MAX_LATEST_LIMIT)
        return LatestPage(limit=limit, rows=self._punches.list_latest(limit))

    def logs(self, *, since: Any = None, limit: Any = None, offset: Any = None) -> LogsPage:
        limit = clamp_limit(limit, default=DEFAULT_PAGE_LIMIT, maximum=MAX_PAGE_LIMIT)
        offset = clamp_offset(offset, default=DEFAULT_OFFSET)
        since = str(since) if since else None

        rows = self._punches.list_logs(since=since, limit=limit, offset=offset)
        return LogsPage(limit=limit, offset=offset, since=since, rows=rows)

    def by_employee(self, enrollid: Any, *, limit: Any = None, offset: Any = None) -> EmployeePage:
        enrollid = require_positive_int(enrollid, "enrollid")
        limit = clamp_limit(limit, default=DEFAULT_PAGE_LIMIT, maximum=MAX_PAGE_LIMIT)
        offset = clamp_offset(offset, default=DEFAULT_OFFSET)

        rows = self._punches.list_by_employee(enrollid=enrollid, limit=limit, offset=offset)
        return EmployeePage(enrollid=enrollid, limit=limit, offset=offset, rows=rows)
