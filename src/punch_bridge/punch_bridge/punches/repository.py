from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NormalizedPunch, PunchRecord


class PunchRepository(Protocol):
    """Append-only punch store.

    Every read orders by punch time (parsed as a timestamp, newest first) and
    breaks ties by id descending, so results are deterministic for a fixed
    database state.
    """

    def insert(self, punch: NormalizedPunch) -> int:
        """Append one punch and return its id. Raises StorageError on failure."""

        raise NotImplementedError

    def list_latest(self, limit: int) -> Sequence[PunchRecord]:
        raise NotImplementedError

    def list_logs(self, *, since: Optional[str], limit: int, offset: int) -> Sequence[PunchRecord]:
        """Rows at or after ``since`` (timestamp comparison), sliced ``[offset, offset+limit)``."""

        raise NotImplementedError

    def list_by_employee(self, *, enrollid: int, limit: int, offset: int) -> Sequence[PunchRecord]:
        raise NotImplementedError
