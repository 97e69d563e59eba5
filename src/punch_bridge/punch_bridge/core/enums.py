from __future__ import annotations

from enum import Enum


class IngestOutcome(str, Enum):
    """Result category of one inbound message or one event inside it."""

    IGNORED = "IGNORED"
    REJECTED = "REJECTED"
    PERSISTED = "PERSISTED"
    FAILED = "FAILED"


class DBEngine(str, Enum):
    SQLITE = "sqlite"
    MYSQL = "mysql"
