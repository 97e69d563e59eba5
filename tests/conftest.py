from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.punch_bridge.punch_bridge.database.bootstrap import apply_schema
from src.punch_bridge.punch_bridge.database.connection import SQLiteConnection
from src.punch_bridge.punch_bridge.main import create_app, get_container
from src.punch_bridge.punch_bridge.punches.model import NormalizedPunch
from src.punch_bridge.punch_bridge.punches.sqlite_punch_repository import SQLitePunchRepository


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 1, 9, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def sqlite_conn(tmp_path) -> SQLiteConnection:
    conn = SQLiteConnection(tmp_path / "data" / "punches.sqlite")
    apply_schema(conn)
    return conn


@pytest.fixture
def punches_repo(sqlite_conn) -> SQLitePunchRepository:
    return SQLitePunchRepository(sqlite_conn)


@pytest.fixture
def make_punch():
    def factory(**overrides) -> NormalizedPunch:
        values = dict(
            device_sn="DEV1",
            enrollid=7,
            punch_time="2024-01-01T08:00:00Z",
            inout=0,
            mode=None,
            event=None,
            verifymode=None,
            temp=None,
            image_base64=None,
            raw_json="{}",
            received_at="2024-01-01T08:00:01.000Z",
        )
        values.update(overrides)
        return NormalizedPunch(**values)

    return factory


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app({"SQLITE_PATH": str(tmp_path / "api.sqlite")})


@pytest.fixture
def container(app):
    return get_container(app)


@pytest.fixture
def client(app):
    return app.test_client()
