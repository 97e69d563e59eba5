from __future__ import annotations

from types import SimpleNamespace

import pytest

from src.punch_bridge.punch_bridge.core.enums import DBEngine
from src.punch_bridge.punch_bridge.core.exceptions import StorageError
from src.punch_bridge.punch_bridge.database.bootstrap import (
    ensure_database_exists,
    iter_schema_statements,
    schema_path_for,
)


def test_splitter_respects_quotes_and_comments():
    sql = """
    -- leading comment
    CREATE TABLE a (x TEXT DEFAULT 'a;b');
    INSERT INTO a VALUES ("c;d");

    -- trailing comment only
    """

    assert list(iter_schema_statements(sql)) == [
        "CREATE TABLE a (x TEXT DEFAULT 'a;b')",
        'INSERT INTO a VALUES ("c;d")',
    ]


def test_schema_files_ship_with_package():
    for engine in DBEngine:
        path = schema_path_for(engine)
        assert path.is_file()
        statements = list(iter_schema_statements(path.read_text(encoding="utf-8")))
        assert statements[0].startswith("CREATE TABLE IF NOT EXISTS punches")


def test_sqlite_schema_has_three_indexes():
    sql = schema_path_for(DBEngine.SQLITE).read_text(encoding="utf-8")
    statements = list(iter_schema_statements(sql))

    assert len([s for s in statements if s.startswith("CREATE INDEX IF NOT EXISTS")]) == 3


class FakeDriverError(Exception):
    pass


class FailingCursor:
    def execute(self, sql):
        raise FakeDriverError("access denied for CREATE DATABASE")


class FakeServerConnection:
    closed = False

    def cursor(self):
        return FailingCursor()

    def commit(self):
        pass

    def close(self):
        FakeServerConnection.closed = True


class FakeMySQLFactory:
    errors = (FakeDriverError,)
    config = SimpleNamespace(database="attendance_db")

    def describe(self):
        return "root@db:3306/attendance_db"

    def connect(self, *, with_database=True):
        return FakeServerConnection()


def test_create_database_failure_is_a_storage_error():
    with pytest.raises(StorageError, match="cannot create database attendance_db"):
        ensure_database_exists(FakeMySQLFactory())

    assert FakeServerConnection.closed is True


def test_splitter_keeps_backtick_identifiers():
    sql = "CREATE TABLE t (`a;b` INT);\nSELECT 1"

    assert list(iter_schema_statements(sql)) == ["CREATE TABLE t (`a;b` INT)", "SELECT 1"]
