from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path

import mysql.connector

from ..core.enums import DBEngine


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class SQLiteConnection:
    """Connection factory for the SQLite punch store.

    Note: We create short-lived connections per operation. The database runs in
    WAL mode so readers never block the single writer.
    """

    engine = DBEngine.SQLITE
    errors = (sqlite3.Error,)

    def __init__(self, path: str | Path, *, timeout: float = 5.0):
        self._path = Path(path)
        self._timeout = float(timeout)

    @property
    def path(self) -> Path:
        return self._path

    def describe(self) -> str:
        return str(self._path)

    def ensure_parent_dir(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._path), timeout=self._timeout)
        conn.row_factory = sqlite3.Row
        return conn

    def cursor(self, conn: sqlite3.Connection):
        return conn.cursor()


class MySQLConnection:
    """Connection factory for a MySQL punch store."""

    engine = DBEngine.MYSQL
    errors = (mysql.connector.Error,)

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def describe(self) -> str:
        c = self._config
        return f"{c.user}@{c.host}:{c.port}/{c.database}"

    def connect(self, *, with_database: bool = True):
        kwargs = dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
        )
        if with_database:
            kwargs["database"] = self._config.database
        return mysql.connector.connect(**kwargs)

    def cursor(self, conn):
        return conn.cursor(dictionary=True)


DatabaseConnection = SQLiteConnection | MySQLConnection
