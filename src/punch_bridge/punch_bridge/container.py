from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_MQTT_TOPIC
from .core.enums import DBEngine
from .core.exceptions import ConfigurationError
from .database.connection import DBConfig, DatabaseConnection, MySQLConnection, SQLiteConnection
from .mqtt.subscriber import PunchSubscriber, parse_broker_url
from .punches.ingestion_service import PunchIngestionService
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.query_service import PunchQueryService
from .punches.repository import PunchRepository
from .punches.sqlite_punch_repository import SQLitePunchRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    punches_repo: PunchRepository

    ingestion_service: PunchIngestionService
    query_service: PunchQueryService

    subscriber: Optional[PunchSubscriber] = None

    def close(self) -> None:
        if self.subscriber is not None:
            self.subscriber.stop()


def build_connection(*, db_engine: str, sqlite_path: str = "", db_config: Optional[dict] = None) -> DatabaseConnection:
    try:
        engine = DBEngine(str(db_engine).lower())
    except ValueError as exc:
        raise ConfigurationError(f"Unsupported DB_ENGINE: {db_engine!r}") from exc

    if engine is DBEngine.SQLITE:
        if not sqlite_path:
            raise ConfigurationError("SQLITE_PATH is required when DB_ENGINE=sqlite")
        return SQLiteConnection(sqlite_path)

    db_config = db_config or {}
    return MySQLConnection(
        DBConfig(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "attendance_db")),
        )
    )


def build_container(
    *,
    db_engine: str = DBEngine.SQLITE.value,
    sqlite_path: str = "",
    db_config: Optional[dict] = None,
    mqtt_url: Optional[str] = None,
    mqtt_topic: Optional[str] = None,
    mqtt_client_id: str = "",
) -> Container:
    conn = build_connection(db_engine=db_engine, sqlite_path=sqlite_path, db_config=db_config)

    if isinstance(conn, SQLiteConnection):
        punches_repo: PunchRepository = SQLitePunchRepository(conn)
    else:
        punches_repo = MySQLPunchRepository(conn)

    ingestion_service = PunchIngestionService(punches_repo)
    query_service = PunchQueryService(punches_repo)

    subscriber = None
    if mqtt_url:
        subscriber = PunchSubscriber(
            parse_broker_url(mqtt_url),
            ingestion_service.handle_message,
            topic=mqtt_topic or DEFAULT_MQTT_TOPIC,
            client_id=mqtt_client_id,
        )

    return Container(
        conn=conn,
        punches_repo=punches_repo,
        ingestion_service=ingestion_service,
        query_service=query_service,
        subscriber=subscriber,
    )
