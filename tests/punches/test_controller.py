from __future__ import annotations

import json

import pytest

from src.punch_bridge.punch_bridge.core.exceptions import ConfigurationError
from src.punch_bridge.punch_bridge.main import create_app

AUTH = {"Authorization": "Bearer test-token"}


def _ingest(container, *records, sn="DEV1"):
    payload = json.dumps({"cmd": "sendlog", "sn": sn, "record": list(records)})
    return container.ingestion_service.handle_message(f"aiface/{sn}/sub", payload)


def test_health_is_public(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ok"] is True
    assert body["mqtt"]["connected"] is False
    assert body["db"]["engine"] == "sqlite"
    assert body["time"].endswith("Z")


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer nope"}, {"Authorization": "test-token"}])
def test_read_routes_require_token(client, headers):
    for path in ("/logs/latest", "/logs", "/logs/employee/7"):
        resp = client.get(path, headers=headers)
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Unauthorized"}


def test_latest_returns_newest_first(client, container):
    _ingest(container, {"enrollid": 7, "time": "2024-01-01T08:00:00Z", "inout": 0})
    _ingest(container, {"enrollid": 8, "time": "2024-01-01T08:00:00Z", "inout": 1})

    resp = client.get("/logs/latest?limit=1", headers=AUTH)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["count"] == 1
    assert body["limit"] == 1
    assert body["rows"][0]["enrollid"] == 8
    assert body["rows"][0]["device_sn"] == "DEV1"


def test_logs_since_and_paging(client, container):
    _ingest(
        container,
        {"enrollid": 1, "time": "2024-01-01 07:00:00"},
        {"enrollid": 2, "time": "2024-01-01 08:00:00"},
        {"enrollid": 3, "time": "2024-01-01 09:00:00"},
    )

    resp = client.get("/logs?since=2024-01-01T08:00:00Z&limit=1&offset=1", headers=AUTH)

    body = resp.get_json()
    assert body["limit"] == 1
    assert body["offset"] == 1
    assert body["since"] == "2024-01-01T08:00:00Z"
    assert [r["enrollid"] for r in body["rows"]] == [2]


def test_logs_defaults_when_params_missing(client):
    body = client.get("/logs", headers=AUTH).get_json()

    assert body == {"count": 0, "limit": 200, "offset": 0, "since": None, "rows": []}


def test_by_employee(client, container):
    _ingest(container, {"enrollid": 7, "time": "2024-01-01 08:00:00"}, {"enrollid": 9, "time": "2024-01-01 09:00:00"})

    body = client.get("/logs/employee/7?limit=5000", headers=AUTH).get_json()

    assert body["enrollid"] == 7
    assert body["limit"] == 1000
    assert body["count"] == 1
    assert {r["enrollid"] for r in body["rows"]} == {7}


@pytest.mark.parametrize("enrollid", ["abc", "0", "-4", "99999999999999999999"])
def test_by_employee_rejects_invalid_id(client, enrollid):
    resp = client.get(f"/logs/employee/{enrollid}", headers=AUTH)

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid enrollid"}


def test_missing_api_token_is_fatal(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    with pytest.raises(ConfigurationError):
        create_app({"API_TOKEN": "", "SQLITE_PATH": str(tmp_path / "x.sqlite")})


def test_mqtt_url_required_when_subscriber_enabled(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    with pytest.raises(ConfigurationError):
        create_app({"MQTT_ENABLED": True, "MQTT_URL": "", "SQLITE_PATH": str(tmp_path / "x.sqlite")})


def test_huge_offset_is_not_a_server_error(client, container):
    _ingest(container, {"enrollid": 7, "time": "2024-01-01 08:00:00"})

    resp = client.get("/logs?offset=99999999999999999999", headers=AUTH)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["offset"] == 2**63 - 1
    assert body["rows"] == []
