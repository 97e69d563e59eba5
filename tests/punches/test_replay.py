from __future__ import annotations

import json

from src.punch_bridge.punch_bridge.core.enums import IngestOutcome
from src.punch_bridge.punch_bridge.punches.ingestion_service import PunchIngestionService
from src.punch_bridge.punch_bridge.punches.replay import iter_payloads, replay_lines


def test_raw_json_lines_replay_only_their_event():
    envelope = {"cmd": "sendlog", "sn": "DEV1", "record": [{"enrollid": 1}, {"enrollid": 2}]}
    line = json.dumps({"msg": envelope, "rec": envelope["record"][1]})

    (payload,) = list(iter_payloads([line]))

    assert json.loads(payload) == {"cmd": "sendlog", "sn": "DEV1", "record": [{"enrollid": 2}]}


def test_replay_counts_outcomes(punches_repo):
    lines = [
        json.dumps({"cmd": "sendlog", "sn": "DEV1", "record": [{"enrollid": 1}, {"enrollid": 0}]}),
        "",
        '{"cmd":"heartbeat"}',
        "{broken",
        json.dumps({"msg": {"cmd": "sendlog", "sn": "DEV2", "record": []}, "rec": {"enrollid": 5}}),
    ]

    totals = replay_lines(PunchIngestionService(punches_repo), lines)

    assert totals[IngestOutcome.PERSISTED] == 2
    assert totals[IngestOutcome.REJECTED] == 1
    assert totals[IngestOutcome.IGNORED] == 2
    assert sorted(r.enrollid for r in punches_repo.list_latest(10)) == [1, 5]
