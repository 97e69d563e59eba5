from __future__ import annotations

import pytest

from src.punch_bridge.punch_bridge.core.exceptions import ValidationError
from src.punch_bridge.punch_bridge.punches.query_service import PunchQueryService


class RecordingPunches:
    def __init__(self):
        self.calls: list[tuple] = []

    def list_latest(self, limit):
        self.calls.append(("latest", limit))
        return []

    def list_logs(self, *, since, limit, offset):
        self.calls.append(("logs", since, limit, offset))
        return []

    def list_by_employee(self, *, enrollid, limit, offset):
        self.calls.append(("employee", enrollid, limit, offset))
        return []


@pytest.mark.parametrize(
    "requested, effective",
    [(None, 50), ("", 50), ("abc", 50), ("10", 10), (10, 10), ("500", 500), ("501", 500), (100000, 500), ("0", 1), (-5, 1)],
)
def test_latest_clamps_limit(requested, effective):
    repo = RecordingPunches()

    page = PunchQueryService(repo).latest(requested)

    assert page.limit == effective
    assert repo.calls == [("latest", effective)]
    assert page.to_dict() == {"count": 0, "limit": effective, "rows": []}


def test_logs_defaults():
    repo = RecordingPunches()

    page = PunchQueryService(repo).logs()

    assert repo.calls == [("logs", None, 200, 0)]
    assert page.to_dict() == {"count": 0, "limit": 200, "offset": 0, "since": None, "rows": []}


@pytest.mark.parametrize(
    "limit, offset, expected",
    [
        ("1000", "0", (1000, 0)),
        ("5000", "10", (1000, 10)),
        ("0", "-3", (1, 0)),
        ("x", "y", (200, 0)),
    ],
)
def test_logs_clamps_paging(limit, offset, expected):
    repo = RecordingPunches()

    PunchQueryService(repo).logs(since="2024-01-01", limit=limit, offset=offset)

    assert repo.calls == [("logs", "2024-01-01", *expected)]


def test_logs_blank_since_means_no_bound():
    repo = RecordingPunches()

    page = PunchQueryService(repo).logs(since="")

    assert page.since is None
    assert repo.calls[0][1] is None


def test_by_employee_passes_parsed_id():
    repo = RecordingPunches()

    page = PunchQueryService(repo).by_employee("12", limit="2000", offset="4")

    assert repo.calls == [("employee", 12, 1000, 4)]
    assert page.to_dict() == {"count": 0, "enrollid": 12, "limit": 1000, "offset": 4, "rows": []}


@pytest.mark.parametrize("enrollid", ["abc", "0", "-1", "1.5", "", None, True, 0, "99999999999999999999", 2**63, "9" * 5000])
def test_by_employee_rejects_bad_ids_before_store(enrollid):
    repo = RecordingPunches()

    with pytest.raises(ValidationError):
        PunchQueryService(repo).by_employee(enrollid)

    assert repo.calls == []


def test_huge_offset_is_capped_to_64_bits():
    repo = RecordingPunches()

    page = PunchQueryService(repo).logs(offset="99999999999999999999")

    assert page.offset == 2**63 - 1
    assert repo.calls == [("logs", None, 200, 2**63 - 1)]


def test_largest_64_bit_enrollid_is_accepted():
    repo = RecordingPunches()

    PunchQueryService(repo).by_employee(str(2**63 - 1))

    assert repo.calls == [("employee", 2**63 - 1, 200, 0)]
