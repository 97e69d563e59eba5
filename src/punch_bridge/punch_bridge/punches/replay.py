"""Re-ingest captured messages.

Input is newline-delimited JSON. Each line is either a device envelope as it
came off the topic, or a stored ``raw_json`` audit value (``{"msg", "rec"}``),
which is replayed as its envelope carrying only that one event.
"""

from __future__ import annotations

import json
from collections import Counter
from typing import Iterable, Iterator

from ..core.enums import IngestOutcome
from .ingestion_service import PunchIngestionService

REPLAY_TOPIC = "replay"


def iter_payloads(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        line = line.strip()
        if not line:
            continue

        try:
            doc = json.loads(line)
        except ValueError:
            yield line
            continue

        if isinstance(doc, dict) and isinstance(doc.get("msg"), dict) and "rec" in doc:
            envelope = dict(doc["msg"])
            envelope["record"] = [doc["rec"]]
            yield json.dumps(envelope, ensure_ascii=False)
        else:
            yield line


def replay_lines(service: PunchIngestionService, lines: Iterable[str], *, topic: str = REPLAY_TOPIC) -> Counter:
    """Feed every payload through ingestion; returns counts per outcome."""

    totals: Counter = Counter()
    for payload in iter_payloads(lines):
        report = service.handle_message(topic, payload)
        if report.outcome is IngestOutcome.IGNORED:
            totals[IngestOutcome.IGNORED] += 1
        totals.update(report.events)
    return totals
