from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ..core.enums import IngestOutcome


@dataclass(frozen=True)
class NormalizedPunch:
    """Persistence-ready punch produced from one device event (no id yet)."""

    device_sn: Optional[str]
    enrollid: int
    punch_time: str
    inout: Optional[int]
    mode: Optional[int]
    event: Optional[int]
    verifymode: Optional[int]
    temp: Optional[float]
    image_base64: Optional[str]
    raw_json: str
    received_at: str

    def to_params(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PunchRecord:
    """Stored punch row. Rows are append-only and never mutated."""

    id: int
    device_sn: Optional[str]
    enrollid: int
    punch_time: Optional[str]
    inout: Optional[int]
    mode: Optional[int]
    event: Optional[int]
    verifymode: Optional[int]
    temp: Optional[float]
    image_base64: Optional[str]
    raw_json: Optional[str]
    received_at: str

    @classmethod
    def from_row(cls, r: Mapping[str, Any]) -> "PunchRecord":
        return cls(
            id=int(r["id"]),
            device_sn=r.get("device_sn"),
            enrollid=int(r["enrollid"]),
            punch_time=r.get("punch_time"),
            inout=r.get("inout"),
            mode=r.get("mode"),
            event=r.get("event"),
            verifymode=r.get("verifymode"),
            temp=r.get("temp"),
            image_base64=r.get("image_base64"),
            raw_json=r.get("raw_json"),
            received_at=r["received_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IngestReport:
    """What happened to one inbound message.

    ``events`` holds one outcome per record, in list order. ``outcome`` is
    IGNORED for messages that are not punch uploads, PERSISTED when at least
    one event was stored, FAILED when storage failed and nothing was stored,
    and REJECTED otherwise (every event skipped, or an empty record list).
    """

    topic: Optional[str]
    outcome: IngestOutcome
    events: Tuple[IngestOutcome, ...] = field(default_factory=tuple)

    @classmethod
    def ignored(cls, topic: Optional[str]) -> "IngestReport":
        return cls(topic=topic, outcome=IngestOutcome.IGNORED)

    @classmethod
    def from_events(cls, topic: Optional[str], events: Sequence[IngestOutcome]) -> "IngestReport":
        if IngestOutcome.PERSISTED in events:
            outcome = IngestOutcome.PERSISTED
        elif IngestOutcome.FAILED in events:
            outcome = IngestOutcome.FAILED
        else:
            outcome = IngestOutcome.REJECTED
        return cls(topic=topic, outcome=outcome, events=tuple(events))

    def count(self, outcome: IngestOutcome) -> int:
        return sum(1 for e in self.events if e is outcome)

    @property
    def persisted(self) -> int:
        return self.count(IngestOutcome.PERSISTED)

    @property
    def rejected(self) -> int:
        return self.count(IngestOutcome.REJECTED)

    @property
    def failed(self) -> int:
        return self.count(IngestOutcome.FAILED)
