"""Turn one device event into a persistence-ready punch.

Pure function of its inputs plus the clock: no I/O, never raises on odd field
values. Fields that do not coerce are left absent; the full envelope and event
are always kept in ``raw_json`` for audit and replay.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.coercion import parse_float, parse_int64, parse_str
from ..common.datetime_utils import to_iso_z, utc_now
from .model import NormalizedPunch

_INT_FIELDS = ("inout", "mode", "event", "verifymode")


def dump_raw(envelope: Any, event: Any) -> str:
    return json.dumps({"msg": envelope, "rec": event}, ensure_ascii=False, separators=(",", ":"))


def normalize_punch(
    device_sn: Optional[str],
    envelope: Mapping[str, Any],
    event: Any,
    *,
    now: Optional[datetime] = None,
) -> NormalizedPunch:
    rec: Mapping[str, Any] = event if isinstance(event, Mapping) else {}
    received_at = to_iso_z(now or utc_now())

    punch_time = parse_str(rec.get("time")) or parse_str(envelope.get("cloudtime")) or received_at
    ints = {name: parse_int64(rec.get(name)) for name in _INT_FIELDS}

    return NormalizedPunch(
        device_sn=parse_str(device_sn) or parse_str(envelope.get("sn")),
        enrollid=parse_int64(rec.get("enrollid")) or 0,
        punch_time=punch_time,
        temp=parse_float(rec.get("temp")),
        image_base64=parse_str(rec.get("image")),
        raw_json=dump_raw(envelope, event),
        received_at=received_at,
        **ints,
    )
