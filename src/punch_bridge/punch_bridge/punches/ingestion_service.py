from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Optional

from ..core.constants import SENDLOG_COMMAND
from ..core.enums import IngestOutcome
from ..core.exceptions import StorageError
from .model import IngestReport
from .normalizer import normalize_punch
from .repository import PunchRepository

logger = logging.getLogger(__name__)


def decode_message(payload: bytes | str) -> Optional[dict]:
    """Parse a raw payload; anything that is not a JSON object yields ``None``."""

    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError:
            return None

    try:
        msg = json.loads(payload)
    except (TypeError, ValueError, RecursionError):
        return None

    return msg if isinstance(msg, dict) else None


class PunchIngestionService:
    """Entry point for inbound device messages.

    Called once per message. Punch uploads fan out to one store insert per
    event, in list order; everything else on the topic is ignored.
    """

    def __init__(self, punches: PunchRepository, *, command: str = SENDLOG_COMMAND):
        self._punches = punches
        self._command = command

    def handle_message(
        self,
        topic: Optional[str],
        payload: bytes | str,
        *,
        now: Optional[datetime] = None,
    ) -> IngestReport:
        msg = decode_message(payload)
        if msg is None:
            logger.debug("ignored undecodable payload on %s", topic)
            return IngestReport.ignored(topic)

        records: Any = msg.get("record")
        if msg.get("cmd") != self._command or not isinstance(records, list):
            logger.debug("ignored cmd=%r on %s", msg.get("cmd"), topic)
            return IngestReport.ignored(topic)

        device_sn = msg.get("sn") or None
        outcomes = [self._ingest_event(device_sn, msg, rec, now=now) for rec in records]
        report = IngestReport.from_events(topic, outcomes)

        logger.debug(
            "sendlog from %s: persisted=%d rejected=%d failed=%d",
            device_sn,
            report.persisted,
            report.rejected,
            report.failed,
        )
        return report

    def _ingest_event(self, device_sn: Any, msg: dict, rec: Any, *, now: Optional[datetime]) -> IngestOutcome:
        punch = normalize_punch(device_sn, msg, rec, now=now)
        if punch.enrollid <= 0:
            return IngestOutcome.REJECTED

        try:
            self._punches.insert(punch)
        except StorageError:
            logger.exception("failed to store punch enrollid=%s device=%s", punch.enrollid, punch.device_sn)
            return IngestOutcome.FAILED

        return IngestOutcome.PERSISTED
