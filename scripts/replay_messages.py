"""Replay captured device messages (or raw_json exports) into the punch store.

Usage: python scripts/replay_messages.py messages.jsonl
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.punch_bridge.punch_bridge.container import build_container
from src.punch_bridge.punch_bridge.core.enums import IngestOutcome
from src.punch_bridge.punch_bridge.database.bootstrap import apply_schema
from src.punch_bridge.punch_bridge.main import load_settings
from src.punch_bridge.punch_bridge.punches.replay import replay_lines


def main(argv: list[str]) -> None:
    if len(argv) != 2:
        raise SystemExit("usage: replay_messages.py FILE")

    settings = load_settings()
    container = build_container(
        db_engine=settings["DB_ENGINE"],
        sqlite_path=settings.get("SQLITE_PATH", ""),
        db_config=settings.get("DB_CONFIG"),
    )
    apply_schema(container.conn)

    with open(argv[1], encoding="utf-8") as f:
        totals = replay_lines(container.ingestion_service, f)

    summary = ", ".join(f"{o.value.lower()}={totals.get(o, 0)}" for o in IngestOutcome)
    print(f"OK: Replayed {argv[1]} -> {summary}")


if __name__ == "__main__":
    main(sys.argv)
