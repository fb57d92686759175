"""Append-only audit log for simulation runs."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


class AuditLog:
    """JSON-lines event trail. Each record carries the run id, config hash and a
    per-instance sequence number so events of one run can be ordered and
    filtered after several runs have appended to the same file.
    """

    def __init__(self, path: str | Path, run_id: str | None = None, config_hash: str | None = None) -> None:
        self.path = Path(path)
        self.run_id = run_id
        self.config_hash = config_hash
        self.seq = 0
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, event: str, payload: dict[str, Any]) -> None:
        self.seq += 1
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "seq": self.seq,
            "run_id": self.run_id,
            "config_hash": self.config_hash,
            "event": event,
            "payload": payload,
        }
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, default=str))
            handle.write("\n")

    def read(self, event: Optional[str] = None, run_id: Optional[str] = None) -> list[dict[str, Any]]:
        """Parsed records in file order; unreadable lines are skipped."""
        if not self.path.exists():
            return []
        records = []
        with self.path.open("r", encoding="utf-8") as handle:
            for line in handle:
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if event is not None and record.get("event") != event:
                    continue
                if run_id is not None and record.get("run_id") != run_id:
                    continue
                records.append(record)
        return records
