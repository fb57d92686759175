from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

from xcandle_sim.config import load_config, serialize_config
from xcandle_sim.monitoring import AuditLog
from xcandle_sim.runtime import bars_from_records, create_run_context, run_session, serialize_result


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the X-candle simulation over normalised bars.")
    parser.add_argument("--config", required=True)
    parser.add_argument("--bars", required=True, help="JSON list of {timestamp, open, high, low, close}")
    parser.add_argument("--output", required=True)
    parser.add_argument("--audit-log", default=None)
    args = parser.parse_args()

    config_path = Path(args.config)
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config = load_config(config_path)
    context = create_run_context(config_path, config)
    audit = AuditLog(
        args.audit_log or config.monitoring.audit_log_path,
        run_id=context.run_id,
        config_hash=context.config_hash,
    )

    records = json.loads(Path(args.bars).read_text(encoding="utf-8"))
    bars = bars_from_records(records)
    result = run_session(bars, config, context, audit)

    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "run_id": context.run_id,
        "config_path": str(config_path),
        "config": serialize_config(config),
        **serialize_result(result),
    }

    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    print(f"Wrote {output_path} ({result.summary.trades} trades, total R {result.summary.total_r})")


if __name__ == "__main__":
    main()
