"""Audited simulation runs driven from a config file."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from xcandle_sim.config.loader import compute_config_hash
from xcandle_sim.config.models import SimulatorConfig
from xcandle_sim.monitoring.audit import AuditLog
from xcandle_sim.runtime.report import serialize_trade
from xcandle_sim.simulator.engine import XCandleSimulator
from xcandle_sim.simulator.models import SimulationResult
from xcandle_sim.simulator.validation import InputContractViolation
from xcandle_sim.strategy.models import Bar


@dataclass(frozen=True)
class RunContext:
    run_id: str
    config_name: str
    config_version: str
    config_path: Path
    config_hash: str
    started_at: datetime


def create_run_context(
    config_path: str | Path,
    config: SimulatorConfig,
    run_id: Optional[str] = None,
) -> RunContext:
    path = Path(config_path)
    config_hash = compute_config_hash(path)
    started_at = datetime.now(timezone.utc)
    if run_id is None:
        stamp = started_at.strftime("%Y%m%dT%H%M%SZ")
        run_id = f"{config.run_id_prefix}-{stamp}-{config_hash[:8]}"
    return RunContext(
        run_id=run_id,
        config_name=config.name,
        config_version=config.version,
        config_path=path,
        config_hash=config_hash,
        started_at=started_at,
    )


def run_session(
    bars: Sequence[Bar],
    config: SimulatorConfig,
    context: RunContext,
    audit: Optional[AuditLog] = None,
) -> SimulationResult:
    """Run the engine once, recording the run in the audit log.

    Input contract violations are logged as ``input_rejected`` and re-raised.
    """
    if audit is None:
        audit = AuditLog(config.monitoring.audit_log_path, context.run_id, context.config_hash)

    audit.log(
        "run_started",
        {
            "config": context.config_name,
            "version": context.config_version,
            "bars": len(bars),
        },
    )
    try:
        result = XCandleSimulator(config.strategy).run(bars)
    except InputContractViolation as exc:
        audit.log("input_rejected", {"reason": exc.reason, "index": exc.index})
        raise

    for trade in result.trades:
        audit.log("trade_closed", serialize_trade(trade))
    if result.unresolved is not None:
        audit.log("trade_unresolved", serialize_trade(result.unresolved))

    summary = result.summary
    audit.log(
        "run_completed",
        {
            "trades": summary.trades,
            "total_r": str(summary.total_r),
            "win_rate": str(summary.win_rate),
            "max_drawdown_r": str(summary.max_drawdown_r),
            "invalid_trades": summary.invalid_trades,
            "zero_risk_trades": summary.zero_risk_trades,
            "unresolved_trades": summary.unresolved_trades,
            "skipped_outside_window": result.skipped.outside_window,
            "skipped_end_of_data": result.skipped.end_of_data,
            "skipped_invalid_risk": result.skipped.invalid_risk,
        },
    )
    return result
