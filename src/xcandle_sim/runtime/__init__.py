"""Runtime helpers for audited runs and reports."""

from xcandle_sim.runtime.report import bars_from_records, serialize_result, serialize_summary, serialize_trade
from xcandle_sim.runtime.session import RunContext, create_run_context, run_session

__all__ = [
    "RunContext",
    "bars_from_records",
    "create_run_context",
    "run_session",
    "serialize_result",
    "serialize_summary",
    "serialize_trade",
]
