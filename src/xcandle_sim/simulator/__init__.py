"""Simulation engine for the X-candle strategy."""

from xcandle_sim.simulator.engine import XCandleSimulator, run
from xcandle_sim.simulator.lifecycle import LifecycleOutcome, TradeLifecycle
from xcandle_sim.simulator.metrics import max_drawdown, r_multiple, signed_risk, summarize
from xcandle_sim.simulator.models import (
    ExitReason,
    SimulationResult,
    SkipCounts,
    Summary,
    Trade,
    TradeStatus,
)
from xcandle_sim.simulator.validation import InputContractViolation, infer_timeframe_minutes, validate_bars

__all__ = [
    "ExitReason",
    "InputContractViolation",
    "LifecycleOutcome",
    "SimulationResult",
    "SkipCounts",
    "Summary",
    "Trade",
    "TradeLifecycle",
    "TradeStatus",
    "XCandleSimulator",
    "infer_timeframe_minutes",
    "max_drawdown",
    "r_multiple",
    "run",
    "signed_risk",
    "summarize",
    "validate_bars",
]
