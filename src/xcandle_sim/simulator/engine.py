"""X-candle simulation engine."""

from __future__ import annotations

from typing import Optional, Sequence

from xcandle_sim.simulator.lifecycle import TradeLifecycle
from xcandle_sim.simulator.metrics import summarize
from xcandle_sim.simulator.models import SimulationResult
from xcandle_sim.simulator.validation import validate_bars
from xcandle_sim.strategy.classifier import classify_series
from xcandle_sim.strategy.models import Bar, XCandleParams


class XCandleSimulator:
    def __init__(self, params: Optional[XCandleParams] = None) -> None:
        self.params = params or XCandleParams()

    def run(self, bars: Sequence[Bar]) -> SimulationResult:
        bars = tuple(bars)
        validate_bars(bars, self.params.interval_minutes, self.params.allow_gaps)

        classified = classify_series(bars)
        outcome = TradeLifecycle(self.params).scan(classified)
        summary = summarize(bars, outcome.trades, outcome.unresolved)
        return SimulationResult(
            trades=outcome.trades,
            summary=summary,
            skipped=outcome.skipped,
            unresolved=outcome.unresolved,
        )


def run(bars: Sequence[Bar], params: Optional[XCandleParams] = None) -> SimulationResult:
    return XCandleSimulator(params).run(bars)
