"""Input contract checks for bar sequences."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional, Sequence

from xcandle_sim.strategy.models import Bar


class InputContractViolation(ValueError):
    """Raised when a bar sequence breaks the ingestion contract.

    The whole run is rejected; no partial result is produced.
    """

    def __init__(self, reason: str, index: Optional[int] = None) -> None:
        self.reason = reason
        self.index = index
        message = reason if index is None else f"bar {index}: {reason}"
        super().__init__(message)


def _check_bar(bar: Bar, index: int) -> None:
    prices = (bar.open, bar.high, bar.low, bar.close)
    if not all(price.is_finite() for price in prices):
        raise InputContractViolation("prices must be finite", index)
    if bar.high < bar.low:
        raise InputContractViolation(f"high {bar.high} below low {bar.low}", index)
    if bar.high < bar.body_high or bar.low > bar.body_low:
        raise InputContractViolation("high/low do not bound open/close", index)


def validate_bars(bars: Sequence[Bar], interval_minutes: int, allow_gaps: bool = False) -> None:
    if not bars:
        raise InputContractViolation("bar sequence is empty")

    interval = timedelta(minutes=interval_minutes)
    for index, bar in enumerate(bars):
        _check_bar(bar, index)
        if index == 0:
            continue
        try:
            delta = bar.timestamp - bars[index - 1].timestamp
        except TypeError as exc:
            raise InputContractViolation("timestamps mix naive and timezone-aware values", index) from exc
        if delta <= timedelta(0):
            raise InputContractViolation("timestamps must be strictly ascending", index)
        if allow_gaps:
            if delta % interval:
                raise InputContractViolation(
                    f"interval {delta} is not a multiple of {interval_minutes} minutes", index
                )
        elif delta != interval:
            raise InputContractViolation(f"interval {delta} differs from {interval_minutes} minutes", index)


def infer_timeframe_minutes(bars: Sequence[Bar]) -> Optional[int]:
    """Median of the positive bar-to-bar deltas, in whole minutes."""
    deltas = []
    for index in range(1, len(bars)):
        minutes = int((bars[index].timestamp - bars[index - 1].timestamp).total_seconds() // 60)
        if minutes > 0:
            deltas.append(minutes)
    if not deltas:
        return None
    deltas.sort()
    return deltas[len(deltas) // 2]
