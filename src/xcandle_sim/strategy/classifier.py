"""X-candle classification of consecutive bars."""

from __future__ import annotations

from typing import Sequence

from xcandle_sim.strategy.models import Bar, CandleDirection, ClassifiedBar


def candle_direction(bar: Bar) -> CandleDirection:
    if bar.close > bar.open:
        return CandleDirection.UP
    if bar.close < bar.open:
        return CandleDirection.DOWN
    return CandleDirection.NONE


def is_x_candle(previous: Bar, current: Bar) -> bool:
    """True when the current body strictly engulfs the previous body on both ends."""
    return current.body_low < previous.body_low and current.body_high > previous.body_high


def classify(previous: Bar, current: Bar, index: int) -> ClassifiedBar:
    return ClassifiedBar(
        bar=current,
        index=index,
        is_x_candle=is_x_candle(previous, current),
        direction=candle_direction(current),
    )


def classify_series(bars: Sequence[Bar]) -> tuple[ClassifiedBar, ...]:
    if not bars:
        return ()
    first = ClassifiedBar(bar=bars[0], index=0, is_x_candle=False, direction=candle_direction(bars[0]))
    classified = [first]
    for index in range(1, len(bars)):
        classified.append(classify(bars[index - 1], bars[index], index))
    return tuple(classified)
