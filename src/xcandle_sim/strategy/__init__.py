"""X-candle strategy primitives."""

from xcandle_sim.strategy.classifier import candle_direction, classify, classify_series, is_x_candle
from xcandle_sim.strategy.models import Bar, CandleDirection, ClassifiedBar, TradeDirection, XCandleParams
from xcandle_sim.strategy.session import in_entry_window, reached_time_exit, session_day_for, time_of_day

__all__ = [
    "Bar",
    "CandleDirection",
    "ClassifiedBar",
    "TradeDirection",
    "XCandleParams",
    "candle_direction",
    "classify",
    "classify_series",
    "in_entry_window",
    "is_x_candle",
    "reached_time_exit",
    "session_day_for",
    "time_of_day",
]
