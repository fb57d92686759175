"""Bar and strategy parameter models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def to_price(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Invalid price: {value!r}")
    return Decimal(str(value))


class CandleDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    NONE = "none"


class TradeDirection(str, Enum):
    LONG = "long"
    SHORT = "short"

    @staticmethod
    def from_candle(direction: CandleDirection) -> Optional["TradeDirection"]:
        if direction == CandleDirection.UP:
            return TradeDirection.LONG
        if direction == CandleDirection.DOWN:
            return TradeDirection.SHORT
        return None

    def opposes(self, direction: CandleDirection) -> bool:
        if self == TradeDirection.LONG:
            return direction == CandleDirection.DOWN
        return direction == CandleDirection.UP


@dataclass(frozen=True)
class Bar:
    timestamp: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal

    def __post_init__(self) -> None:
        # Floats go through str() so 1.10 stays Decimal("1.1").
        for name in ("open", "high", "low", "close"):
            object.__setattr__(self, name, to_price(getattr(self, name)))

    @property
    def body_low(self) -> Decimal:
        return min(self.open, self.close)

    @property
    def body_high(self) -> Decimal:
        return max(self.open, self.close)


@dataclass(frozen=True)
class ClassifiedBar:
    bar: Bar
    index: int
    is_x_candle: bool
    direction: CandleDirection

    @property
    def timestamp(self) -> datetime:
        return self.bar.timestamp


@dataclass(frozen=True)
class XCandleParams:
    timezone: Optional[str] = None
    interval_minutes: int = 15
    allow_gaps: bool = False
    entry_window_start: time = time(0, 0)
    entry_window_end: time = time(11, 30)
    time_exit: time = time(14, 0)
    stop_lookback_bars: int = 3

    def __post_init__(self) -> None:
        if self.interval_minutes <= 0:
            raise ValueError(f"Invalid interval_minutes: {self.interval_minutes}")
        if self.stop_lookback_bars <= 0:
            raise ValueError(f"Invalid stop_lookback_bars: {self.stop_lookback_bars}")
        if self.entry_window_start >= self.entry_window_end:
            raise ValueError("entry_window_start must be before entry_window_end")
        if self.time_exit < self.entry_window_end:
            raise ValueError("time_exit must not be before entry_window_end")
        if self.timezone is not None:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(f"Invalid timezone: {self.timezone}") from exc

    @staticmethod
    def from_dict(data: dict) -> "XCandleParams":
        def parse_time(value: Any, default: time, key: str) -> time:
            if not value:
                return default
            if isinstance(value, time):
                return value
            try:
                hour, minute = str(value).split(":")
                return time(int(hour), int(minute))
            except ValueError as exc:
                raise ValueError(f"Invalid {key}: {value}") from exc

        timezone = data.get("timezone")
        return XCandleParams(
            timezone=str(timezone) if timezone else None,
            interval_minutes=int(data.get("interval_minutes", 15)),
            allow_gaps=bool(data.get("allow_gaps", False)),
            entry_window_start=parse_time(data.get("entry_window_start"), time(0, 0), "entry_window_start"),
            entry_window_end=parse_time(data.get("entry_window_end"), time(11, 30), "entry_window_end"),
            time_exit=parse_time(data.get("time_exit"), time(14, 0), "time_exit"),
            stop_lookback_bars=int(data.get("stop_lookback_bars", 3)),
        )
