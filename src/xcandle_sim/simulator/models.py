"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional

from xcandle_sim.strategy.models import TradeDirection


class TradeStatus(str, Enum):
    PENDING = "pending"
    OPEN = "open"
    CLOSED = "closed"


class ExitReason(str, Enum):
    STOP_LOSS = "stop_loss"
    TAKE_PROFIT = "take_profit"
    TIME_EXIT = "time_exit"
    INVALID = "invalid"  # stop breach and opposite X on the same bar
    UNRESOLVED = "unresolved"  # still open when the bars ran out


@dataclass(frozen=True)
class Trade:
    direction: TradeDirection
    x_candle_index: int
    x_candle_timestamp: datetime
    entry_index: int
    entry_timestamp: datetime
    entry_price: Decimal
    stop_price: Decimal
    status: TradeStatus
    exit_reason: ExitReason
    exit_index: Optional[int] = None
    exit_timestamp: Optional[datetime] = None
    exit_price: Optional[Decimal] = None
    r_multiple: Optional[Decimal] = None

    @property
    def risk(self) -> Decimal:
        return abs(self.entry_price - self.stop_price)

    @property
    def is_zero_risk(self) -> bool:
        return self.risk == 0

    @property
    def hold_time(self) -> Optional[timedelta]:
        if self.exit_timestamp is None:
            return None
        return self.exit_timestamp - self.entry_timestamp

    @property
    def counts_toward_summary(self) -> bool:
        return self.r_multiple is not None


@dataclass(frozen=True)
class SkipCounts:
    outside_window: int = 0
    end_of_data: int = 0
    invalid_risk: int = 0  # entry gapped through the stop


@dataclass(frozen=True)
class Summary:
    candles: int
    timeframe_minutes: Optional[int]
    trades: int
    wins: int
    losses: int
    breakeven: int
    win_rate: Decimal
    total_r: Decimal
    avg_r: Decimal
    avg_win_r: Decimal
    avg_loss_r: Decimal
    profit_factor: Optional[Decimal]
    max_drawdown_r: Decimal
    max_consecutive_wins: int
    max_consecutive_losses: int
    tp_exits: int
    sl_exits: int
    time_exits: int
    invalid_trades: int
    zero_risk_trades: int
    unresolved_trades: int
    mean_hold_time: Optional[timedelta]
    median_hold_time: Optional[timedelta]
    avg_hold_minutes: Decimal
    start_time: Optional[datetime]
    end_time: Optional[datetime]


@dataclass(frozen=True)
class SimulationResult:
    trades: tuple[Trade, ...]
    summary: Summary
    skipped: SkipCounts = field(default_factory=SkipCounts)
    unresolved: Optional[Trade] = None
