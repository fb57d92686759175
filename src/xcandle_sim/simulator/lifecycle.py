"""Single-position trade lifecycle over classified bars.

One trade at most is pending or open at any bar. A pending trade is created
on an X candle and enters on the next bar's open if that bar falls inside the
entry window. An open trade is checked on every later bar for, in order:

1. a strict break of the stop (exit at the stop level),
2. an X candle against the trade (exit at that bar's close),
3. the time exit (exit at that bar's open).

A bar that satisfies both 1 and 2 closes the trade as ``INVALID``. A pending
trade whose stop would sit on the profit side of the entry (a gap through the
lookback extreme) is discarded before it opens.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from xcandle_sim.simulator.metrics import r_multiple, signed_risk
from xcandle_sim.simulator.models import ExitReason, SkipCounts, Trade, TradeStatus
from xcandle_sim.strategy.models import ClassifiedBar, TradeDirection, XCandleParams
from xcandle_sim.strategy.session import in_entry_window, reached_time_exit, session_day_for


@dataclass(frozen=True)
class LifecycleOutcome:
    trades: tuple[Trade, ...]
    skipped: SkipCounts
    unresolved: Optional[Trade] = None


class TradeLifecycle:
    def __init__(self, params: XCandleParams) -> None:
        self.params = params

    @dataclass
    class _ActiveTrade:
        direction: TradeDirection
        x_candle_index: int
        x_candle_timestamp: datetime
        status: TradeStatus = TradeStatus.PENDING
        entry_index: int = -1
        entry_timestamp: Optional[datetime] = None
        entry_price: Decimal = Decimal("0")
        stop_price: Decimal = Decimal("0")
        entry_day: Optional[date] = None

    def scan(self, classified: Sequence[ClassifiedBar]) -> LifecycleOutcome:
        trades: list[Trade] = []
        outside_window = 0
        invalid_risk = 0
        active: Optional[TradeLifecycle._ActiveTrade] = None

        for cbar in classified:
            if active is not None and active.status == TradeStatus.PENDING:
                if not self._entry_allowed(cbar):
                    outside_window += 1
                elif self._open(active, cbar, classified):
                    continue
                else:
                    invalid_risk += 1
                # Discarded; this bar is scanned again below as a fresh candidate.
                active = None
            elif active is not None:
                closed = self._check_exit(active, cbar)
                if closed is not None:
                    trades.append(closed)
                    active = None
                continue

            if cbar.is_x_candle:
                direction = TradeDirection.from_candle(cbar.direction)
                if direction is not None:
                    active = TradeLifecycle._ActiveTrade(
                        direction=direction,
                        x_candle_index=cbar.index,
                        x_candle_timestamp=cbar.timestamp,
                    )

        end_of_data = 0
        unresolved = None
        if active is not None and active.status == TradeStatus.PENDING:
            end_of_data = 1
        elif active is not None:
            unresolved = self._freeze(active, TradeStatus.OPEN, ExitReason.UNRESOLVED)

        return LifecycleOutcome(
            trades=tuple(trades),
            skipped=SkipCounts(
                outside_window=outside_window,
                end_of_data=end_of_data,
                invalid_risk=invalid_risk,
            ),
            unresolved=unresolved,
        )

    def _entry_allowed(self, cbar: ClassifiedBar) -> bool:
        return in_entry_window(
            cbar.timestamp,
            self.params.entry_window_start,
            self.params.entry_window_end,
            self.params.timezone,
        )

    def _open(
        self,
        active: TradeLifecycle._ActiveTrade,
        cbar: ClassifiedBar,
        classified: Sequence[ClassifiedBar],
    ) -> bool:
        start = max(0, cbar.index - self.params.stop_lookback_bars)
        lookback = [item.bar for item in classified[start : cbar.index]]
        if active.direction == TradeDirection.LONG:
            stop_price = min(bar.low for bar in lookback)
        else:
            stop_price = max(bar.high for bar in lookback)
        if signed_risk(active.direction, cbar.bar.open, stop_price) < 0:
            return False
        active.stop_price = stop_price
        active.status = TradeStatus.OPEN
        active.entry_index = cbar.index
        active.entry_timestamp = cbar.timestamp
        active.entry_price = cbar.bar.open
        active.entry_day = session_day_for(cbar.timestamp, self.params.timezone)
        return True

    def _check_exit(self, active: TradeLifecycle._ActiveTrade, cbar: ClassifiedBar) -> Optional[Trade]:
        bar = cbar.bar
        if active.direction == TradeDirection.LONG:
            stop_hit = bar.low < active.stop_price
        else:
            stop_hit = bar.high > active.stop_price
        opposite_x = cbar.is_x_candle and active.direction.opposes(cbar.direction)

        if stop_hit and opposite_x:
            return self._close(active, cbar, bar.close, ExitReason.INVALID)
        if stop_hit:
            return self._close(active, cbar, active.stop_price, ExitReason.STOP_LOSS)
        if opposite_x:
            return self._close(active, cbar, bar.close, ExitReason.TAKE_PROFIT)
        if reached_time_exit(cbar.timestamp, active.entry_day, self.params.time_exit, self.params.timezone):
            return self._close(active, cbar, bar.open, ExitReason.TIME_EXIT)
        return None

    def _close(
        self,
        active: TradeLifecycle._ActiveTrade,
        cbar: ClassifiedBar,
        exit_price: Decimal,
        reason: ExitReason,
    ) -> Trade:
        r_value = None
        if reason != ExitReason.INVALID:
            r_value = r_multiple(active.direction, active.entry_price, active.stop_price, exit_price)
        return self._freeze(
            active,
            TradeStatus.CLOSED,
            reason,
            exit_index=cbar.index,
            exit_timestamp=cbar.timestamp,
            exit_price=exit_price,
            r_value=r_value,
        )

    @staticmethod
    def _freeze(
        active: TradeLifecycle._ActiveTrade,
        status: TradeStatus,
        reason: ExitReason,
        exit_index: Optional[int] = None,
        exit_timestamp: Optional[datetime] = None,
        exit_price: Optional[Decimal] = None,
        r_value: Optional[Decimal] = None,
    ) -> Trade:
        return Trade(
            direction=active.direction,
            x_candle_index=active.x_candle_index,
            x_candle_timestamp=active.x_candle_timestamp,
            entry_index=active.entry_index,
            entry_timestamp=active.entry_timestamp,
            entry_price=active.entry_price,
            stop_price=active.stop_price,
            status=status,
            exit_reason=reason,
            exit_index=exit_index,
            exit_timestamp=exit_timestamp,
            exit_price=exit_price,
            r_multiple=r_value,
        )
