"""R-multiple and summary statistics for closed trades."""

from __future__ import annotations

import statistics
from datetime import timedelta
from decimal import Decimal
from typing import Optional, Sequence

from xcandle_sim.simulator.models import ExitReason, Summary, Trade
from xcandle_sim.simulator.validation import infer_timeframe_minutes
from xcandle_sim.strategy.models import Bar, TradeDirection

ZERO = Decimal("0")


def signed_risk(direction: TradeDirection, entry_price: Decimal, stop_price: Decimal) -> Decimal:
    """Distance from entry to stop, negative when the stop is on the profit side."""
    if direction == TradeDirection.LONG:
        return entry_price - stop_price
    return stop_price - entry_price


def r_multiple(
    direction: TradeDirection,
    entry_price: Decimal,
    stop_price: Decimal,
    exit_price: Decimal,
) -> Optional[Decimal]:
    """Reward over initial risk; ``None`` unless the stop sits strictly behind the entry."""
    risk = signed_risk(direction, entry_price, stop_price)
    if risk <= 0:
        return None
    if direction == TradeDirection.LONG:
        reward = exit_price - entry_price
    else:
        reward = entry_price - exit_price
    return reward / risk


def max_drawdown(r_values: Sequence[Decimal]) -> Decimal:
    """Largest fall of cumulative R from a running peak that starts at zero."""
    equity = ZERO
    peak = ZERO
    worst = ZERO
    for value in r_values:
        equity += value
        peak = max(peak, equity)
        worst = max(worst, peak - equity)
    return worst


def _average(total: Decimal, count: int) -> Decimal:
    if count == 0:
        return ZERO
    return total / count


def summarize(
    bars: Sequence[Bar],
    trades: Sequence[Trade],
    unresolved: Optional[Trade] = None,
) -> Summary:
    counted = [trade for trade in trades if trade.counts_toward_summary]
    r_values = [trade.r_multiple for trade in counted]

    wins = losses = breakeven = 0
    sum_wins = sum_losses = ZERO
    streak_wins = streak_losses = 0
    max_streak_wins = max_streak_losses = 0
    for value in r_values:
        if value > 0:
            wins += 1
            sum_wins += value
            streak_wins += 1
            streak_losses = 0
        elif value < 0:
            losses += 1
            sum_losses += value
            streak_losses += 1
            streak_wins = 0
        else:
            breakeven += 1
            streak_wins = streak_losses = 0
        max_streak_wins = max(max_streak_wins, streak_wins)
        max_streak_losses = max(max_streak_losses, streak_losses)

    total_r = sum(r_values, ZERO)
    count = len(counted)
    profit_factor = sum_wins / abs(sum_losses) if sum_losses != 0 else None

    hold_times = [trade.hold_time for trade in counted]
    mean_hold: Optional[timedelta] = None
    median_hold: Optional[timedelta] = None
    avg_hold_minutes = ZERO
    if hold_times:
        mean_hold = sum(hold_times, timedelta(0)) / len(hold_times)
        median_hold = statistics.median(hold_times)
        total_minutes = sum((Decimal(int(hold.total_seconds())) for hold in hold_times), ZERO) / 60
        avg_hold_minutes = total_minutes / len(hold_times)

    exits = [trade.exit_reason for trade in counted]
    return Summary(
        candles=len(bars),
        timeframe_minutes=infer_timeframe_minutes(bars),
        trades=count,
        wins=wins,
        losses=losses,
        breakeven=breakeven,
        win_rate=_average(Decimal(wins), count),
        total_r=total_r,
        avg_r=_average(total_r, count),
        avg_win_r=_average(sum_wins, wins),
        avg_loss_r=_average(sum_losses, losses),
        profit_factor=profit_factor,
        max_drawdown_r=max_drawdown(r_values),
        max_consecutive_wins=max_streak_wins,
        max_consecutive_losses=max_streak_losses,
        tp_exits=exits.count(ExitReason.TAKE_PROFIT),
        sl_exits=exits.count(ExitReason.STOP_LOSS),
        time_exits=exits.count(ExitReason.TIME_EXIT),
        invalid_trades=sum(1 for trade in trades if trade.exit_reason == ExitReason.INVALID),
        zero_risk_trades=sum(
            1 for trade in trades if trade.is_zero_risk and trade.exit_reason != ExitReason.INVALID
        ),
        unresolved_trades=0 if unresolved is None else 1,
        mean_hold_time=mean_hold,
        median_hold_time=median_hold,
        avg_hold_minutes=avg_hold_minutes,
        start_time=bars[0].timestamp if bars else None,
        end_time=bars[-1].timestamp if bars else None,
    )
