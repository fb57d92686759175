from datetime import datetime, timedelta
from decimal import Decimal

from xcandle_sim.simulator import (
    ExitReason,
    Trade,
    TradeStatus,
    max_drawdown,
    r_multiple,
    signed_risk,
    summarize,
)
from xcandle_sim.strategy import Bar, TradeDirection

T0 = datetime(2024, 6, 3, 9, 0)


def _trade(r, reason=ExitReason.TAKE_PROFIT, hold_minutes=60, stop="1.00", offset=0):
    entry = T0 + timedelta(hours=offset)
    return Trade(
        direction=TradeDirection.LONG,
        x_candle_index=offset * 10,
        x_candle_timestamp=entry - timedelta(minutes=15),
        entry_index=offset * 10 + 1,
        entry_timestamp=entry,
        entry_price=Decimal("1.10"),
        stop_price=Decimal(stop),
        status=TradeStatus.CLOSED,
        exit_reason=reason,
        exit_index=offset * 10 + 2,
        exit_timestamp=entry + timedelta(minutes=hold_minutes),
        exit_price=Decimal("1.10"),
        r_multiple=None if r is None else Decimal(r),
    )


def _bars(count):
    return [
        Bar(timestamp=T0 + timedelta(minutes=15 * index), open=1, high=1, low=1, close=1)
        for index in range(count)
    ]


def test_r_multiple_long_and_short():
    assert r_multiple(TradeDirection.LONG, Decimal("1.10"), Decimal("1.08"), Decimal("1.14")) == Decimal("2")
    assert r_multiple(TradeDirection.SHORT, Decimal("1.10"), Decimal("1.12"), Decimal("1.11")) == Decimal("-0.5")


def test_r_multiple_zero_risk_is_undefined():
    assert r_multiple(TradeDirection.LONG, Decimal("1.10"), Decimal("1.10"), Decimal("1.20")) is None


def test_stop_on_profit_side_has_negative_risk():
    assert signed_risk(TradeDirection.LONG, Decimal("1.05"), Decimal("1.07")) == Decimal("-0.02")
    assert signed_risk(TradeDirection.SHORT, Decimal("1.16"), Decimal("1.14")) == Decimal("-0.02")
    assert r_multiple(TradeDirection.LONG, Decimal("1.05"), Decimal("1.07"), Decimal("1.07")) is None


def test_max_drawdown_from_cumulative_r():
    values = [Decimal(v) for v in ("1", "-1", "-1", "2", "-3")]
    # Cumulative 1, 0, -1, 1, -2 against a peak of 1.
    assert max_drawdown(values) == Decimal("3")
    assert max_drawdown([]) == Decimal("0")


def test_drawdown_counts_losses_before_any_gain():
    assert max_drawdown([Decimal("-1"), Decimal("-0.5")]) == Decimal("1.5")


def test_summary_counts_and_ratios():
    trades = [
        _trade("2", offset=0),
        _trade("-1", ExitReason.STOP_LOSS, offset=1),
        _trade("0", ExitReason.TIME_EXIT, offset=2),
        _trade("-1", ExitReason.STOP_LOSS, offset=3),
        _trade(None, ExitReason.INVALID, offset=4),
    ]
    summary = summarize(_bars(8), trades)

    assert summary.trades == 4
    assert summary.wins == 1
    assert summary.losses == 2
    assert summary.breakeven == 1
    assert summary.win_rate == Decimal("0.25")
    assert summary.total_r == Decimal("0")
    assert summary.avg_r == Decimal("0")
    assert summary.avg_win_r == Decimal("2")
    assert summary.avg_loss_r == Decimal("-1")
    assert summary.profit_factor == Decimal("1")
    assert summary.max_drawdown_r == Decimal("2")
    assert summary.max_consecutive_wins == 1
    assert summary.max_consecutive_losses == 1
    assert summary.tp_exits == 1
    assert summary.sl_exits == 2
    assert summary.time_exits == 1
    assert summary.invalid_trades == 1
    assert summary.candles == 8
    assert summary.timeframe_minutes == 15
    assert summary.start_time == T0
    assert summary.end_time == T0 + timedelta(minutes=105)


def test_summary_hold_time_mean_and_median():
    trades = [
        _trade("1", hold_minutes=30, offset=0),
        _trade("1", hold_minutes=60, offset=1),
        _trade("1", hold_minutes=150, offset=2),
    ]
    summary = summarize(_bars(2), trades)

    assert summary.mean_hold_time == timedelta(minutes=80)
    assert summary.median_hold_time == timedelta(minutes=60)
    assert summary.avg_hold_minutes == Decimal("80")
    assert summary.profit_factor is None
    assert summary.max_consecutive_wins == 3


def test_zero_risk_trade_is_counted_separately():
    trades = [_trade(None, ExitReason.TIME_EXIT, stop="1.10")]
    summary = summarize(_bars(2), trades)

    assert summary.zero_risk_trades == 1
    assert summary.invalid_trades == 0
    assert summary.trades == 0
    assert summary.mean_hold_time is None
    assert summary.median_hold_time is None


def test_empty_summary():
    summary = summarize(_bars(1), [])
    assert summary.trades == 0
    assert summary.win_rate == Decimal("0")
    assert summary.timeframe_minutes is None
    assert summary.unresolved_trades == 0
