"""JSON-ready payloads for simulation results and bar records."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from xcandle_sim.simulator.models import SimulationResult, Summary, Trade
from xcandle_sim.strategy.models import Bar


def _decimal(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def _time(value: Optional[datetime]) -> Optional[str]:
    return None if value is None else value.isoformat()


def _minutes(value: Optional[timedelta]) -> Optional[float]:
    return None if value is None else value.total_seconds() / 60.0


def serialize_trade(trade: Trade) -> dict[str, Any]:
    return {
        "direction": trade.direction.value,
        "x_candle_index": trade.x_candle_index,
        "x_candle_time": _time(trade.x_candle_timestamp),
        "entry_index": trade.entry_index,
        "entry_time": _time(trade.entry_timestamp),
        "entry_price": _decimal(trade.entry_price),
        "stop_price": _decimal(trade.stop_price),
        "risk": _decimal(trade.risk),
        "status": trade.status.value,
        "exit_index": trade.exit_index,
        "exit_time": _time(trade.exit_timestamp),
        "exit_price": _decimal(trade.exit_price),
        "exit_reason": trade.exit_reason.value,
        "r_multiple": _decimal(trade.r_multiple),
        "hold_minutes": _minutes(trade.hold_time),
    }


def serialize_summary(summary: Summary) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key, value in vars(summary).items():
        if isinstance(value, Decimal):
            payload[key] = str(value)
        elif isinstance(value, datetime):
            payload[key] = value.isoformat()
        elif isinstance(value, timedelta):
            payload[f"{key}_minutes"] = _minutes(value)
        elif value is None and key.endswith("hold_time"):
            payload[f"{key}_minutes"] = None
        else:
            payload[key] = value
    return payload


def serialize_result(result: SimulationResult) -> dict[str, Any]:
    return {
        "summary": serialize_summary(result.summary),
        "skipped": {
            "outside_window": result.skipped.outside_window,
            "end_of_data": result.skipped.end_of_data,
            "invalid_risk": result.skipped.invalid_risk,
        },
        "trades": [serialize_trade(trade) for trade in result.trades],
        "unresolved": None if result.unresolved is None else serialize_trade(result.unresolved),
    }


def bars_from_records(records: Iterable[dict[str, Any]]) -> list[Bar]:
    """Build bars from already-normalised ``{timestamp, open, high, low, close}`` records."""
    bars: list[Bar] = []
    for position, record in enumerate(records):
        try:
            bars.append(
                Bar(
                    timestamp=datetime.fromisoformat(str(record["timestamp"])),
                    open=Decimal(str(record["open"])),
                    high=Decimal(str(record["high"])),
                    low=Decimal(str(record["low"])),
                    close=Decimal(str(record["close"])),
                )
            )
        except (KeyError, ValueError, InvalidOperation) as exc:
            raise ValueError(f"Invalid bar record at position {position}: {record!r}") from exc
    return bars
