"""Time-of-day helpers for entry windows and time exits."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo


def local_time(timestamp: datetime, timezone: Optional[str]) -> datetime:
    if timezone is None or timestamp.tzinfo is None:
        return timestamp
    return timestamp.astimezone(ZoneInfo(timezone))


def time_of_day(timestamp: datetime, timezone: Optional[str]) -> time:
    return local_time(timestamp, timezone).time().replace(tzinfo=None)


def session_day_for(timestamp: datetime, timezone: Optional[str]) -> date:
    return local_time(timestamp, timezone).date()


def in_entry_window(timestamp: datetime, start: time, end: time, timezone: Optional[str]) -> bool:
    """Half-open window: ``start <= t < end``."""
    return start <= time_of_day(timestamp, timezone) < end


def reached_time_exit(
    timestamp: datetime,
    entry_day: date,
    exit_at: time,
    timezone: Optional[str],
) -> bool:
    if session_day_for(timestamp, timezone) > entry_day:
        return True
    return time_of_day(timestamp, timezone) >= exit_at
