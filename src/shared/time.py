from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Union

from src.core.errors import BadRequestError, UnsupportedTimeframeError
from src.shared.base import BaseSchema


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Timeframe(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    ALL = "all"
    CUSTOM = "custom"


class TimeWindow(BaseSchema):
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def previous(self) -> "TimeWindow":
        # Adjacent window of identical length ending where this one starts.
        return TimeWindow(start=self.start - self.duration, end=self.start)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def parse_event_datetime(value: Union[str, date, datetime, None]) -> datetime:
    """Parse a stored date or timestamp into an aware UTC datetime.

    Raises ValueError when the value is missing or cannot be parsed.
    """
    if value is None:
        raise ValueError("date value is missing")
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = value.strip()
        if not text:
            raise ValueError("date value is empty")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def resolve_time_window(
    timeframe: str,
    custom_start: Optional[str] = None,
    custom_end: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TimeWindow:
    if custom_start and custom_end:
        return _custom_window(custom_start, custom_end)

    try:
        selector = Timeframe(timeframe.strip().lower())
    except ValueError as exc:
        raise UnsupportedTimeframeError(timeframe) from exc

    current = now or datetime.now(timezone.utc)
    if selector is Timeframe.WEEK:
        return TimeWindow(start=current - timedelta(days=7), end=current)
    if selector is Timeframe.MONTH:
        return TimeWindow(start=_subtract_months(current, 1), end=current)
    if selector is Timeframe.QUARTER:
        return TimeWindow(start=_subtract_months(current, 3), end=current)
    if selector is Timeframe.YEAR:
        return TimeWindow(start=_subtract_months(current, 12), end=current)
    if selector is Timeframe.ALL:
        return TimeWindow(start=EPOCH, end=current)
    raise BadRequestError("Custom timeframe requires both custom_start and custom_end")


def _custom_window(custom_start: str, custom_end: str) -> TimeWindow:
    try:
        start = parse_event_datetime(custom_start)
        end = parse_event_datetime(custom_end)
    except ValueError as exc:
        raise BadRequestError("Unsupported custom date format") from exc
    if end < start:
        raise BadRequestError("custom_end must not be earlier than custom_start")
    return TimeWindow(start=start, end=end)


def _subtract_months(value: datetime, months: int) -> datetime:
    month_index = value.month - 1 - months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)
