"""Closed date, datetime and time ranges.

Ranges are ordinary records with `start` and `finish` fields, so they
parse, dump and nest like any other record. Their string form is
`start...finish` using the default patterns from the engine settings.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

import pandas as pd

from ..config import get_settings
from ..engine import default_pattern, parse_record
from ..schema import Schema

# Units accepted by length(), from coarsest to finest
LENGTH_UNITS = ("year", "month", "day", "hour", "min", "sec", "us")

# DateOffset keywords for the units accepted by steps()
STEP_OFFSETS = {
    "year": "years",
    "month": "months",
    "week": "weeks",
    "day": "days",
    "hour": "hours",
    "min": "minutes",
    "sec": "seconds",
}

# Any fixed day works for time ranges; it must lie within pandas timestamp bounds
TIME_ANCHOR = date(2000, 1, 1)

SQL_PATTERNS = {
    datetime: "%Y-%m-%d %H:%M:%S",
    date: "%Y-%m-%d",
    time: "%H:%M:%S",
}


class Range(Schema):
    """Base of closed ranges; subclasses declare `start` and `finish`."""

    value_type: type = datetime

    def __post_init__(self):
        if self.finish < self.start:
            raise ValueError(
                f"Finish of the range cannot be earlier than start: {self.finish} < {self.start}"
            )

    @classmethod
    def separator(cls) -> str:
        return get_settings().range_separator

    @classmethod
    def from_string(cls, text: str, separator: Optional[str] = None):
        """Parse `start...finish` using the default pattern of the value type.

        Raises:
            ParsingError: If either bound does not match the pattern
            ValueError: If the text holds no separator
        """
        separator = separator or cls.separator()
        start, found, finish = text.partition(separator)
        if not found:
            raise ValueError(f"Range '{text}' has no separator '{separator}'")
        return parse_record(cls, {"start": start.strip(), "finish": finish.strip()})

    def _as_datetimes(self) -> tuple[datetime, datetime]:
        if isinstance(self.start, datetime):
            return self.start, self.finish
        if isinstance(self.start, date):
            return datetime.combine(self.start, time()), datetime.combine(self.finish, time())
        return datetime.combine(TIME_ANCHOR, self.start), datetime.combine(TIME_ANCHOR, self.finish)

    def _from_datetime(self, value: datetime) -> Any:
        if self.value_type is datetime:
            return value
        if self.value_type is date:
            return value.date()
        return value.time()

    @property
    def interval(self) -> timedelta:
        start, finish = self._as_datetimes()
        return finish - start

    def length(self, unit: str = "day") -> int:
        """Whole number of `unit`s between start and finish.

        Args:
            unit: One of year, month, day, hour, min, sec, us

        Raises:
            ValueError: If the unit is unknown
        """
        if unit not in LENGTH_UNITS:
            raise ValueError(f"Invalid unit '{unit}'. Expected one of: {', '.join(LENGTH_UNITS)}")
        start, finish = self._as_datetimes()

        if unit in ("year", "month"):
            months = (finish.year - start.year) * 12 + finish.month - start.month
            if (finish.day, finish.time()) < (start.day, start.time()):
                months -= 1
            return months // 12 if unit == "year" else months

        delta = finish - start
        if unit == "day":
            return delta.days
        if unit == "hour":
            return delta.days * 24 + delta.seconds // 3600
        if unit == "min":
            return delta.days * 1440 + delta.seconds // 60
        if unit == "sec":
            return delta.days * 86400 + delta.seconds
        return delta // timedelta(microseconds=1)

    def steps(self, step: int = 1, unit: str = "day") -> list:
        """Values from start to finish (inclusive) every `step` `unit`s.

        Raises:
            ValueError: If step is not positive or the unit is unknown
        """
        if step <= 0:
            raise ValueError("Step cannot be less than or equal to 0")
        if unit not in STEP_OFFSETS:
            raise ValueError(f"Invalid unit '{unit}'. Expected one of: {', '.join(STEP_OFFSETS)}")
        start, finish = self._as_datetimes()
        offset = pd.DateOffset(**{STEP_OFFSETS[unit]: step})
        index = pd.date_range(start=start, end=finish, freq=offset)
        return [self._from_datetime(stamp.to_pydatetime()) for stamp in index]

    def to_sql(self, pattern: Optional[str] = None) -> str:
        """Render as `start AND finish` for a SQL BETWEEN clause."""
        pattern = pattern or SQL_PATTERNS[self.value_type]
        return f"{self.start.strftime(pattern)} AND {self.finish.strftime(pattern)}"

    def __contains__(self, value: Any) -> bool:
        return self.start <= value <= self.finish

    def __str__(self) -> str:
        pattern = default_pattern(self.value_type, get_settings())
        return f"{self.start.strftime(pattern)}{self.separator()}{self.finish.strftime(pattern)}"


@dataclass(frozen=True)
class DateTimeRange(Range):
    """Range of datetimes."""

    start: datetime
    finish: datetime

    value_type = datetime


@dataclass(frozen=True)
class DateRange(Range):
    """Range of calendar dates."""

    start: date
    finish: date

    value_type = date


@dataclass(frozen=True)
class TimeRange(Range):
    """Range of times within one day."""

    start: time
    finish: time

    value_type = time
