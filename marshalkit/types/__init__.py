"""Ready-made record types."""

from .ranges import DateRange, DateTimeRange, Range, TimeRange

__all__ = ["DateRange", "DateTimeRange", "Range", "TimeRange"]
