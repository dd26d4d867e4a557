"""Calendar date value type and week bucketing.

Week numbering follows the Gregorian calendar with weeks starting on
Sunday and week 1 being the week that contains January 1st. The last
days of December that share a week with the following January 1st are
therefore numbered week 1.

Example:
    >>> CalendarDate(2025, 9, 1).week_of_year
    36
    >>> CalendarDate.parse("2025-12-30").week_of_year
    1
"""

from __future__ import annotations

import calendar as _calendar
import re
from collections import Counter
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Dict, FrozenSet, Iterable, Iterator, List, Tuple

from ..core.errors import InvalidDateError

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

SUNDAY = 0
SATURDAY = 6


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A (year, month, day) triple with value semantics.

    Example:
        >>> CalendarDate(year=2025, month=9, day=6).is_weekend
        True
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        for name in ("year", "month", "day"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidDateError(f"{name} must be an integer, got {value!r}")
        if not MINYEAR < self.year < MAXYEAR:
            raise InvalidDateError(f"year out of range: {self.year}")
        if not 1 <= self.month <= 12:
            raise InvalidDateError(f"month out of range: {self.month}")
        last_day = _calendar.monthrange(self.year, self.month)[1]
        if not 1 <= self.day <= last_day:
            raise InvalidDateError(
                f"day out of range for {self.year:04d}-{self.month:02d}: {self.day}"
            )

    @classmethod
    def parse(cls, value: str) -> "CalendarDate":
        """Parse a zero-padded ``YYYY-MM-DD`` string."""
        if not isinstance(value, str):
            raise InvalidDateError(f"expected a YYYY-MM-DD string, got {value!r}")
        match = _DATE_RE.match(value)
        if match is None:
            raise InvalidDateError(f"malformed date string: {value!r}")
        year, month, day = (int(part) for part in match.groups())
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()

    @property
    def year_month(self) -> Tuple[int, int]:
        return self.year, self.month

    @property
    def day_of_week(self) -> int:
        """0 for Sunday through 6 for Saturday."""
        return (self.to_date().weekday() + 1) % 7

    @property
    def is_weekend(self) -> bool:
        return self.day_of_week in (SUNDAY, SATURDAY)

    @property
    def week_of_year(self) -> int:
        return week_of_year(self.to_date())

    def add_days(self, days: int) -> "CalendarDate":
        return CalendarDate.from_date(self.to_date() + timedelta(days=days))

    def days_until(self, other: "CalendarDate") -> int:
        """Signed number of days from this date to ``other``."""
        return (other.to_date() - self.to_date()).days


def _week_start(value: date) -> date:
    return value - timedelta(days=(value.weekday() + 1) % 7)


def week_of_year(value: date) -> int:
    start = _week_start(value)
    end = start + timedelta(days=6)
    if end.year > value.year:
        return 1
    first_week_start = _week_start(date(value.year, 1, 1))
    return (start - first_week_start).days // 7 + 1


def in_month(
    dates: Iterable[CalendarDate], year: int, month: int
) -> FrozenSet[CalendarDate]:
    """Return the subset of ``dates`` falling in ``year``/``month``."""
    return frozenset(d for d in dates if d.year == year and d.month == month)


def bucket_by_week(dates: Iterable[CalendarDate]) -> Dict[int, int]:
    """Count dates per week-of-year number."""
    return dict(Counter(d.week_of_year for d in set(dates)))


def month_dates(year: int, month: int) -> Iterator[CalendarDate]:
    last_day = _calendar.monthrange(year, month)[1]
    for day in range(1, last_day + 1):
        yield CalendarDate(year, month, day)


def weekend_dates(year: int, month: int) -> List[CalendarDate]:
    return [d for d in month_dates(year, month) if d.is_weekend]
