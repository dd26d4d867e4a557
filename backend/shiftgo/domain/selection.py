"""Working set of vacation dates edited before submission."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, FrozenSet, Iterable, List, Optional, Set

from .calendar import CalendarDate, weekend_dates
from .models import VacationPolicy, utcnow
from .stats import VacationStats, get_stats
from .validator import (
    VALID,
    ValidationResult,
    validate,
    validate_selection_change,
)

logger = logging.getLogger(__name__)


class VacationSelection:
    """Mutable date set guarded by a policy.

    Every insertion is checked against the policy before it is applied;
    removals are always accepted. Instances are not thread-safe and are
    meant to be owned by a single controller.
    """

    def __init__(
        self,
        policy: VacationPolicy,
        target_year: Optional[int] = None,
        target_month: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.policy = policy
        self.target_year = target_year or policy.target_year
        self.target_month = target_month or policy.target_month
        self._clock = clock or utcnow
        self._dates: Set[CalendarDate] = set()

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, item: object) -> bool:
        return item in self._dates

    @property
    def dates(self) -> FrozenSet[CalendarDate]:
        return frozenset(self._dates)

    def date_strings(self) -> List[str]:
        return [d.isoformat() for d in sorted(self._dates)]

    def toggle(self, date: CalendarDate) -> ValidationResult:
        """Remove ``date`` if selected, otherwise add it when permitted."""
        if date in self._dates:
            self._dates.remove(date)
            logger.debug("Removed vacation date %s", date)
            return VALID
        result = validate_selection_change(
            self.policy, (date,), self._dates, date.year, date.month, self._clock()
        )
        if result.is_valid:
            self._dates.add(date)
            logger.debug("Added vacation date %s", date)
            return result
        logger.debug("Rejected vacation date %s: %s", date, result.message)
        return result

    def select_all(self, dates: Iterable[CalendarDate]) -> ValidationResult:
        """Add every date in ``dates`` or none of them."""
        new_dates = frozenset(dates)
        result = validate_selection_change(
            self.policy,
            new_dates,
            self._dates,
            self.target_year,
            self.target_month,
            self._clock(),
        )
        if result.is_valid:
            self._dates.update(new_dates)
            logger.debug("Added %d vacation dates", len(new_dates))
        else:
            logger.debug("Rejected bulk selection: %s", result.message)
        return result

    def select_weekends(self) -> ValidationResult:
        return self.select_all(weekend_dates(self.target_year, self.target_month))

    def clear(self) -> None:
        self._dates.clear()

    def validate(self) -> ValidationResult:
        return validate(
            self.policy,
            self._dates,
            self.target_year,
            self.target_month,
            self._clock(),
        )

    def stats(self) -> VacationStats:
        return get_stats(
            self.policy, self._dates, self.target_year, self.target_month
        )
