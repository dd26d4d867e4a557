"""Admission checks for vacation date selections.

All functions are pure: they read a policy snapshot and a set of dates
and return a :class:`ValidationResult`. Limit violations are ordinary
results, never exceptions.

Checks run in a fixed order: deadline, monthly cap, weekly cap. When
several weeks exceed the weekly cap the lowest week number is reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import AbstractSet, ClassVar, Dict, Iterable, Optional

from .calendar import CalendarDate, bucket_by_week, in_month
from .models import VacationPolicy


class Severity(str, Enum):
    success = "success"
    warning = "warning"
    error = "error"


@dataclass(frozen=True)
class ValidationResult:
    kind: ClassVar[str] = "valid"
    template: ClassVar[Optional[str]] = None

    @property
    def is_valid(self) -> bool:
        return isinstance(self, Valid)

    @property
    def message(self) -> Optional[str]:
        if self.template is None:
            return None
        return self.template.format(**self.__dict__)

    @property
    def severity(self) -> Severity:
        return SEVERITY[self.kind]


@dataclass(frozen=True)
class Valid(ValidationResult):
    kind: ClassVar[str] = "valid"


@dataclass(frozen=True)
class MonthlyLimitExceeded(ValidationResult):
    kind: ClassVar[str] = "monthly_limit_exceeded"
    template: ClassVar[Optional[str]] = (
        "exceeds monthly vacation limit: currently {current} days, "
        "limit is {limit} days"
    )

    current: int
    limit: int


@dataclass(frozen=True)
class WeeklyLimitExceeded(ValidationResult):
    kind: ClassVar[str] = "weekly_limit_exceeded"
    template: ClassVar[Optional[str]] = (
        "week {week} exceeds vacation limit: currently {current} days, "
        "limit is {limit} days"
    )

    week: int
    current: int
    limit: int


@dataclass(frozen=True)
class DeadlineExpired(ValidationResult):
    kind: ClassVar[str] = "deadline_expired"
    template: ClassVar[Optional[str]] = "submission deadline has passed"


@dataclass(frozen=True)
class NoSelectionMade(ValidationResult):
    kind: ClassVar[str] = "no_selection_made"
    template: ClassVar[Optional[str]] = "no vacation dates selected"


VALID = Valid()

SEVERITY: Dict[str, Severity] = {
    Valid.kind: Severity.success,
    MonthlyLimitExceeded.kind: Severity.warning,
    WeeklyLimitExceeded.kind: Severity.warning,
    NoSelectionMade.kind: Severity.warning,
    DeadlineExpired.kind: Severity.error,
}


def validate_monthly_limit(
    policy: VacationPolicy,
    selected_dates: Iterable[CalendarDate],
    target_year: int,
    target_month: int,
) -> ValidationResult:
    if not policy.has_monthly_limit:
        return VALID
    count = len(in_month(selected_dates, target_year, target_month))
    if count > policy.max_days_per_month:
        return MonthlyLimitExceeded(current=count, limit=policy.max_days_per_month)
    return VALID


def validate_weekly_limit(
    policy: VacationPolicy,
    selected_dates: Iterable[CalendarDate],
    target_year: int,
    target_month: int,
) -> ValidationResult:
    if not policy.has_weekly_limit:
        return VALID
    buckets = bucket_by_week(in_month(selected_dates, target_year, target_month))
    for week in sorted(buckets):
        if buckets[week] > policy.max_days_per_week:
            return WeeklyLimitExceeded(
                week=week, current=buckets[week], limit=policy.max_days_per_week
            )
    return VALID


def validate(
    policy: VacationPolicy,
    selected_dates: Iterable[CalendarDate],
    target_year: int,
    target_month: int,
    now: Optional[datetime] = None,
) -> ValidationResult:
    """Run the deadline, monthly and weekly checks in that order."""
    if policy.is_expired(now):
        return DeadlineExpired()
    selected = frozenset(selected_dates)
    result = validate_monthly_limit(policy, selected, target_year, target_month)
    if not result.is_valid:
        return result
    return validate_weekly_limit(policy, selected, target_year, target_month)


def validate_selection_change(
    policy: VacationPolicy,
    new_dates: Iterable[CalendarDate],
    current_selection: AbstractSet[CalendarDate],
    target_year: int,
    target_month: int,
    now: Optional[datetime] = None,
) -> ValidationResult:
    """Validate the final set produced by adding ``new_dates`` at once.

    Bulk operations must be accepted or rejected as a whole, so the
    combined set is checked in a single pass.
    """
    proposed = frozenset(current_selection) | frozenset(new_dates)
    return validate(policy, proposed, target_year, target_month, now)


def validate_submission(
    policy: VacationPolicy,
    selected_dates: Iterable[CalendarDate],
    target_year: int,
    target_month: int,
    now: Optional[datetime] = None,
) -> ValidationResult:
    selected = frozenset(selected_dates)
    if not selected:
        return NoSelectionMade()
    return validate(policy, selected, target_year, target_month, now)


def can_select_date(
    policy: VacationPolicy,
    new_date: CalendarDate,
    current_selection: AbstractSet[CalendarDate],
    now: Optional[datetime] = None,
) -> bool:
    """Whether toggling ``new_date`` is permitted.

    Deselecting a date that is already part of the selection is always
    allowed.
    """
    if new_date in current_selection:
        return True
    result = validate_selection_change(
        policy, (new_date,), current_selection, new_date.year, new_date.month, now
    )
    return result.is_valid
