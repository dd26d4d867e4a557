"""Usage statistics for vacation progress indicators.

Uses the same month filter and week buckets as the validator so that a
selection shown as over the limit is exactly one the validator rejects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .calendar import CalendarDate, bucket_by_week, in_month
from .models import RequestStatus, VacationPolicy, VacationRequest

NEAR_LIMIT_THRESHOLD = 0.8


@dataclass(frozen=True)
class VacationStats:
    """Snapshot of how much of a policy a selection uses.

    Example:
        >>> VacationStats(
        ...     selected_days=4,
        ...     monthly_limit=8,
        ...     weekly_limit=None,
        ...     max_weekly_used=2,
        ...     monthly_usage_percentage=0.5,
        ...     weekly_usage_percentage=None,
        ... )
    """

    selected_days: int
    monthly_limit: Optional[int]
    weekly_limit: Optional[int]
    max_weekly_used: int
    monthly_usage_percentage: Optional[float]
    weekly_usage_percentage: Optional[float]

    @property
    def is_near_monthly_limit(self) -> bool:
        return (
            self.monthly_usage_percentage is not None
            and self.monthly_usage_percentage >= NEAR_LIMIT_THRESHOLD
        )

    @property
    def is_near_weekly_limit(self) -> bool:
        return (
            self.weekly_usage_percentage is not None
            and self.weekly_usage_percentage >= NEAR_LIMIT_THRESHOLD
        )

    @property
    def is_monthly_limit_exceeded(self) -> bool:
        return self.monthly_limit is not None and self.selected_days > self.monthly_limit

    @property
    def is_weekly_limit_exceeded(self) -> bool:
        return self.weekly_limit is not None and self.max_weekly_used > self.weekly_limit


def _ratio(used: int, limit: Optional[int]) -> Optional[float]:
    if not limit:
        return None
    return used / limit


def get_stats(
    policy: VacationPolicy,
    selected_dates: Iterable[CalendarDate],
    target_year: int,
    target_month: int,
) -> VacationStats:
    monthly = in_month(selected_dates, target_year, target_month)
    buckets = bucket_by_week(monthly)
    monthly_limit = policy.max_days_per_month if policy.has_monthly_limit else None
    weekly_limit = policy.max_days_per_week if policy.has_weekly_limit else None
    max_weekly_used = max(buckets.values(), default=0)
    return VacationStats(
        selected_days=len(monthly),
        monthly_limit=monthly_limit,
        weekly_limit=weekly_limit,
        max_weekly_used=max_weekly_used,
        monthly_usage_percentage=_ratio(len(monthly), monthly_limit),
        weekly_usage_percentage=_ratio(max_weekly_used, weekly_limit),
    )


@dataclass(frozen=True)
class MonthlyOverview:
    """Company-wide totals for one month."""

    total_employees: int
    total_days: int
    pending_requests: int


def monthly_overview(
    requests: Iterable[VacationRequest], year: int, month: int
) -> MonthlyOverview:
    """Aggregate requests touching ``year``/``month``.

    Cancelled requests are ignored; only dates inside the month count
    towards ``total_days``.
    """
    employees = set()
    total_days = 0
    pending = 0
    for request in requests:
        if not request.is_active:
            continue
        days = in_month(request.calendar_dates(), year, month)
        if not days:
            continue
        employees.add(request.employee_id)
        total_days += len(days)
        if request.status is RequestStatus.pending:
            pending += 1
    return MonthlyOverview(
        total_employees=len(employees),
        total_days=total_days,
        pending_requests=pending,
    )
