"""Vacation domain: calendar dates, policies, validation and statistics."""

from .calendar import CalendarDate, bucket_by_week
from .models import LimitKind, RequestStatus, VacationPolicy, VacationRequest
from .selection import VacationSelection
from .stats import VacationStats, get_stats
from .validator import (
    DeadlineExpired,
    MonthlyLimitExceeded,
    NoSelectionMade,
    Valid,
    ValidationResult,
    WeeklyLimitExceeded,
    can_select_date,
    validate,
    validate_monthly_limit,
    validate_weekly_limit,
)

__all__ = [
    "CalendarDate",
    "DeadlineExpired",
    "LimitKind",
    "MonthlyLimitExceeded",
    "NoSelectionMade",
    "RequestStatus",
    "Valid",
    "ValidationResult",
    "VacationPolicy",
    "VacationRequest",
    "VacationSelection",
    "VacationStats",
    "WeeklyLimitExceeded",
    "bucket_by_week",
    "can_select_date",
    "get_stats",
    "validate",
    "validate_monthly_limit",
    "validate_weekly_limit",
]
