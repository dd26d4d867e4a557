"""Pydantic models used for request and response bodies.

These data transfer objects (DTOs) mirror the domain models but add
validation and serialization helpers for the API layer.
"""

from datetime import datetime
from typing import FrozenSet, List, Optional

import pytz
from pydantic import BaseModel, Field, field_validator

from ..core.config import settings
from .calendar import CalendarDate
from .models import (
    EmployeeVacationStatus,
    LimitKind,
    RequestStatus,
    VacationPolicy,
    VacationRequest,
)
from .stats import MonthlyOverview, VacationStats
from .validator import ValidationResult


def localize(value: datetime) -> datetime:
    """Attach the configured timezone to naive timestamps."""
    if value.tzinfo is None or value.utcoffset() is None:
        return pytz.timezone(settings.TZ).localize(value)
    return value


class PolicyIn(BaseModel):
    """Limits an administrator publishes for a month.

    Example:
        >>> PolicyIn(
        ...     max_days_per_month=8,
        ...     max_days_per_week=2,
        ...     deadline=datetime(2025, 8, 25, 23, 59),
        ... )
    """

    max_days_per_month: int = Field(0, ge=0)
    max_days_per_week: int = Field(0, ge=0)
    limit_kind: Optional[LimitKind] = None
    deadline: datetime

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "max_days_per_month": 8,
                "max_days_per_week": 2,
                "limit_kind": "flexible",
                "deadline": "2025-08-25T23:59:00+08:00",
            }
        }

    @field_validator("deadline")
    @classmethod
    def _aware_deadline(cls, v: datetime) -> datetime:
        return localize(v)

    def to_domain(self, year: int, month: int) -> VacationPolicy:
        return VacationPolicy(
            target_year=year,
            target_month=month,
            max_days_per_month=self.max_days_per_month,
            max_days_per_week=self.max_days_per_week,
            limit_kind=self.limit_kind,
            deadline=self.deadline,
        )


class PolicyOut(BaseModel):
    """Published or draft policy as returned to clients."""

    target_year: int
    target_month: int
    max_days_per_month: int
    max_days_per_week: int
    limit_kind: LimitKind
    deadline: datetime
    is_published: bool
    published_at: Optional[datetime] = None
    is_expired: bool
    limit_description: str

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "target_year": 2025,
                "target_month": 9,
                "max_days_per_month": 8,
                "max_days_per_week": 2,
                "limit_kind": "flexible",
                "deadline": "2025-08-25T23:59:00+08:00",
                "is_published": True,
                "published_at": "2025-08-18T09:00:00+08:00",
                "is_expired": False,
                "limit_description": "8 days per month • 2 days per week",
            }
        }

    @classmethod
    def from_domain(
        cls, policy: VacationPolicy, now: Optional[datetime] = None
    ) -> "PolicyOut":
        return cls(
            target_year=policy.target_year,
            target_month=policy.target_month,
            max_days_per_month=policy.max_days_per_month,
            max_days_per_week=policy.max_days_per_week,
            limit_kind=policy.limit_kind,
            deadline=policy.deadline,
            is_published=policy.is_published,
            published_at=policy.published_at,
            is_expired=policy.is_expired(now),
            limit_description=policy.limit_description(),
        )


class DatesIn(BaseModel):
    """A set of ``YYYY-MM-DD`` dates.

    Example:
        >>> DatesIn(dates=["2025-09-06", "2025-09-07"])
    """

    dates: List[str] = Field(default_factory=list)

    class Config:
        frozen = True
        json_schema_extra = {"example": {"dates": ["2025-09-06", "2025-09-07"]}}

    @field_validator("dates")
    @classmethod
    def _parseable(cls, v: List[str]) -> List[str]:
        for item in v:
            CalendarDate.parse(item)
        return v

    def calendar_dates(self) -> FrozenSet[CalendarDate]:
        return frozenset(CalendarDate.parse(d) for d in self.dates)


class ValidationOut(BaseModel):
    """Outcome of validating a selection."""

    valid: bool
    kind: str
    severity: str
    message: Optional[str] = None
    current: Optional[int] = None
    limit: Optional[int] = None
    week: Optional[int] = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "valid": False,
                "kind": "weekly_limit_exceeded",
                "severity": "warning",
                "message": (
                    "week 36 exceeds vacation limit: currently 3 days, "
                    "limit is 2 days"
                ),
                "current": 3,
                "limit": 2,
                "week": 36,
            }
        }

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationOut":
        return cls(
            valid=result.is_valid,
            kind=result.kind,
            severity=result.severity.value,
            message=result.message,
            current=getattr(result, "current", None),
            limit=getattr(result, "limit", None),
            week=getattr(result, "week", None),
        )


class StatsOut(BaseModel):
    """Usage figures for progress indicators."""

    selected_days: int
    monthly_limit: Optional[int] = None
    weekly_limit: Optional[int] = None
    max_weekly_used: int
    monthly_usage_percentage: Optional[float] = None
    weekly_usage_percentage: Optional[float] = None
    is_near_monthly_limit: bool
    is_near_weekly_limit: bool

    class Config:
        frozen = True

    @classmethod
    def from_stats(cls, stats: VacationStats) -> "StatsOut":
        return cls(
            selected_days=stats.selected_days,
            monthly_limit=stats.monthly_limit,
            weekly_limit=stats.weekly_limit,
            max_weekly_used=stats.max_weekly_used,
            monthly_usage_percentage=stats.monthly_usage_percentage,
            weekly_usage_percentage=stats.weekly_usage_percentage,
            is_near_monthly_limit=stats.is_near_monthly_limit,
            is_near_weekly_limit=stats.is_near_weekly_limit,
        )


class RequestIn(DatesIn):
    """Vacation request submitted by an employee.

    Example:
        >>> RequestIn(
        ...     employee_id="emp_1",
        ...     employee_name="Alice",
        ...     dates=["2025-09-06"],
        ... )
    """

    employee_id: str = Field(..., min_length=1)
    employee_name: str = ""
    note: str = ""

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "employee_id": "emp_1",
                "employee_name": "Alice",
                "dates": ["2025-09-06", "2025-09-07"],
                "note": "Family trip",
            }
        }


class RequestOut(BaseModel):
    """Stored vacation request."""

    id: str
    company_id: str
    employee_id: str
    employee_name: str
    target_year: int
    target_month: int
    dates: List[str]
    submit_date: datetime
    status: RequestStatus
    note: str
    review_note: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    days_count: int

    class Config:
        frozen = True

    @classmethod
    def from_domain(cls, request: VacationRequest) -> "RequestOut":
        return cls(
            id=request.id,
            company_id=request.company_id,
            employee_id=request.employee_id,
            employee_name=request.employee_name,
            target_year=request.target_year,
            target_month=request.target_month,
            dates=sorted(request.dates),
            submit_date=request.submit_date,
            status=request.status,
            note=request.note,
            review_note=request.review_note,
            reviewed_by=request.reviewed_by,
            reviewed_at=request.reviewed_at,
            days_count=request.days_count,
        )


class ReviewIn(BaseModel):
    """Reviewer decision on a pending request."""

    status: RequestStatus
    reviewer_id: str = Field(..., min_length=1)
    review_note: Optional[str] = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "status": "approved",
                "reviewer_id": "boss_1",
                "review_note": "Enjoy",
            }
        }


class EmployeeStatusOut(BaseModel):
    employee_id: str
    status: EmployeeVacationStatus


class OverviewOut(BaseModel):
    """Company-wide vacation totals for a month."""

    total_employees: int
    total_days: int
    pending_requests: int

    @classmethod
    def from_overview(cls, overview: MonthlyOverview) -> "OverviewOut":
        return cls(
            total_employees=overview.total_employees,
            total_days=overview.total_days,
            pending_requests=overview.pending_requests,
        )
