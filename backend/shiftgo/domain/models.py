"""Core vacation entities represented as immutable dataclasses.

Each model is independent of any persistence concerns. State changes
(publishing a policy, reviewing a request) return new instances rather
than mutating the receiver.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import MAXYEAR, MINYEAR, datetime, timedelta
from enum import Enum
from typing import FrozenSet, Iterable, Optional

import pytz

from ..core.config import settings
from ..core.errors import (
    InvalidDateError,
    InvalidPolicyError,
    InvalidTransitionError,
)
from .calendar import CalendarDate


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def utcnow() -> datetime:
    return datetime.now(pytz.UTC)


class LimitKind(str, Enum):
    """Display label for the kind of limit a policy carries."""

    weekly = "weekly"
    monthly = "monthly"
    flexible = "flexible"

    @classmethod
    def infer(cls, max_days_per_month: int, max_days_per_week: int) -> "LimitKind":
        if max_days_per_month > 0 and max_days_per_week > 0:
            return cls.flexible
        if max_days_per_week > 0:
            return cls.weekly
        return cls.monthly


class RequestStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"


class EmployeeVacationStatus(str, Enum):
    """Status of a month as seen by one employee."""

    not_submitted = "not_submitted"
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"
    expired = "expired"


@dataclass(frozen=True)
class VacationPolicy:
    """Limits in force for one target month.

    A limit of ``0`` means unlimited. ``limit_kind`` is descriptive only;
    validation applies whichever limits are non-zero.

    Example:
        >>> VacationPolicy(
        ...     target_year=2025,
        ...     target_month=9,
        ...     max_days_per_month=8,
        ...     max_days_per_week=2,
        ...     deadline=datetime(2025, 8, 25, tzinfo=pytz.UTC),
        ... )
    """

    target_year: int
    target_month: int
    deadline: datetime
    max_days_per_month: int = 0
    max_days_per_week: int = 0
    limit_kind: Optional[LimitKind] = None
    is_published: bool = False
    published_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        for name in (
            "target_year",
            "target_month",
            "max_days_per_month",
            "max_days_per_week",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidPolicyError(f"{name} must be an integer, got {value!r}")
        if not MINYEAR < self.target_year < MAXYEAR:
            raise InvalidPolicyError(f"target_year out of range: {self.target_year}")
        if not 1 <= self.target_month <= 12:
            raise InvalidPolicyError(
                f"target_month out of range: {self.target_month}"
            )
        if self.max_days_per_month < 0 or self.max_days_per_week < 0:
            raise InvalidPolicyError("vacation limits must not be negative")
        if not isinstance(self.deadline, datetime) or not _is_aware(self.deadline):
            raise InvalidPolicyError("deadline must be a timezone-aware datetime")
        if self.published_at is not None and not _is_aware(self.published_at):
            raise InvalidPolicyError("published_at must be timezone-aware")
        if self.limit_kind is None:
            kind = LimitKind.infer(self.max_days_per_month, self.max_days_per_week)
        else:
            try:
                kind = LimitKind(self.limit_kind)
            except ValueError:
                raise InvalidPolicyError(
                    f"unknown limit kind: {self.limit_kind!r}"
                ) from None
        object.__setattr__(self, "limit_kind", kind)

    @classmethod
    def default(
        cls, year: int, month: int, now: Optional[datetime] = None
    ) -> "VacationPolicy":
        """Unpublished policy with the configured monthly cap."""
        now = now or utcnow()
        return cls(
            target_year=year,
            target_month=month,
            max_days_per_month=settings.DEFAULT_MAX_DAYS_PER_MONTH,
            max_days_per_week=0,
            limit_kind=LimitKind.monthly,
            deadline=now + timedelta(days=settings.DEFAULT_DEADLINE_DAYS),
        )

    @property
    def has_monthly_limit(self) -> bool:
        return self.max_days_per_month > 0

    @property
    def has_weekly_limit(self) -> bool:
        return self.max_days_per_week > 0

    @property
    def has_no_limit(self) -> bool:
        return not (self.has_monthly_limit or self.has_weekly_limit)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) > self.deadline

    def publish(self, now: Optional[datetime] = None) -> "VacationPolicy":
        return replace(self, is_published=True, published_at=now or utcnow())

    def unpublish(self) -> "VacationPolicy":
        return replace(self, is_published=False, published_at=None)

    def limit_description(self) -> str:
        parts = []
        if self.has_monthly_limit:
            parts.append(f"{self.max_days_per_month} days per month")
        if self.has_weekly_limit:
            parts.append(f"{self.max_days_per_week} days per week")
        return " • ".join(parts) if parts else "no limit"


@dataclass(frozen=True)
class VacationRequest:
    """Vacation days submitted by an employee for one month.

    Example:
        >>> VacationRequest(
        ...     id="req_1",
        ...     company_id="co_1",
        ...     employee_id="emp_1",
        ...     target_year=2025,
        ...     target_month=9,
        ...     dates=frozenset({"2025-09-06", "2025-09-07"}),
        ...     submit_date=datetime(2025, 8, 20, tzinfo=pytz.UTC),
        ... )
    """

    id: str
    company_id: str
    employee_id: str
    target_year: int
    target_month: int
    dates: FrozenSet[str]
    submit_date: datetime
    status: RequestStatus = RequestStatus.pending
    employee_name: str = ""
    note: str = ""
    review_note: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    _parsed: FrozenSet[CalendarDate] = field(
        default=frozenset(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        parsed = frozenset(CalendarDate.parse(d) for d in self.dates)
        outside = sorted(
            d for d in parsed if d.year_month != (self.target_year, self.target_month)
        )
        if outside:
            raise InvalidDateError(
                f"dates outside {self.target_year:04d}-{self.target_month:02d}: "
                + ", ".join(str(d) for d in outside)
            )
        object.__setattr__(self, "dates", frozenset(self.dates))
        object.__setattr__(self, "status", RequestStatus(self.status))
        object.__setattr__(self, "_parsed", parsed)

    @classmethod
    def from_calendar_dates(
        cls, dates: Iterable[CalendarDate], **kwargs
    ) -> "VacationRequest":
        return cls(dates=frozenset(d.isoformat() for d in dates), **kwargs)

    @property
    def days_count(self) -> int:
        return len(self.dates)

    @property
    def can_be_modified(self) -> bool:
        return self.status is RequestStatus.pending

    @property
    def is_active(self) -> bool:
        return self.status is not RequestStatus.cancelled

    def calendar_dates(self) -> FrozenSet[CalendarDate]:
        return self._parsed

    def covers(self, year: int, month: int) -> bool:
        """True if any requested date falls in ``year``/``month``."""
        return any(d.year == year and d.month == month for d in self._parsed)

    def review(
        self,
        status: RequestStatus,
        reviewer_id: str,
        review_note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "VacationRequest":
        status = RequestStatus(status)
        if status not in (RequestStatus.approved, RequestStatus.rejected):
            raise InvalidTransitionError(
                f"review must approve or reject, got {status.value}"
            )
        if not self.can_be_modified:
            raise InvalidTransitionError(
                f"request {self.id} is {self.status.value}, not pending"
            )
        return replace(
            self,
            status=status,
            reviewed_by=reviewer_id,
            review_note=review_note,
            reviewed_at=now or utcnow(),
        )

    def cancel(self) -> "VacationRequest":
        if not self.can_be_modified:
            raise InvalidTransitionError(
                f"request {self.id} is {self.status.value}, not pending"
            )
        return replace(self, status=RequestStatus.cancelled)
