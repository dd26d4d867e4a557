"""Tests for the vacation workflow service."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))
from shiftgo.core.errors import (  # noqa: E402
    DuplicateRequestError,
    InvalidDateError,
    InvalidTransitionError,
    PolicyNotFoundError,
    PolicyNotPublishedError,
    RequestNotFoundError,
    VacationRejectedError,
)
from shiftgo.domain.calendar import CalendarDate  # noqa: E402
from shiftgo.domain.models import (  # noqa: E402
    EmployeeVacationStatus,
    RequestStatus,
    VacationPolicy,
)
from shiftgo.domain.store import InMemoryVacationStore  # noqa: E402
from shiftgo.domain.validator import (  # noqa: E402
    DeadlineExpired,
    MonthlyLimitExceeded,
    NoSelectionMade,
    WeeklyLimitExceeded,
)
from shiftgo.services.vacation import VacationService  # noqa: E402

NOW = datetime(2025, 8, 18, 9, 0, tzinfo=timezone.utc)
DEADLINE = datetime(2025, 8, 25, 23, 59, tzinfo=timezone.utc)


class Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> Clock:
    return Clock(NOW)


@pytest.fixture
def service(clock: Clock) -> VacationService:
    return VacationService(InMemoryVacationStore(), clock=clock)


def _policy(monthly: int = 4, weekly: int = 2) -> VacationPolicy:
    return VacationPolicy(
        target_year=2025,
        target_month=9,
        max_days_per_month=monthly,
        max_days_per_week=weekly,
        deadline=DEADLINE,
    )


def _sept(*days: int) -> set:
    return {CalendarDate(2025, 9, d) for d in days}


def test_publish_policy(service: VacationService) -> None:
    published = service.publish_policy("co_1", _policy())
    assert published.is_published
    assert published.published_at == NOW
    assert service.get_policy("co_1", 2025, 9) == published
    assert service.get_policy("co_2", 2025, 9) is None


def test_republish_replaces_limits(service: VacationService) -> None:
    service.publish_policy("co_1", _policy(monthly=4))
    service.publish_policy("co_1", _policy(monthly=6, weekly=0))
    policy = service.get_policy("co_1", 2025, 9)
    assert policy.max_days_per_month == 6
    assert not policy.has_weekly_limit


def test_unpublish_keeps_limits(service: VacationService) -> None:
    service.publish_policy("co_1", _policy(monthly=5, weekly=1))
    closed = service.unpublish_policy("co_1", 2025, 9)
    assert not closed.is_published
    assert closed.published_at is None
    assert closed.max_days_per_month == 5
    assert closed.max_days_per_week == 1
    assert service.get_policy("co_1", 2025, 9) == closed


def test_unpublish_unknown_policy(service: VacationService) -> None:
    with pytest.raises(PolicyNotFoundError):
        service.unpublish_policy("co_1", 2025, 9)


def test_submit_requires_published_policy(service: VacationService) -> None:
    with pytest.raises(PolicyNotPublishedError):
        service.submit_request("co_1", "emp_1", 2025, 9, _sept(1))
    service.publish_policy("co_1", _policy())
    service.unpublish_policy("co_1", 2025, 9)
    with pytest.raises(PolicyNotPublishedError):
        service.submit_request("co_1", "emp_1", 2025, 9, _sept(1))


def test_submit_request(service: VacationService) -> None:
    service.publish_policy("co_1", _policy())
    request = service.submit_request(
        "co_1", "emp_1", 2025, 9, _sept(1, 8), note="trip", employee_name="Alice"
    )
    assert request.status is RequestStatus.pending
    assert request.dates == frozenset({"2025-09-01", "2025-09-08"})
    assert request.submit_date == NOW
    assert request.employee_name == "Alice"
    assert request.note == "trip"
    assert service.list_requests("co_1", 2025, 9) == [request]
    assert service.has_existing_request("co_1", "emp_1", 2025, 9)
    assert not service.has_existing_request("co_1", "emp_2", 2025, 9)


def test_one_active_request_per_month(service: VacationService) -> None:
    service.publish_policy("co_1", _policy())
    first = service.submit_request("co_1", "emp_1", 2025, 9, _sept(1))
    with pytest.raises(DuplicateRequestError):
        service.submit_request("co_1", "emp_1", 2025, 9, _sept(2))

    service.cancel_request(first.id)
    second = service.submit_request("co_1", "emp_1", 2025, 9, _sept(2))
    assert second.id != first.id


@pytest.mark.parametrize(
    "dates, expected",
    [
        (_sept(1, 8, 15, 22, 29), MonthlyLimitExceeded(current=5, limit=4)),
        (_sept(1, 2, 3), WeeklyLimitExceeded(week=36, current=3, limit=2)),
        (set(), NoSelectionMade()),
    ],
)
def test_submit_rejects_invalid_selection(
    service: VacationService, dates: set, expected
) -> None:
    service.publish_policy("co_1", _policy())
    with pytest.raises(VacationRejectedError) as excinfo:
        service.submit_request("co_1", "emp_1", 2025, 9, dates)
    assert excinfo.value.result == expected
    assert str(excinfo.value) == expected.message
    assert service.list_requests("co_1", 2025, 9) == []


def test_submit_after_deadline(service: VacationService, clock: Clock) -> None:
    service.publish_policy("co_1", _policy())
    clock.now = DEADLINE + timedelta(minutes=1)
    with pytest.raises(VacationRejectedError) as excinfo:
        service.submit_request("co_1", "emp_1", 2025, 9, _sept(1))
    assert excinfo.value.result == DeadlineExpired()


def test_submit_rejects_dates_outside_month(service: VacationService) -> None:
    service.publish_policy("co_1", _policy())
    with pytest.raises(InvalidDateError):
        service.submit_request(
            "co_1", "emp_1", 2025, 9, _sept(1) | {CalendarDate(2025, 10, 1)}
        )


def test_review_request(service: VacationService, clock: Clock) -> None:
    service.publish_policy("co_1", _policy())
    request = service.submit_request("co_1", "emp_1", 2025, 9, _sept(1))
    clock.now = NOW + timedelta(days=1)
    approved = service.review_request(
        request.id, RequestStatus.approved, "boss_1", "enjoy"
    )
    assert approved.status is RequestStatus.approved
    assert approved.reviewed_by == "boss_1"
    assert approved.reviewed_at == clock.now
    assert service.store.get_request(request.id) == approved

    with pytest.raises(InvalidTransitionError):
        service.review_request(request.id, RequestStatus.rejected, "boss_1")
    with pytest.raises(InvalidTransitionError):
        service.cancel_request(request.id)


def test_unknown_request(service: VacationService) -> None:
    with pytest.raises(RequestNotFoundError):
        service.review_request("missing", RequestStatus.approved, "boss_1")
    with pytest.raises(RequestNotFoundError):
        service.cancel_request("missing")


def test_check_dates_and_usage_stats(service: VacationService) -> None:
    with pytest.raises(PolicyNotFoundError):
        service.check_dates("co_1", 2025, 9, _sept(1))
    service.publish_policy("co_1", _policy(monthly=4, weekly=2))
    assert service.check_dates("co_1", 2025, 9, _sept(1, 2, 3)) == (
        WeeklyLimitExceeded(week=36, current=3, limit=2)
    )
    stats = service.usage_stats("co_1", 2025, 9, _sept(1, 2, 3))
    assert stats.selected_days == 3
    assert stats.is_weekly_limit_exceeded


def test_employee_status(service: VacationService, clock: Clock) -> None:
    status = service.employee_status("co_1", "emp_1", 2025, 9)
    assert status is EmployeeVacationStatus.not_submitted

    service.publish_policy("co_1", _policy())
    assert (
        service.employee_status("co_1", "emp_1", 2025, 9)
        is EmployeeVacationStatus.not_submitted
    )

    request = service.submit_request("co_1", "emp_1", 2025, 9, _sept(1))
    assert (
        service.employee_status("co_1", "emp_1", 2025, 9)
        is EmployeeVacationStatus.pending
    )

    service.review_request(request.id, RequestStatus.rejected, "boss_1")
    assert (
        service.employee_status("co_1", "emp_1", 2025, 9)
        is EmployeeVacationStatus.rejected
    )

    other = service.submit_request("co_1", "emp_2", 2025, 9, _sept(2))
    service.cancel_request(other.id)
    assert (
        service.employee_status("co_1", "emp_2", 2025, 9)
        is EmployeeVacationStatus.cancelled
    )

    clock.now = DEADLINE + timedelta(days=1)
    assert (
        service.employee_status("co_1", "emp_3", 2025, 9)
        is EmployeeVacationStatus.expired
    )


def test_monthly_overview(service: VacationService) -> None:
    service.publish_policy("co_1", _policy())
    first = service.submit_request("co_1", "emp_1", 2025, 9, _sept(1, 8))
    service.submit_request("co_1", "emp_2", 2025, 9, _sept(3))
    service.review_request(first.id, RequestStatus.approved, "boss_1")
    overview = service.monthly_overview("co_1", 2025, 9)
    assert overview.total_employees == 2
    assert overview.total_days == 3
    assert overview.pending_requests == 1


def test_draft_policy_falls_back_to_defaults(service: VacationService) -> None:
    draft = service.draft_policy("co_1", 2025, 9)
    assert draft.max_days_per_month == 8
    assert draft.max_days_per_week == 0
    assert draft.deadline == NOW + timedelta(days=7)
    assert not draft.is_published
    assert service.get_policy("co_1", 2025, 9) is None

    published = service.publish_policy("co_1", _policy(monthly=5, weekly=1))
    assert service.draft_policy("co_1", 2025, 9) == published
