"""Tests for the working selection of vacation dates."""

from datetime import datetime, timezone
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))
from shiftgo.domain.calendar import CalendarDate  # noqa: E402
from shiftgo.domain.models import VacationPolicy  # noqa: E402
from shiftgo.domain.selection import VacationSelection  # noqa: E402
from shiftgo.domain.validator import (  # noqa: E402
    DeadlineExpired,
    MonthlyLimitExceeded,
    Valid,
    WeeklyLimitExceeded,
)

DEADLINE = datetime(2025, 8, 25, tzinfo=timezone.utc)
BEFORE = datetime(2025, 8, 20, tzinfo=timezone.utc)
AFTER = datetime(2025, 8, 30, tzinfo=timezone.utc)


def _selection(monthly: int = 0, weekly: int = 0, now=BEFORE) -> VacationSelection:
    policy = VacationPolicy(
        target_year=2025,
        target_month=9,
        max_days_per_month=monthly,
        max_days_per_week=weekly,
        deadline=DEADLINE,
    )
    return VacationSelection(policy, clock=lambda: now)


def test_toggle_adds_and_removes() -> None:
    selection = _selection(monthly=8)
    day = CalendarDate(2025, 9, 1)
    assert selection.toggle(day) == Valid()
    assert day in selection
    assert len(selection) == 1
    assert selection.toggle(day) == Valid()
    assert day not in selection
    assert len(selection) == 0


def test_toggle_rejects_over_limit_and_keeps_set() -> None:
    selection = _selection(monthly=2)
    selection.toggle(CalendarDate(2025, 9, 1))
    selection.toggle(CalendarDate(2025, 9, 10))
    result = selection.toggle(CalendarDate(2025, 9, 20))
    assert result == MonthlyLimitExceeded(current=3, limit=2)
    assert selection.date_strings() == ["2025-09-01", "2025-09-10"]


def test_toggle_reports_weekly_violation() -> None:
    selection = _selection(weekly=1)
    selection.toggle(CalendarDate(2025, 9, 1))
    result = selection.toggle(CalendarDate(2025, 9, 2))
    assert result == WeeklyLimitExceeded(week=36, current=2, limit=1)
    assert len(selection) == 1


def test_toggle_after_deadline() -> None:
    selection = _selection(monthly=8, now=AFTER)
    assert selection.toggle(CalendarDate(2025, 9, 1)) == DeadlineExpired()
    assert len(selection) == 0


def test_select_weekends_all_or_nothing() -> None:
    selection = _selection(monthly=5)
    result = selection.select_weekends()
    assert result == MonthlyLimitExceeded(current=8, limit=5)
    assert len(selection) == 0

    selection = _selection(weekly=1)
    assert selection.select_weekends() == WeeklyLimitExceeded(
        week=37, current=2, limit=1
    )
    assert len(selection) == 0

    selection = _selection(monthly=8)
    assert selection.select_weekends() == Valid()
    assert len(selection) == 8


def test_select_all_merges_with_existing_dates() -> None:
    selection = _selection(monthly=3)
    selection.toggle(CalendarDate(2025, 9, 1))
    result = selection.select_all(
        [CalendarDate(2025, 9, 2), CalendarDate(2025, 9, 3)]
    )
    assert result == Valid()
    assert len(selection) == 3
    result = selection.select_all([CalendarDate(2025, 9, 4)])
    assert result == MonthlyLimitExceeded(current=4, limit=3)
    assert len(selection) == 3


def test_snapshot_and_clear() -> None:
    selection = _selection()
    selection.toggle(CalendarDate(2025, 9, 3))
    selection.toggle(CalendarDate(2025, 9, 1))
    snapshot = selection.dates
    assert snapshot == frozenset({CalendarDate(2025, 9, 1), CalendarDate(2025, 9, 3)})
    assert selection.date_strings() == ["2025-09-01", "2025-09-03"]
    selection.clear()
    assert len(selection) == 0
    assert len(snapshot) == 2


def test_validate_and_stats() -> None:
    selection = _selection(monthly=4, weekly=2)
    selection.select_all([CalendarDate(2025, 9, d) for d in (1, 2, 8)])
    assert selection.validate() == Valid()
    stats = selection.stats()
    assert stats.selected_days == 3
    assert stats.max_weekly_used == 2
    assert stats.monthly_usage_percentage == 0.75
    assert stats.is_near_weekly_limit
