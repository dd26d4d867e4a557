"""Vacation workflow: policy publication, submission and review."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from ..core.errors import (
    DuplicateRequestError,
    InvalidDateError,
    PolicyNotFoundError,
    PolicyNotPublishedError,
    RequestNotFoundError,
    VacationRejectedError,
)
from ..domain.calendar import CalendarDate
from ..domain.models import (
    EmployeeVacationStatus,
    RequestStatus,
    VacationPolicy,
    VacationRequest,
    utcnow,
)
from ..domain.stats import (
    MonthlyOverview,
    VacationStats,
    get_stats,
    monthly_overview,
)
from ..domain.store import VacationStore
from ..domain.validator import ValidationResult, validate, validate_submission

logger = logging.getLogger(__name__)


class VacationService:
    """Coordinates the store with the vacation rules.

    The store is injected so the same service runs against the in-memory
    adapter in tests and a real backend elsewhere.
    """

    def __init__(
        self,
        store: VacationStore,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self._clock = clock or utcnow

    # -- policies -----------------------------------------------------------

    def get_policy(
        self, company_id: str, year: int, month: int
    ) -> Optional[VacationPolicy]:
        return self.store.get_policy(company_id, year, month)

    def draft_policy(
        self, company_id: str, year: int, month: int
    ) -> VacationPolicy:
        """Stored policy, or an unpublished default for a month without one."""
        policy = self.store.get_policy(company_id, year, month)
        if policy is None:
            logger.debug(
                "No vacation policy for %s %04d-%02d, using defaults",
                company_id,
                year,
                month,
            )
            policy = VacationPolicy.default(year, month, now=self._clock())
        return policy

    def publish_policy(
        self, company_id: str, policy: VacationPolicy
    ) -> VacationPolicy:
        """Create or replace the month's policy and publish it."""
        existing = self.store.get_policy(
            company_id, policy.target_year, policy.target_month
        )
        published = policy.publish(self._clock())
        self.store.save_policy(company_id, published)
        logger.info(
            "%s vacation policy for %s %04d-%02d (%s)",
            "Updated" if existing else "Published",
            company_id,
            policy.target_year,
            policy.target_month,
            published.limit_description(),
        )
        return published

    def unpublish_policy(
        self, company_id: str, year: int, month: int
    ) -> VacationPolicy:
        """Close submissions; configured limits are kept."""
        policy = self.require_policy(company_id, year, month).unpublish()
        self.store.save_policy(company_id, policy)
        logger.info(
            "Unpublished vacation policy for %s %04d-%02d", company_id, year, month
        )
        return policy

    def require_policy(
        self, company_id: str, year: int, month: int
    ) -> VacationPolicy:
        policy = self.store.get_policy(company_id, year, month)
        if policy is None:
            raise PolicyNotFoundError(
                f"no vacation policy for {company_id} {year:04d}-{month:02d}"
            )
        return policy

    def check_dates(
        self, company_id: str, year: int, month: int, dates: Iterable[CalendarDate]
    ) -> ValidationResult:
        policy = self.require_policy(company_id, year, month)
        return validate(policy, dates, year, month, self._clock())

    def usage_stats(
        self, company_id: str, year: int, month: int, dates: Iterable[CalendarDate]
    ) -> VacationStats:
        policy = self.require_policy(company_id, year, month)
        return get_stats(policy, dates, year, month)

    # -- requests -----------------------------------------------------------

    def list_requests(
        self, company_id: str, year: int, month: int
    ) -> List[VacationRequest]:
        return sorted(
            self.store.list_requests(company_id, year, month),
            key=lambda r: r.submit_date,
        )

    def find_request(
        self, company_id: str, employee_id: str, year: int, month: int
    ) -> Optional[VacationRequest]:
        """Latest active request of an employee for the month."""
        matches = [
            r
            for r in self.list_requests(company_id, year, month)
            if r.employee_id == employee_id and r.is_active
        ]
        return matches[-1] if matches else None

    def has_existing_request(
        self, company_id: str, employee_id: str, year: int, month: int
    ) -> bool:
        return self.find_request(company_id, employee_id, year, month) is not None

    def submit_request(
        self,
        company_id: str,
        employee_id: str,
        year: int,
        month: int,
        dates: Iterable[CalendarDate],
        note: str = "",
        employee_name: str = "",
    ) -> VacationRequest:
        policy = self.store.get_policy(company_id, year, month)
        if policy is None or not policy.is_published:
            raise PolicyNotPublishedError(
                f"vacation for {year:04d}-{month:02d} is not open for requests"
            )
        if self.has_existing_request(company_id, employee_id, year, month):
            raise DuplicateRequestError(
                f"{employee_id} already has a request for {year:04d}-{month:02d}"
            )
        selected = frozenset(dates)
        outside = sorted(d for d in selected if d.year_month != (year, month))
        if outside:
            raise InvalidDateError(
                f"dates outside {year:04d}-{month:02d}: "
                + ", ".join(str(d) for d in outside)
            )
        now = self._clock()
        result = validate_submission(policy, selected, year, month, now)
        if not result.is_valid:
            logger.info(
                "Rejected vacation request from %s: %s", employee_id, result.message
            )
            raise VacationRejectedError(result)

        request = VacationRequest.from_calendar_dates(
            selected,
            id=uuid.uuid4().hex,
            company_id=company_id,
            employee_id=employee_id,
            employee_name=employee_name,
            target_year=year,
            target_month=month,
            submit_date=now,
            note=note,
        )
        self.store.add_request(request)
        logger.info(
            "Submitted vacation request %s for %s with %d days",
            request.id,
            employee_id,
            request.days_count,
        )
        return request

    def _get_request(self, request_id: str) -> VacationRequest:
        request = self.store.get_request(request_id)
        if request is None:
            raise RequestNotFoundError(f"vacation request {request_id} not found")
        return request

    def review_request(
        self,
        request_id: str,
        status: RequestStatus,
        reviewer_id: str,
        review_note: Optional[str] = None,
    ) -> VacationRequest:
        request = self._get_request(request_id).review(
            status, reviewer_id, review_note, self._clock()
        )
        self.store.update_request(request)
        logger.info(
            "Vacation request %s %s by %s", request_id, request.status.value, reviewer_id
        )
        return request

    def cancel_request(self, request_id: str) -> VacationRequest:
        request = self._get_request(request_id).cancel()
        self.store.update_request(request)
        logger.info("Vacation request %s cancelled", request_id)
        return request

    # -- summaries ----------------------------------------------------------

    def employee_status(
        self, company_id: str, employee_id: str, year: int, month: int
    ) -> EmployeeVacationStatus:
        policy = self.store.get_policy(company_id, year, month)
        if policy is None or not policy.is_published:
            return EmployeeVacationStatus.not_submitted
        request = self.find_request(company_id, employee_id, year, month)
        if request is not None:
            return EmployeeVacationStatus(request.status.value)
        if policy.is_expired(self._clock()):
            return EmployeeVacationStatus.expired
        if any(
            r.employee_id == employee_id
            for r in self.store.list_requests(company_id, year, month)
        ):
            return EmployeeVacationStatus.cancelled
        return EmployeeVacationStatus.not_submitted

    def monthly_overview(
        self, company_id: str, year: int, month: int
    ) -> MonthlyOverview:
        return monthly_overview(
            self.store.list_requests(company_id, year, month), year, month
        )
