"""Vacation policy and request endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from typing_extensions import Annotated

from ..core.errors import (
    DuplicateRequestError,
    InvalidDateError,
    InvalidPolicyError,
    InvalidTransitionError,
    PolicyNotFoundError,
    PolicyNotPublishedError,
    RequestNotFoundError,
    ShiftGoError,
    VacationRejectedError,
)
from ..domain.schemas import (
    DatesIn,
    EmployeeStatusOut,
    OverviewOut,
    PolicyIn,
    PolicyOut,
    RequestIn,
    RequestOut,
    ReviewIn,
    StatsOut,
    ValidationOut,
)
from ..services.vacation import VacationService
from .dependencies import get_service

router = APIRouter(tags=["Vacations"])

POLICY_PATH = "/companies/{company_id}/vacation-policies/{year}/{month}"

_STATUS_CODES = {
    PolicyNotFoundError: 404,
    RequestNotFoundError: 404,
    PolicyNotPublishedError: 409,
    DuplicateRequestError: 409,
    InvalidTransitionError: 409,
    InvalidDateError: 422,
    InvalidPolicyError: 422,
}


def _http_error(exc: ShiftGoError) -> HTTPException:
    if isinstance(exc, VacationRejectedError):
        detail = ValidationOut.from_result(exc.result).model_dump()
        return HTTPException(status_code=422, detail=detail)
    return HTTPException(status_code=_STATUS_CODES.get(type(exc), 400), detail=str(exc))


Year = Annotated[int, Path(ge=1900, le=9998)]
Month = Annotated[int, Path(ge=1, le=12)]


@router.get(POLICY_PATH, response_model=PolicyOut, summary="Get vacation policy")
def get_policy(
    company_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    try:
        return PolicyOut.from_domain(service.require_policy(company_id, year, month))
    except ShiftGoError as e:
        raise _http_error(e)


@router.get(
    POLICY_PATH + "/draft",
    response_model=PolicyOut,
    summary="Get vacation policy or defaults for editing",
)
def get_draft_policy(
    company_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    return PolicyOut.from_domain(service.draft_policy(company_id, year, month))


@router.put(POLICY_PATH, response_model=PolicyOut, summary="Publish vacation policy")
def publish_policy(
    body: PolicyIn,
    company_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    try:
        policy = service.publish_policy(company_id, body.to_domain(year, month))
    except ShiftGoError as e:
        raise _http_error(e)
    return PolicyOut.from_domain(policy)


@router.post(
    POLICY_PATH + "/unpublish",
    response_model=PolicyOut,
    summary="Close vacation submissions",
)
def unpublish_policy(
    company_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    try:
        return PolicyOut.from_domain(service.unpublish_policy(company_id, year, month))
    except ShiftGoError as e:
        raise _http_error(e)


@router.post(
    POLICY_PATH + "/validate",
    response_model=ValidationOut,
    summary="Check a date selection against the policy",
)
def validate_dates(
    body: DatesIn,
    company_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    try:
        result = service.check_dates(company_id, year, month, body.calendar_dates())
    except ShiftGoError as e:
        raise _http_error(e)
    return ValidationOut.from_result(result)


@router.post(
    POLICY_PATH + "/stats",
    response_model=StatsOut,
    summary="Usage statistics for a date selection",
)
def usage_stats(
    body: DatesIn,
    company_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    try:
        stats = service.usage_stats(company_id, year, month, body.calendar_dates())
    except ShiftGoError as e:
        raise _http_error(e)
    return StatsOut.from_stats(stats)


@router.get(
    POLICY_PATH + "/overview",
    response_model=OverviewOut,
    summary="Company vacation totals for the month",
)
def overview(
    company_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    return OverviewOut.from_overview(service.monthly_overview(company_id, year, month))


@router.get(
    POLICY_PATH + "/employees/{employee_id}/status",
    response_model=EmployeeStatusOut,
    summary="Vacation status of one employee",
)
def employee_status(
    company_id: str,
    employee_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    status = service.employee_status(company_id, employee_id, year, month)
    return EmployeeStatusOut(employee_id=employee_id, status=status)


@router.get(
    POLICY_PATH + "/requests",
    response_model=List[RequestOut],
    summary="List vacation requests",
)
def list_requests(
    company_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    return [
        RequestOut.from_domain(r)
        for r in service.list_requests(company_id, year, month)
    ]


@router.post(
    POLICY_PATH + "/requests",
    response_model=RequestOut,
    status_code=201,
    summary="Submit a vacation request",
)
def submit_request(
    body: RequestIn,
    company_id: str,
    year: Year,
    month: Month,
    service: VacationService = Depends(get_service),
):
    try:
        request = service.submit_request(
            company_id,
            body.employee_id,
            year,
            month,
            body.calendar_dates(),
            note=body.note,
            employee_name=body.employee_name,
        )
    except ShiftGoError as e:
        raise _http_error(e)
    return RequestOut.from_domain(request)


@router.post(
    "/vacation-requests/{request_id}/review",
    response_model=RequestOut,
    summary="Approve or reject a request",
)
def review_request(
    request_id: str,
    body: ReviewIn,
    service: VacationService = Depends(get_service),
):
    try:
        request = service.review_request(
            request_id, body.status, body.reviewer_id, body.review_note
        )
    except ShiftGoError as e:
        raise _http_error(e)
    return RequestOut.from_domain(request)


@router.post(
    "/vacation-requests/{request_id}/cancel",
    response_model=RequestOut,
    summary="Cancel a pending request",
)
def cancel_request(
    request_id: str,
    service: VacationService = Depends(get_service),
):
    try:
        request = service.cancel_request(request_id)
    except ShiftGoError as e:
        raise _http_error(e)
    return RequestOut.from_domain(request)
