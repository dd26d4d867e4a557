"""Storage port for policies and submitted requests.

The service layer depends on :class:`VacationStore` only; the in-memory
adapter backs tests and the default API wiring.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Tuple

from ..core.errors import RequestNotFoundError
from .models import VacationPolicy, VacationRequest

PolicyKey = Tuple[str, int, int]


class VacationStore(Protocol):
    def get_policy(
        self, company_id: str, year: int, month: int
    ) -> Optional[VacationPolicy]: ...

    def save_policy(self, company_id: str, policy: VacationPolicy) -> None: ...

    def list_requests(
        self, company_id: str, year: int, month: int
    ) -> List[VacationRequest]: ...

    def get_request(self, request_id: str) -> Optional[VacationRequest]: ...

    def add_request(self, request: VacationRequest) -> None: ...

    def update_request(self, request: VacationRequest) -> None: ...


class InMemoryVacationStore:
    """Process-local store keyed by ``(company_id, year, month)``."""

    def __init__(self) -> None:
        self._policies: Dict[PolicyKey, VacationPolicy] = {}
        self._requests: Dict[str, VacationRequest] = {}

    def get_policy(
        self, company_id: str, year: int, month: int
    ) -> Optional[VacationPolicy]:
        return self._policies.get((company_id, year, month))

    def save_policy(self, company_id: str, policy: VacationPolicy) -> None:
        key = (company_id, policy.target_year, policy.target_month)
        self._policies[key] = policy

    def list_requests(
        self, company_id: str, year: int, month: int
    ) -> List[VacationRequest]:
        return [
            r
            for r in self._requests.values()
            if r.company_id == company_id
            and r.target_year == year
            and r.target_month == month
        ]

    def get_request(self, request_id: str) -> Optional[VacationRequest]:
        return self._requests.get(request_id)

    def add_request(self, request: VacationRequest) -> None:
        self._requests[request.id] = request

    def update_request(self, request: VacationRequest) -> None:
        if request.id not in self._requests:
            raise RequestNotFoundError(request.id)
        self._requests[request.id] = request
