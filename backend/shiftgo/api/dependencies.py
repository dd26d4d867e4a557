"""Shared dependencies for the API routers."""

from functools import lru_cache

from fastapi import Depends

from ..domain.store import InMemoryVacationStore, VacationStore
from ..services.vacation import VacationService


@lru_cache
def get_store() -> VacationStore:
    return InMemoryVacationStore()


def get_service(store: VacationStore = Depends(get_store)) -> VacationService:
    return VacationService(store)
