"""Application services built on the domain layer."""

from .vacation import VacationService

__all__ = ["VacationService"]
