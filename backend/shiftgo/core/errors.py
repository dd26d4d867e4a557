"""Exception hierarchy for precondition and workflow failures.

Limit violations are not exceptions; they are returned as
:class:`~shiftgo.domain.validator.ValidationResult` values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.validator import ValidationResult


class ShiftGoError(Exception):
    """Base class for all errors raised by the package."""


class InvalidDateError(ShiftGoError, ValueError):
    """A calendar date is out of range or malformed."""


class InvalidPolicyError(ShiftGoError, ValueError):
    """A vacation policy carries inconsistent values."""


class PolicyNotFoundError(ShiftGoError):
    """No policy exists for the requested company and month."""


class PolicyNotPublishedError(ShiftGoError):
    """The month's policy exists but employees cannot submit yet."""


class DuplicateRequestError(ShiftGoError):
    """The employee already holds an active request for the month."""


class RequestNotFoundError(ShiftGoError):
    """No vacation request with the given id."""


class InvalidTransitionError(ShiftGoError):
    """A request status change that the workflow does not allow."""


class VacationRejectedError(ShiftGoError):
    """A submission failed validation.

    The structured result is kept on ``result`` so callers can render it.
    """

    def __init__(self, result: "ValidationResult") -> None:
        super().__init__(result.message)
        self.result = result
