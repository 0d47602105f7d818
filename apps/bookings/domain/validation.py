"""
Stay date validation

Runs before any conflict check. Problems are returned, never raised:
a bad date is something the guest fixes in the form, not a fault.
"""

from enum import Enum
from typing import List

from shared.domain.value_objects import to_date


class StayDateProblem(Enum):
    MISSING_CHECK_IN = 'missing_check_in'
    MISSING_CHECK_OUT = 'missing_check_out'
    INVALID_CHECK_IN = 'invalid_check_in'
    INVALID_CHECK_OUT = 'invalid_check_out'
    CHECK_OUT_NOT_AFTER_CHECK_IN = 'check_out_not_after_check_in'


def _check_one(value, missing: StayDateProblem, invalid: StayDateProblem, problems: List[StayDateProblem]):
    if value in (None, ''):
        problems.append(missing)
        return None
    try:
        return to_date(value)
    except (TypeError, ValueError):
        problems.append(invalid)
        return None


def validate_stay_dates(check_in, check_out) -> List[StayDateProblem]:
    """
    Validate a requested stay

    A stay needs both dates and at least one night, so a same-day
    check-out is rejected just like a check-out before check-in.

    Returns:
        Problems found, empty when the dates are usable.
    """
    problems: List[StayDateProblem] = []
    start = _check_one(check_in, StayDateProblem.MISSING_CHECK_IN, StayDateProblem.INVALID_CHECK_IN, problems)
    end = _check_one(check_out, StayDateProblem.MISSING_CHECK_OUT, StayDateProblem.INVALID_CHECK_OUT, problems)

    if start is not None and end is not None and end <= start:
        problems.append(StayDateProblem.CHECK_OUT_NOT_AFTER_CHECK_IN)
    return problems
