"""
Overlap detection between stays

This is the single place that decides whether two bookings collide.
Everything else (suggestions, calendar lanes, API validation) asks it.

Rule: [A_in, A_out) and [B_in, B_out) conflict iff they share a night.
A same-day checkout/check-in turnover (A_out == B_in or A_in == B_out)
is never a conflict.
"""

from datetime import date
from typing import Any, Iterable, List

from shared.domain.value_objects import DateRange

from .entities import iter_stays


def find_conflicts(
    check_in: date | str,
    check_out: date | str,
    bookings: Iterable[Any],
    exclude_id: Any = None,
) -> List[Any]:
    """
    Return the bookings whose stay collides with [check_in, check_out)

    Args:
        check_in: Candidate arrival date
        check_out: Candidate departure date, must be after check_in
        bookings: Snapshot already scoped to one owner (ORM rows or mappings)
        exclude_id: Booking being edited, never reported against itself

    Returns:
        The conflicting records, unchanged and in input order.
        An empty list means the range is bookable.
    """
    candidate = DateRange.parse(check_in, check_out)
    return [
        record
        for record, stay in iter_stays(bookings)
        if not stay.same_booking(exclude_id) and stay.dates.overlaps_with(candidate)
    ]
