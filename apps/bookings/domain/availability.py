"""
"Next available" start dates

Given a desired arrival day, walk forward and offer the first days on
which at least a one-night stay is free. Purely advisory: nothing is
reserved, a suggested day can be taken by someone else a moment later.
"""

import logging
from datetime import date, timedelta
from typing import Any, Iterable, List

from shared.domain.value_objects import to_date

from .conflicts import find_conflicts
from .entities import load_stays

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_DAYS = 30
DEFAULT_MAX_RESULTS = 5


def suggest_available_starts(
    desired_start: date | str | None,
    bookings: Iterable[Any] | None,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> List[date]:
    """
    Suggest arrival days starting from desired_start

    Checks the minimal stay [d, d + 1 day) for each day d in
    desired_start .. desired_start + horizon_days - 1.

    Returns:
        Free days in ascending order, at most max_results of them.
        An empty list when there is no start date or the snapshot
        cannot be read (no constraint information, not an error).
    """
    if desired_start in (None, ''):
        return []

    try:
        start = to_date(desired_start)
        stays = load_stays(bookings)
    except (TypeError, ValueError) as exc:
        logger.warning(f"Cannot suggest start dates from {desired_start!r}: {exc}")
        return []

    suggestions: List[date] = []
    one_night = timedelta(days=1)
    for offset in range(max(horizon_days, 0)):
        if len(suggestions) >= max_results:
            break
        day = start + timedelta(days=offset)
        if not find_conflicts(day, day + one_night, stays):
            suggestions.append(day)
    return suggestions
