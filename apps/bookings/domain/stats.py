"""Per-host booking counters shown on the dashboard."""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Iterable

from .entities import PaymentStatus, StayState, load_stays


@dataclass
class StaySummary:
    total: int = 0
    current: int = 0
    upcoming: int = 0
    completed: int = 0
    paid: int = 0
    unpaid: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def summarize_stays(bookings: Iterable[Any], today: date) -> StaySummary:
    summary = StaySummary()
    for stay in load_stays(bookings):
        summary.total += 1
        state = stay.state_on(today)
        if state is StayState.UPCOMING:
            summary.upcoming += 1
        elif state is StayState.CURRENT:
            summary.current += 1
        else:
            summary.completed += 1

        if stay.payment_status is PaymentStatus.PAID:
            summary.paid += 1
        else:
            summary.unpaid += 1
    return summary
