"""
Booking Domain Entities

Framework-free view of a booking as the scheduling engine sees it:
- PaymentStatus: unpaid / paid
- StayState: where a stay is relative to "today"
- Stay: immutable, date-normalized snapshot of one booking

Records arrive from persistence as ORM instances or as plain mappings
(API payloads, exported documents). Both are accepted; dates may be ISO
strings, dates or datetimes.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, Iterator, List, Mapping, Tuple

from shared.domain.value_objects import DateRange

logger = logging.getLogger(__name__)


class PaymentStatus(Enum):
    """Payment status tracking"""
    UNPAID = 'unpaid'
    PAID = 'paid'

    @classmethod
    def parse(cls, value: Any) -> 'PaymentStatus':
        """
        Read a stored status leniently

        Case is ignored and the labels of exported documents are accepted.
        Anything else counts as unpaid: a bad status never hides a stay.
        """
        raw = getattr(value, 'value', value)
        status = _PAYMENT_ALIASES.get(str(raw).strip().lower())
        if status is None:
            logger.warning(f"Unknown payment status {raw!r}, treating as unpaid")
            return cls.UNPAID
        return cls(status)


_PAYMENT_ALIASES = {
    'unpaid': 'unpaid',
    'paid': 'paid',
    '未付款': 'unpaid',
    '已付款': 'paid',
}


class StayState(Enum):
    """
    Position of a stay relative to a reference day

    - UPCOMING: today < check-in
    - CURRENT: check-in <= today <= check-out (check-out day counts)
    - COMPLETED: today > check-out
    """
    UPCOMING = 'upcoming'
    CURRENT = 'current'
    COMPLETED = 'completed'


# Accepted spellings for each field, first match wins.
_FIELD_ALIASES = {
    'id': ('id', 'pk'),
    'name': ('name',),
    'phone': ('phone',),
    'check_in': ('check_in', 'checkInDate', 'check_in_date'),
    'check_out': ('check_out', 'checkOutDate', 'check_out_date'),
    'payment_status': ('payment_status', 'paymentStatus'),
    'owner_id': ('owner_id', 'ownerId', 'landlordId'),
}

_MISSING = object()


def _read(record: Any, field_name: str, default: Any = _MISSING) -> Any:
    for alias in _FIELD_ALIASES[field_name]:
        if isinstance(record, Mapping):
            value = record.get(alias, _MISSING)
        else:
            value = getattr(record, alias, _MISSING)
        if value is not _MISSING and value is not None:
            return value
    if default is _MISSING:
        raise KeyError(field_name)
    return default


@dataclass(frozen=True)
class Stay:
    """
    One booking, normalized for the engine

    Key invariants:
    - dates.start_date < dates.end_date (at least one night)
    - id is present and never changes across edits
    """
    id: Any
    name: str
    dates: DateRange
    phone: str = ''
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    owner_id: Any = None

    @property
    def check_in(self) -> date:
        return self.dates.start_date

    @property
    def check_out(self) -> date:
        return self.dates.end_date

    def state_on(self, today: date) -> StayState:
        if today < self.check_in:
            return StayState.UPCOMING
        if today <= self.check_out:
            return StayState.CURRENT
        return StayState.COMPLETED

    def same_booking(self, other_id: Any) -> bool:
        """Identity check tolerant to '12' vs 12 from query strings"""
        return other_id is not None and str(self.id) == str(other_id)

    @classmethod
    def from_record(cls, record: Any) -> 'Stay':
        """
        Build a Stay from an ORM instance or a mapping

        Raises:
            KeyError: a required field is missing
            ValueError / TypeError: dates are malformed or out of order
        """
        if isinstance(record, Stay):
            return record

        status = _read(record, 'payment_status', PaymentStatus.UNPAID.value)
        return cls(
            id=_read(record, 'id'),
            name=str(_read(record, 'name', '')),
            dates=DateRange.parse(_read(record, 'check_in'), _read(record, 'check_out')),
            phone=str(_read(record, 'phone', '')),
            payment_status=PaymentStatus.parse(status),
            owner_id=_read(record, 'owner_id', None),
        )


def iter_stays(records: Iterable[Any]) -> Iterator[Tuple[Any, Stay]]:
    """
    Yield (original record, Stay) pairs in input order

    Records with missing or malformed dates are skipped with a warning
    so that one bad record never hides the others.
    """
    for record in records:
        try:
            stay = Stay.from_record(record)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Skipping malformed booking record {record!r}: {exc}")
            continue
        yield record, stay


def load_stays(records: Iterable[Any]) -> List[Stay]:
    """Normalize a booking snapshot, dropping records that cannot be read"""
    return [stay for _, stay in iter_stays(records)]
