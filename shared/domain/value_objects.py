"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: Represents a stay (check-in to check-out)
"""

from dataclasses import dataclass
from datetime import date, datetime

from shared.domain.base import ValueObject


def to_date(value) -> date:
    """
    Normalize a calendar value to a plain date (midnight, no time part)

    Accepts date, datetime, an ISO 'YYYY-MM-DD' string or a full ISO
    timestamp ('2025-08-15T00:00:00'), whose time part is dropped.
    Raises ValueError/TypeError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if 'T' in text or ' ' in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    raise TypeError(f"Cannot interpret {value!r} as a date")


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods, availability checks, etc.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        # Validation
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    @classmethod
    def parse(cls, start, end) -> 'DateRange':
        """Build a range from ISO strings, dates or datetimes"""
        return cls(to_date(start), to_date(end))

    def is_back_to_back(self, other: 'DateRange') -> bool:
        """True when one stay checks out on the day the other checks in"""
        return self.start_date == other.end_date or self.end_date == other.start_date

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Two ranges overlap if they share a night. A same-day
        checkout/check-in turnover is never an overlap.

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> False (back-to-back)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        if self.is_back_to_back(other):
            return False

        # Overlap formula: start1 < end2 AND end1 > start2
        return (self.start_date < other.end_date and
                self.end_date > other.start_date)

    def covers(self, check_date: date) -> bool:
        """
        Check if a date is shown as occupied on a calendar

        Both the check-in day and the check-out day are covered.
        """
        return self.start_date <= check_date <= self.end_date

    def __len__(self) -> int:
        """
        Return the number of days (nights) in this range

        This is the number of nights for a booking.
        """
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
