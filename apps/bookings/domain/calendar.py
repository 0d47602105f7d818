"""
Month calendar layout

Turns a booking snapshot into everything a month grid needs to draw:

1. Grid: 42 days (6 weeks x 7), starting on the Sunday on/before the 1st.
2. Lanes: each booking gets a vertical row. Bookings sharing a row never
   conflict, and the number of rows equals the largest group of
   mutually conflicting bookings (greedy first-fit by check-in).
3. Week segments: per booking and week, the contiguous run of weekdays
   (0 = Sunday .. 6 = Saturday) the stay covers. A stay is drawn on both
   its check-in and its check-out day.
4. Labels: a bar that carries on from Saturday into the next week's
   Sunday is the same visual bar, so only its first segment shows the
   guest name.

The renderer only places what it receives here; it never recomputes
lanes or overlaps.
"""

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Tuple

from shared.domain.value_objects import to_date

from .entities import Stay, iter_stays

DAYS_PER_WEEK = 7
WEEKS_PER_GRID = 6
DEFAULT_ROW_HEIGHT = 28  # 24px bar + 4px gap

SUNDAY = 0
SATURDAY = 6


def day_of_week(day: date) -> int:
    """Sunday-first weekday index (Sunday = 0, Saturday = 6)"""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def month_grid(year: int, month: int) -> List[date]:
    """Return the 42 consecutive days shown for a month"""
    first = date(year, month, 1)
    start = first - timedelta(days=day_of_week(first))
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK * WEEKS_PER_GRID)]


@dataclass(frozen=True)
class WeekSegment:
    """
    One horizontal bar piece of a booking inside a single calendar week

    top is the pixel offset of the lane (lane * row height).
    """
    booking: Any
    stay: Stay
    week_index: int
    start_day: int
    end_day: int
    lane: int
    top: int
    show_label: bool = False

    @property
    def span(self) -> int:
        return self.end_day - self.start_day + 1

    def continues(self, previous: 'WeekSegment') -> bool:
        """True when this bar is the visual continuation of previous"""
        return (
            previous.end_day == SATURDAY
            and self.start_day == SUNDAY
            and self.week_index == previous.week_index + 1
        )


@dataclass(frozen=True)
class MonthLayout:
    """Grid days plus the flat list of positioned segments"""
    year: int
    month: int
    days: List[date]
    events: List[WeekSegment] = field(default_factory=list)
    lanes: Dict[Any, int] = field(default_factory=dict)

    @property
    def lane_count(self) -> int:
        return max(self.lanes.values()) + 1 if self.lanes else 0


def assign_lanes(stays: Iterable[Stay]) -> Dict[Any, int]:
    """
    Greedy interval colouring

    Stays are visited by check-in (ties keep input order). Each takes the
    lowest lane holding nothing it conflicts with, using the same
    back-to-back-exempt rule as conflict detection.

    Returns:
        Mapping of booking id -> lane index
    """
    lanes: List[List[Stay]] = []
    assignment: Dict[Any, int] = {}

    for stay in sorted(stays, key=lambda item: item.check_in):
        for index, occupants in enumerate(lanes):
            if not any(stay.dates.overlaps_with(other.dates) for other in occupants):
                occupants.append(stay)
                assignment[stay.id] = index
                break
        else:
            lanes.append([stay])
            assignment[stay.id] = len(lanes) - 1

    return assignment


def _week_runs(stay: Stay, days: List[date]) -> List[Tuple[int, int, int]]:
    """(week_index, start_day, end_day) for every covered run, in order"""
    runs = []
    for week_index in range(len(days) // DAYS_PER_WEEK):
        week = days[week_index * DAYS_PER_WEEK:(week_index + 1) * DAYS_PER_WEEK]
        run_start = run_end = None
        for weekday, day in enumerate(week):
            if stay.dates.covers(day):
                if run_start is None:
                    run_start = weekday
                run_end = weekday
            elif run_start is not None:
                runs.append((week_index, run_start, run_end))
                run_start = run_end = None
        if run_start is not None:
            runs.append((week_index, run_start, run_end))
    return runs


def week_segments(
    booking: Any,
    stay: Stay,
    days: List[date],
    lane: int,
    row_height: int = DEFAULT_ROW_HEIGHT,
) -> List[WeekSegment]:
    """
    Split one stay into per-week bars and decide which bars get the label

    A segment is label-bearing if it is the first one or if it is not
    the Saturday -> Sunday continuation of the segment before it.
    """
    segments: List[WeekSegment] = []
    for week_index, start_day, end_day in _week_runs(stay, days):
        segment = WeekSegment(
            booking=booking,
            stay=stay,
            week_index=week_index,
            start_day=start_day,
            end_day=end_day,
            lane=lane,
            top=lane * row_height,
        )
        if not segments or not segment.continues(segments[-1]):
            segment = replace(segment, show_label=True)
        segments.append(segment)
    return segments


def layout_month(
    bookings: Iterable[Any],
    year: int,
    month: int,
    row_height: int = DEFAULT_ROW_HEIGHT,
) -> MonthLayout:
    """
    Lay out one month of bookings

    Malformed records are skipped (see iter_stays). Lanes are computed
    over the whole snapshot so a booking keeps its row when the user
    flips between months.
    """
    days = month_grid(year, month)
    pairs = list(iter_stays(bookings))
    lanes = assign_lanes(stay for _, stay in pairs)

    events: List[WeekSegment] = []
    for booking, stay in sorted(pairs, key=lambda pair: pair[1].check_in):
        events.extend(week_segments(booking, stay, days, lanes[stay.id], row_height))

    return MonthLayout(year=year, month=month, days=days, events=events, lanes=lanes)


def bookings_on_day(bookings: Iterable[Any], day: date | str) -> List[Any]:
    """
    Resolve a click on a calendar day

    Returns every booking drawn on that day (check-in and check-out days
    included), in input order. More than one result is a legitimate
    answer that the caller must let the user choose from.
    """
    target = to_date(day)
    return [record for record, stay in iter_stays(bookings) if stay.dates.covers(target)]
