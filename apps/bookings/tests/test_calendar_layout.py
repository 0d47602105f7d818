"""Tests for the month grid, lane packing and week segments."""

from datetime import date, timedelta
from itertools import combinations

import pytest

from apps.bookings.domain.calendar import (
    DEFAULT_ROW_HEIGHT,
    WeekSegment,
    assign_lanes,
    bookings_on_day,
    day_of_week,
    layout_month,
    month_grid,
    week_segments,
)
from apps.bookings.domain.entities import Stay, load_stays


def _booking(booking_id, check_in, check_out, **extra):
    return {
        "id": booking_id,
        "name": f"Guest {booking_id}",
        "check_in": check_in,
        "check_out": check_out,
        **extra,
    }


def _segments_of(layout, booking_id):
    return [event for event in layout.events if event.stay.id == booking_id]


class TestMonthGrid:
    def test_grid_starts_on_sunday_before_the_first(self):
        days = month_grid(2025, 8)  # 1 Aug 2025 is a Friday

        assert len(days) == 42
        assert days[0] == date(2025, 7, 27)
        assert days[-1] == date(2025, 9, 6)
        assert day_of_week(days[0]) == 0
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))

    def test_month_starting_on_sunday_has_no_leading_days(self):
        assert month_grid(2025, 6)[0] == date(2025, 6, 1)

    def test_december_runs_into_january(self):
        days = month_grid(2025, 12)
        assert days[0] == date(2025, 11, 30)
        assert days[-1] == date(2026, 1, 10)

    def test_day_of_week_is_sunday_first(self):
        assert day_of_week(date(2025, 8, 3)) == 0
        assert day_of_week(date(2025, 8, 4)) == 1
        assert day_of_week(date(2025, 8, 9)) == 6


class TestLanes:
    def test_turnover_reuses_the_lane(self):
        stays = load_stays([
            _booking("a", "2025-08-01", "2025-08-05"),
            _booking("b", "2025-08-03", "2025-08-07"),
            _booking("c", "2025-08-05", "2025-08-09"),
        ])
        assert assign_lanes(stays) == {"a": 0, "b": 1, "c": 0}

    def test_lane_count_equals_largest_overlapping_group(self):
        stays = load_stays([
            _booking(1, "2025-08-01", "2025-08-10"),
            _booking(2, "2025-08-02", "2025-08-04"),
            _booking(3, "2025-08-03", "2025-08-06"),
            _booking(4, "2025-08-12", "2025-08-14"),
        ])
        lanes = assign_lanes(stays)
        assert lanes[4] == 0
        assert sorted(lanes[key] for key in (1, 2, 3)) == [0, 1, 2]
        assert max(lanes.values()) + 1 == 3

    def test_equal_check_in_keeps_input_order(self):
        stays = load_stays([
            _booking("second", "2025-08-10", "2025-08-12"),
            _booking("first", "2025-08-10", "2025-08-15"),
        ])
        assert assign_lanes(stays) == {"second": 0, "first": 1}

    def test_stays_in_one_lane_never_conflict(self):
        stays = []
        for index in range(20):
            check_in = date(2025, 8, 1) + timedelta(days=index % 9)
            check_out = check_in + timedelta(days=1 + index % 4)
            stays.append(Stay.from_record(_booking(index, check_in, check_out)))

        lanes = assign_lanes(stays)
        for first, second in combinations(stays, 2):
            if lanes[first.id] == lanes[second.id]:
                assert not first.dates.overlaps_with(second.dates)


class TestWeekSegments:
    def test_stay_across_weekend_continues_without_new_label(self):
        layout = layout_month([_booking(1, "2025-08-15", "2025-08-18")], 2025, 8)
        segments = _segments_of(layout, 1)

        assert [(s.week_index, s.start_day, s.end_day) for s in segments] == [(2, 5, 6), (3, 0, 1)]
        assert [s.show_label for s in segments] == [True, False]

    def test_stay_spanning_three_weeks_labels_only_first_segment(self):
        layout = layout_month([_booking(1, "2025-08-08", "2025-08-20")], 2025, 8)
        segments = _segments_of(layout, 1)

        assert [(s.week_index, s.start_day, s.end_day, s.span) for s in segments] == [
            (1, 5, 6, 2),
            (2, 0, 6, 7),
            (3, 0, 3, 4),
        ]
        assert [s.show_label for s in segments] == [True, False, False]

    def test_check_out_day_is_drawn(self):
        layout = layout_month([_booking(1, "2025-08-04", "2025-08-06")], 2025, 8)
        (segment,) = _segments_of(layout, 1)
        assert (segment.start_day, segment.end_day) == (1, 3)

    def test_stay_from_previous_month_is_clipped_and_labelled(self):
        layout = layout_month([_booking(1, "2025-07-20", "2025-08-02")], 2025, 8)
        segments = _segments_of(layout, 1)

        assert [(s.week_index, s.start_day, s.end_day) for s in segments] == [(0, 0, 6)]
        assert segments[0].show_label is True

    def test_stay_outside_grid_produces_no_segments(self):
        layout = layout_month([_booking(1, "2025-10-01", "2025-10-03")], 2025, 8)
        assert layout.events == []
        assert layout.lane_count == 1

    def test_week_segments_keep_the_original_record(self):
        record = _booking(1, "2025-08-08", "2025-08-12")
        stay = load_stays([record])[0]

        segments = week_segments(record, stay, month_grid(2025, 8), lane=2, row_height=10)

        assert all(segment.booking is record for segment in segments)
        assert {segment.top for segment in segments} == {20}

    def test_continuation_requires_saturday_to_sunday_of_next_week(self):
        stay = load_stays([_booking(1, "2025-08-01", "2025-08-30")])[0]

        def segment(week_index, start_day, end_day):
            return WeekSegment(
                booking=None, stay=stay, week_index=week_index,
                start_day=start_day, end_day=end_day, lane=0, top=0,
            )

        assert segment(1, 0, 3).continues(segment(0, 2, 6))
        assert not segment(1, 0, 3).continues(segment(0, 2, 5))
        assert not segment(1, 1, 3).continues(segment(0, 2, 6))
        assert not segment(2, 0, 3).continues(segment(0, 2, 6))


class TestLayoutMonth:
    def test_top_offset_follows_lane(self):
        layout = layout_month(
            [
                _booking(1, "2025-08-04", "2025-08-08"),
                _booking(2, "2025-08-05", "2025-08-07"),
            ],
            2025,
            8,
        )
        (second,) = _segments_of(layout, 2)
        assert second.lane == 1
        assert second.top == DEFAULT_ROW_HEIGHT
        assert layout.lane_count == 2

    def test_custom_row_height(self):
        layout = layout_month(
            [_booking(1, "2025-08-04", "2025-08-08"), _booking(2, "2025-08-05", "2025-08-07")],
            2025,
            8,
            row_height=40,
        )
        assert _segments_of(layout, 2)[0].top == 40

    def test_events_ordered_by_check_in(self):
        layout = layout_month(
            [
                _booking(2, "2025-08-20", "2025-08-22"),
                _booking(1, "2025-08-04", "2025-08-06"),
            ],
            2025,
            8,
        )
        assert [event.stay.id for event in layout.events] == [1, 2]
        assert [event.week_index for event in layout.events] == [1, 3]

    def test_stay_with_unknown_payment_status_is_drawn(self):
        layout = layout_month(
            [{"id": "g1", "name": "Li", "checkInDate": "2025-08-04", "checkOutDate": "2025-08-06", "paymentStatus": "pending"}],
            2025,
            8,
        )
        (segment,) = _segments_of(layout, "g1")
        assert segment.stay.payment_status.value == "unpaid"

    def test_malformed_records_are_left_out(self):
        layout = layout_month(
            [
                _booking(1, "2025-08-04", "2025-08-06"),
                _booking(2, "2025-08-06", "2025-08-04"),
                {"id": 3, "name": "No dates"},
            ],
            2025,
            8,
        )
        assert {event.stay.id for event in layout.events} == {1}
        assert layout.lanes == {1: 0}

    def test_empty_snapshot(self):
        layout = layout_month([], 2025, 8)
        assert layout.events == []
        assert layout.lane_count == 0
        assert len(layout.days) == 42


class TestBookingsOnDay:
    BOOKINGS = [
        _booking(1, "2025-08-01", "2025-08-05"),
        _booking(2, "2025-08-05", "2025-08-08"),
        _booking(3, "2025-08-20", "2025-08-22"),
    ]

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            ("2025-08-01", [1]),
            ("2025-08-03", [1]),
            ("2025-08-05", [1, 2]),
            (date(2025, 8, 8), [2]),
            ("2025-08-12", []),
        ],
    )
    def test_day_lookup(self, day, expected):
        assert [record["id"] for record in bookings_on_day(self.BOOKINGS, day)] == expected

    def test_returns_original_records(self):
        assert bookings_on_day(self.BOOKINGS, "2025-08-21") == [self.BOOKINGS[2]]
