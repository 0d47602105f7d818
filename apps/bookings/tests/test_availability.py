"""Tests for next-available start date suggestions."""

from datetime import date, timedelta

from apps.bookings.domain.availability import suggest_available_starts
from apps.bookings.domain.conflicts import find_conflicts


def _booking(booking_id, check_in, check_out):
    return {"id": booking_id, "name": f"Guest {booking_id}", "check_in": check_in, "check_out": check_out}


def test_empty_calendar_returns_first_five_days():
    assert suggest_available_starts(date(2025, 8, 1), []) == [
        date(2025, 8, 1),
        date(2025, 8, 2),
        date(2025, 8, 3),
        date(2025, 8, 4),
        date(2025, 8, 5),
    ]


def test_check_out_day_of_existing_stay_is_offered():
    bookings = [_booking(1, "2025-08-01", "2025-08-04")]
    assert suggest_available_starts("2025-08-01", bookings) == [
        date(2025, 8, 4),
        date(2025, 8, 5),
        date(2025, 8, 6),
        date(2025, 8, 7),
        date(2025, 8, 8),
    ]


def test_horizon_includes_the_desired_start_and_stops_there():
    bookings = [_booking(1, "2025-08-02", "2025-08-03")]
    assert suggest_available_starts("2025-08-01", bookings, horizon_days=3) == [
        date(2025, 8, 1),
        date(2025, 8, 3),
    ]


def test_fully_booked_horizon_returns_nothing():
    bookings = [_booking(1, "2025-08-01", "2025-09-15")]
    assert suggest_available_starts("2025-08-01", bookings) == []


def test_max_results_limits_output():
    assert len(suggest_available_starts("2025-08-01", [], max_results=2)) == 2
    assert suggest_available_starts("2025-08-01", [], max_results=0) == []


def test_results_are_free_ascending_and_bounded():
    bookings = [
        _booking(1, "2025-08-01", "2025-08-03"),
        _booking(2, "2025-08-03", "2025-08-06"),
        _booking(3, "2025-08-07", "2025-08-08"),
        _booking(4, "2025-08-09", "2025-08-12"),
    ]
    suggestions = suggest_available_starts("2025-08-01", bookings, horizon_days=20, max_results=4)

    assert len(suggestions) <= 4
    assert suggestions == sorted(set(suggestions))
    for day in suggestions:
        assert find_conflicts(day, day + timedelta(days=1), bookings) == []
    assert suggestions[0] == date(2025, 8, 6)


def test_missing_start_or_unreadable_snapshot_gives_empty_list():
    assert suggest_available_starts(None, []) == []
    assert suggest_available_starts("", []) == []
    assert suggest_available_starts("31/12/2025", []) == []
    assert suggest_available_starts("2025-08-01", None) == []


def test_bad_records_do_not_hide_free_days():
    bookings = [{"id": 1, "name": "Broken", "check_in": "??", "check_out": "2025-08-05"}]
    assert suggest_available_starts("2025-08-01", bookings, max_results=1) == [date(2025, 8, 1)]
