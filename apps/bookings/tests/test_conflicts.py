"""Tests for overlap detection with same-day turnover allowed."""

from datetime import date
from types import SimpleNamespace

import pytest

from apps.bookings.domain.conflicts import find_conflicts


def _booking(booking_id, check_in, check_out, **extra):
    return {
        "id": booking_id,
        "name": f"Guest {booking_id}",
        "check_in": check_in,
        "check_out": check_out,
        **extra,
    }


AUGUST = [_booking(1, "2025-08-15", "2025-08-18")]


def test_check_in_on_existing_check_out_day_is_free():
    assert find_conflicts("2025-08-18", "2025-08-20", AUGUST) == []


def test_check_out_on_existing_check_in_day_is_free():
    assert find_conflicts("2025-08-12", "2025-08-15", AUGUST) == []


def test_shared_night_is_a_conflict():
    assert find_conflicts("2025-08-17", "2025-08-19", AUGUST) == AUGUST


@pytest.mark.parametrize(
    ("existing", "candidate"),
    [
        (("2025-03-01", "2025-03-05"), ("2025-03-03", "2025-03-07")),
        (("2025-03-03", "2025-03-07"), ("2025-03-01", "2025-03-05")),
        (("2025-03-01", "2025-03-10"), ("2025-03-04", "2025-03-05")),
        (("2025-03-04", "2025-03-05"), ("2025-03-01", "2025-03-10")),
        (("2025-03-01", "2025-03-05"), ("2025-03-01", "2025-03-05")),
    ],
)
def test_interior_overlap_is_reported_both_ways(existing, candidate):
    booking = _booking(7, *existing)
    assert find_conflicts(candidate[0], candidate[1], [booking]) == [booking]


def test_exclude_id_skips_the_booking_being_edited():
    assert find_conflicts("2025-08-15", "2025-08-18", AUGUST, exclude_id=1) == []
    # ids from query strings arrive as text
    assert find_conflicts("2025-08-16", "2025-08-19", AUGUST, exclude_id="1") == []


def test_exclude_id_keeps_other_conflicts():
    bookings = AUGUST + [_booking(2, "2025-08-16", "2025-08-17")]
    assert find_conflicts("2025-08-15", "2025-08-18", bookings, exclude_id=1) == [bookings[1]]


def test_results_keep_input_order():
    bookings = [
        _booking(3, "2025-08-10", "2025-08-12"),
        _booking(1, "2025-08-01", "2025-08-03"),
        _booking(2, "2025-08-05", "2025-08-06"),
    ]
    assert find_conflicts("2025-08-02", "2025-08-11", bookings) == bookings


def test_accepts_dates_datetimes_and_camel_case_records():
    bookings = [
        {"id": "a", "name": "Ann", "checkInDate": date(2025, 8, 1), "checkOutDate": "2025-08-04T00:00:00"},
    ]
    assert find_conflicts(date(2025, 8, 3), date(2025, 8, 5), bookings) == bookings


def test_accepts_orm_like_objects():
    row = SimpleNamespace(
        id=5,
        name="Bob",
        phone="",
        check_in=date(2025, 9, 1),
        check_out=date(2025, 9, 3),
        payment_status="paid",
        owner_id=None,
    )
    assert find_conflicts("2025-09-02", "2025-09-04", [row]) == [row]


def test_malformed_records_are_skipped():
    good = _booking(1, "2025-08-15", "2025-08-18")
    bookings = [
        {"id": 2, "name": "No checkout", "check_in": "2025-08-15"},
        _booking(3, "not-a-date", "2025-08-18"),
        _booking(4, "2025-08-18", "2025-08-15"),
        _booking(5, "2025-08-16", "2025-08-16"),
        _booking(6, "2025-08-15junk", "2025-08-18"),
        {"name": "No id", "check_in": "2025-08-15", "check_out": "2025-08-18"},
        good,
    ]
    assert find_conflicts("2025-08-16", "2025-08-17", bookings) == [good]


def test_stay_with_unknown_payment_status_still_conflicts():
    document = {
        "id": "g1",
        "name": "Li",
        "checkInDate": "2025-08-15",
        "checkOutDate": "2025-08-18",
        "paymentStatus": "refunded",
    }
    assert find_conflicts("2025-08-16", "2025-08-17", [document]) == [document]


def test_exported_document_with_upper_case_status_conflicts():
    document = {
        "id": "g1",
        "name": "Li",
        "checkInDate": "2025-08-15",
        "checkOutDate": "2025-08-18",
        "paymentStatus": "PAID",
        "landlordId": "h1",
    }
    assert find_conflicts("2025-08-16", "2025-08-17", [document]) == [document]
