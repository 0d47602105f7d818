"""Integration tests for the month calendar endpoints."""

from __future__ import annotations

from datetime import date

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.users.models import User


class CalendarAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_host("Айгуль", "1111")
        self.first = Booking.objects.create(
            owner=self.host, name="Иван", check_in=date(2025, 8, 15), check_out=date(2025, 8, 18)
        )
        self.second = Booking.objects.create(
            owner=self.host,
            name="Мария",
            check_in=date(2025, 8, 18),
            check_out=date(2025, 8, 20),
            payment_status=Booking.PaymentStatus.PAID,
        )
        self.client.force_authenticate(self.host)

    def test_month_layout(self) -> None:
        response = self.client.get(reverse("booking-calendar"), {"year": 2025, "month": 8})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["year"], 2025)
        self.assertEqual(len(response.data["days"]), 42)
        self.assertEqual(str(response.data["days"][0]), "2025-07-27")
        # turnover stays share a lane
        self.assertEqual(response.data["lane_count"], 1)

        first_segments = [event for event in response.data["events"] if event["booking_id"] == self.first.pk]
        self.assertEqual(
            [(event["week_index"], event["start_day"], event["end_day"], event["show_label"]) for event in first_segments],
            [(2, 5, 6, True), (3, 0, 1, False)],
        )
        paid = [event for event in response.data["events"] if event["booking_id"] == self.second.pk]
        self.assertEqual({event["payment_status"] for event in paid}, {"paid"})
        self.assertEqual(paid[0]["top"], 0)

    @override_settings(CALENDAR_ROW_HEIGHT=40)
    def test_row_height_comes_from_settings(self) -> None:
        Booking.objects.create(owner=self.host, name="Пётр", check_in=date(2025, 8, 16), check_out=date(2025, 8, 17))

        response = self.client.get(reverse("booking-calendar"), {"year": 2025, "month": 8})

        tops = {event["name"]: event["top"] for event in response.data["events"]}
        self.assertEqual(tops["Пётр"], 40)

    def test_invalid_month(self) -> None:
        response = self.client.get(reverse("booking-calendar"), {"year": 2025, "month": 13})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_day_with_turnover_returns_both_bookings(self) -> None:
        response = self.client.get(reverse("booking-calendar-day"), {"date": "2025-08-18"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["id"] for item in response.data["bookings"]], [self.first.pk, self.second.pk])

    def test_empty_day(self) -> None:
        response = self.client.get(reverse("booking-calendar-day"), {"date": "2025-08-25"})
        self.assertEqual(response.data["bookings"], [])

    def test_calendar_is_private(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(reverse("booking-calendar"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
