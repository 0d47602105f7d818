"""Domain services for booking workflows.

Loads a per-owner snapshot from the database and hands it to the pure
engine in ``apps.bookings.domain``. The engine never writes; this module
is where validated writes happen and get logged.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import QuerySet  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.domain.availability import suggest_available_starts
from apps.bookings.domain.calendar import MonthLayout, bookings_on_day, layout_month
from apps.bookings.domain.conflicts import find_conflicts
from apps.bookings.domain.stats import StaySummary, summarize_stays

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .models import Booking

logger = logging.getLogger(__name__)


class BookingConflictError(Exception):
    """Raised when requested dates collide with existing stays."""

    def __init__(self, conflicts: list["Booking"], suggestions: list[date]):
        self.conflicts = conflicts
        self.suggestions = suggestions
        super().__init__("Выбранные даты пересекаются с другими бронированиями.")


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def owner_for(user) -> Any:
    """Partition key for a user: hosts own their bookings, staff share the ownerless ones."""

    if user is None or not user.is_authenticated or user.is_staff:
        return None
    return user


def bookings_for_owner(owner) -> QuerySet:
    from .models import Booking  # Local import to prevent circular dependency

    if owner is None:
        return Booking.objects.filter(owner__isnull=True)
    return Booking.objects.filter(owner=owner)


def suggestion_settings() -> tuple[int, int]:
    return settings.BOOKING_SUGGESTION_HORIZON_DAYS, settings.BOOKING_SUGGESTION_LIMIT


def ensure_dates_available(
    owner,
    check_in: date,
    check_out: date,
    *,
    exclude_booking_id=None,
) -> None:
    """Ensure the owner's calendar is free for [check_in, check_out)."""

    snapshot = list(_lock_queryset_if_possible(bookings_for_owner(owner)))
    conflicts = find_conflicts(check_in, check_out, snapshot, exclude_id=exclude_booking_id)
    if not conflicts:
        return

    horizon, limit = suggestion_settings()
    others = [booking for booking in snapshot if booking.pk != exclude_booking_id]
    suggestions = suggest_available_starts(check_in, others, horizon_days=horizon, max_results=limit)
    logger.info(
        f"Booking conflict for owner={getattr(owner, 'pk', None)} {check_in}..{check_out}: "
        f"{[booking.pk for booking in conflicts]}"
    )
    raise BookingConflictError(conflicts, suggestions)


def availability_report(owner, check_in: date, check_out: date, *, exclude_booking_id=None) -> dict[str, Any]:
    """Inline form check: conflicts plus alternatives, without raising."""

    snapshot = list(bookings_for_owner(owner))
    conflicts = find_conflicts(check_in, check_out, snapshot, exclude_id=exclude_booking_id)
    suggestions: list[date] = []
    if conflicts:
        horizon, limit = suggestion_settings()
        others = [booking for booking in snapshot if str(booking.pk) != str(exclude_booking_id)]
        suggestions = suggest_available_starts(check_in, others, horizon_days=horizon, max_results=limit)
    return {
        "available": not conflicts,
        "conflicts": conflicts,
        "suggestions": suggestions,
    }


def suggest_start_dates(owner, start: date, *, horizon: int | None = None, limit: int | None = None) -> list[date]:
    default_horizon, default_limit = suggestion_settings()
    return suggest_available_starts(
        start,
        bookings_for_owner(owner),
        horizon_days=horizon or default_horizon,
        max_results=limit or default_limit,
    )


@transaction.atomic
def create_booking(owner, **fields) -> "Booking":
    from .models import Booking

    ensure_dates_available(owner, fields["check_in"], fields["check_out"])
    booking = Booking.objects.create(owner=owner, **fields)
    logger.info(f"Booking created: id={booking.pk} owner={booking.owner_id} {booking.check_in}..{booking.check_out}")
    return booking


@transaction.atomic
def update_booking(booking: "Booking", **fields) -> "Booking":
    check_in = fields.get("check_in", booking.check_in)
    check_out = fields.get("check_out", booking.check_out)
    ensure_dates_available(booking.owner, check_in, check_out, exclude_booking_id=booking.pk)
    for name, value in fields.items():
        setattr(booking, name, value)
    booking.save()
    logger.info(f"Booking updated: id={booking.pk} {booking.check_in}..{booking.check_out}")
    return booking


def toggle_payment(booking: "Booking") -> "Booking":
    booking.toggle_payment()
    logger.info(f"Booking payment toggled: id={booking.pk} status={booking.payment_status}")
    return booking


def delete_booking(booking: "Booking") -> None:
    booking_id = booking.pk
    booking.delete()
    logger.info(f"Booking deleted: id={booking_id}")


def month_layout(owner, year: int, month: int) -> MonthLayout:
    return layout_month(bookings_for_owner(owner), year, month, row_height=settings.CALENDAR_ROW_HEIGHT)


def bookings_for_day(owner, day: date) -> list["Booking"]:
    return bookings_on_day(bookings_for_owner(owner), day)


def booking_stats(owner, today: date | None = None) -> StaySummary:
    return summarize_stays(bookings_for_owner(owner), today or timezone.localdate())
