"""FilterSet definitions for the host booking list."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.domain.entities import StayState

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """List filters: payment status, visible window and stay state."""

    payment_status = django_filters.ChoiceFilter(choices=Booking.PaymentStatus.choices)
    # Window filters keep every stay drawn inside [start, end], check-out day included
    start = django_filters.DateFilter(field_name="check_out", lookup_expr="gte")
    end = django_filters.DateFilter(field_name="check_in", lookup_expr="lte")
    stay_state = django_filters.ChoiceFilter(
        choices=[(state.value, state.value) for state in StayState],
        method="filter_stay_state",
    )

    class Meta:
        model = Booking
        fields = ["payment_status"]

    def filter_stay_state(self, queryset, name, value):  # type: ignore
        today = timezone.localdate()
        if value == StayState.UPCOMING.value:
            return queryset.filter(check_in__gt=today)
        if value == StayState.CURRENT.value:
            return queryset.filter(Q(check_in__lte=today) & Q(check_out__gte=today))
        return queryset.filter(check_out__lt=today)
