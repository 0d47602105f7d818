"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "phone",
        "owner",
        "check_in",
        "check_out",
        "payment_status",
        "created_at",
    )
    list_filter = ("payment_status", "check_in", "check_out", "owner")
    search_fields = ("name", "phone", "owner__business_name", "owner__display_name")
    date_hierarchy = "check_in"
    readonly_fields = (
        "created_at",
        "updated_at",
    )
