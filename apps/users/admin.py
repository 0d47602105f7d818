"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (
            _("Host profile"),
            {"fields": ("display_name", "business_name", "phone", "email")},
        ),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined", "created_at", "updated_at")}),
    )
    list_display = (
        "username",
        "display_name",
        "business_name",
        "phone",
        "is_active",
        "is_staff",
    )
    list_filter = ("is_active", "is_staff")
    search_fields = ("username", "display_name", "business_name", "phone")
    ordering = ("username",)
    readonly_fields = ("created_at", "updated_at", "date_joined")
