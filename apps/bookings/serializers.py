"""Serializers for the booking domain."""

from __future__ import annotations

from datetime import date
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.bookings.domain.validation import StayDateProblem, validate_stay_dates

from .models import Booking
from .services import create_booking, update_booking

User = get_user_model()

# Staff manage the shared calendar and never own bookings
HOSTS = User.objects.filter(is_active=True, is_staff=False)

STAY_DATE_MESSAGES = {
    StayDateProblem.MISSING_CHECK_IN: ("check_in", "Укажите дату заезда."),
    StayDateProblem.MISSING_CHECK_OUT: ("check_out", "Укажите дату выезда."),
    StayDateProblem.INVALID_CHECK_IN: ("check_in", "Неверный формат даты заезда."),
    StayDateProblem.INVALID_CHECK_OUT: ("check_out", "Неверный формат даты выезда."),
    StayDateProblem.CHECK_OUT_NOT_AFTER_CHECK_IN: (
        "check_out",
        "Дата выезда должна быть позже даты заезда (минимум одна ночь).",
    ),
}


def raise_for_stay_dates(check_in, check_out) -> None:
    problems = validate_stay_dates(check_in, check_out)
    if not problems:
        return
    errors: dict[str, list[str]] = {}
    for problem in problems:
        field, message = STAY_DATE_MESSAGES[problem]
        errors.setdefault(field, []).append(message)
    raise serializers.ValidationError(errors)


class BookingSerializer(serializers.ModelSerializer):
    """Детальный сериализатор бронирования."""

    owner_id = serializers.ReadOnlyField()
    nights = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "owner_id",
            "name",
            "phone",
            "check_in",
            "check_out",
            "nights",
            "payment_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.ModelSerializer):
    """Регистрация проживания гостем или хозяином."""

    host = serializers.PrimaryKeyRelatedField(
        queryset=HOSTS,
        required=False,
        allow_null=True,
        write_only=True,
    )
    check_in = serializers.DateField()
    check_out = serializers.DateField()

    class Meta:
        model = Booking
        fields = [
            "host",
            "name",
            "phone",
            "check_in",
            "check_out",
        ]
        extra_kwargs = {
            "phone": {"required": False, "allow_blank": True},
        }

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Укажите имя гостя.")
        return value

    def validate(self, attrs):  # type: ignore
        raise_for_stay_dates(attrs.get("check_in"), attrs.get("check_out"))
        return attrs

    def create(self, validated_data):  # type: ignore
        validated = dict(validated_data)
        validated.pop("host", None)
        owner = validated.pop("owner", None)
        return create_booking(owner, **validated)


class BookingUpdateSerializer(serializers.ModelSerializer):
    """Редактирование брони хозяином. Статус оплаты меняется отдельным действием."""

    class Meta:
        model = Booking
        fields = [
            "name",
            "phone",
            "check_in",
            "check_out",
        ]
        extra_kwargs = {
            "phone": {"required": False, "allow_blank": True},
        }

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Укажите имя гостя.")
        return value

    def validate(self, attrs):  # type: ignore
        instance: Booking | None = self.instance
        check_in = attrs.get("check_in", getattr(instance, "check_in", None))
        check_out = attrs.get("check_out", getattr(instance, "check_out", None))
        raise_for_stay_dates(check_in, check_out)
        return attrs

    def update(self, instance, validated_data):  # type: ignore
        return update_booking(instance, **validated_data)


class BookingConflictSerializer(serializers.ModelSerializer):
    """Конфликтующая бронь, как её видит хозяин."""

    class Meta:
        model = Booking
        fields = ["id", "name", "check_in", "check_out"]


class PublicConflictSerializer(serializers.ModelSerializer):
    """Конфликтующая бронь для гостя: только даты, без данных других гостей."""

    class Meta:
        model = Booking
        fields = ["check_in", "check_out"]


class AvailabilityCheckSerializer(serializers.Serializer):
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    exclude_id = serializers.IntegerField(required=False, allow_null=True)
    host = serializers.PrimaryKeyRelatedField(
        queryset=HOSTS,
        required=False,
        allow_null=True,
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        raise_for_stay_dates(attrs.get("check_in"), attrs.get("check_out"))
        return attrs


class SuggestionQuerySerializer(serializers.Serializer):
    start = serializers.DateField(required=False)
    horizon = serializers.IntegerField(required=False, min_value=1, max_value=365)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=31)
    host = serializers.PrimaryKeyRelatedField(
        queryset=HOSTS,
        required=False,
        allow_null=True,
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        attrs.setdefault("start", timezone.localdate())
        attrs.setdefault("horizon", settings.BOOKING_SUGGESTION_HORIZON_DAYS)
        attrs.setdefault("limit", settings.BOOKING_SUGGESTION_LIMIT)
        return attrs


class CalendarQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(required=False, min_value=1, max_value=9998)
    month = serializers.IntegerField(required=False, min_value=1, max_value=12)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        today = timezone.localdate()
        attrs.setdefault("year", today.year)
        attrs.setdefault("month", today.month)
        return attrs


class CalendarDayQuerySerializer(serializers.Serializer):
    date = serializers.DateField()


class CalendarEventSerializer(serializers.Serializer):
    """Один отрезок полосы брони внутри недели календаря."""

    booking_id = serializers.ReadOnlyField(source="stay.id")
    name = serializers.ReadOnlyField(source="stay.name")
    payment_status = serializers.ReadOnlyField(source="stay.payment_status.value")
    check_in = serializers.DateField(source="stay.check_in", read_only=True)
    check_out = serializers.DateField(source="stay.check_out", read_only=True)
    week_index = serializers.IntegerField(read_only=True)
    start_day = serializers.IntegerField(read_only=True)
    end_day = serializers.IntegerField(read_only=True)
    span = serializers.IntegerField(read_only=True)
    lane = serializers.IntegerField(read_only=True)
    top = serializers.IntegerField(read_only=True)
    show_label = serializers.BooleanField(read_only=True)


class MonthLayoutSerializer(serializers.Serializer):
    year = serializers.IntegerField(read_only=True)
    month = serializers.IntegerField(read_only=True)
    lane_count = serializers.IntegerField(read_only=True)
    days = serializers.ListField(child=serializers.DateField(), read_only=True)
    events = CalendarEventSerializer(many=True, read_only=True)


class BookingStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField(read_only=True)
    current = serializers.IntegerField(read_only=True)
    upcoming = serializers.IntegerField(read_only=True)
    completed = serializers.IntegerField(read_only=True)
    paid = serializers.IntegerField(read_only=True)
    unpaid = serializers.IntegerField(read_only=True)


def serialize_suggestions(suggestions: list[date]) -> list[str]:
    return [day.isoformat() for day in suggestions]
