"""API views for the booking domain."""

from __future__ import annotations

from drf_spectacular.utils import extend_schema  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .filters import BookingFilterSet
from .models import Booking
from .serializers import (
    AvailabilityCheckSerializer,
    BookingConflictSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatsSerializer,
    BookingUpdateSerializer,
    CalendarDayQuerySerializer,
    CalendarQuerySerializer,
    MonthLayoutSerializer,
    PublicConflictSerializer,
    SuggestionQuerySerializer,
    serialize_suggestions,
)
from .services import (
    BookingConflictError,
    availability_report,
    booking_stats,
    bookings_for_day,
    bookings_for_owner,
    delete_booking,
    month_layout,
    owner_for,
    suggest_start_dates,
    toggle_payment as toggle_booking_payment,
)


# Guests use these without an account
PUBLIC_ACTIONS = {"create", "check_availability", "suggestions"}


class IsBookingOwner(permissions.BasePermission):
    """Доступ к брони есть только у хозяина её календаря."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        owner = owner_for(request.user)
        return obj.owner_id == getattr(owner, "id", None)


class BookingViewSet(viewsets.ModelViewSet):
    """Viewset для регистрации гостей и управления бронированиями хозяина."""

    queryset = Booking.objects.select_related("owner").all()
    filterset_class = BookingFilterSet
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), IsBookingOwner()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action in {"update", "partial_update"}:
            return BookingUpdateSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        user = self.request.user
        if not user.is_authenticated:
            return super().get_queryset().none()
        return bookings_for_owner(owner_for(user)).select_related("owner")

    def _resolve_owner(self, host=None):
        """Logged-in hosts book into their own calendar, guests into the host from the form link."""

        if self.request.user.is_authenticated:
            return owner_for(self.request.user)
        return host

    def _conflicts_data(self, conflicts):
        serializer_class = BookingConflictSerializer if self.request.user.is_authenticated else PublicConflictSerializer
        return serializer_class(conflicts, many=True).data

    def _conflict_response(self, exc: BookingConflictError) -> Response:
        return Response(
            {
                "non_field_errors": [str(exc)],
                "conflicts": self._conflicts_data(exc.conflicts),
                "suggestions": serialize_suggestions(exc.suggestions),
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        owner = self._resolve_owner(serializer.validated_data.get("host"))
        try:
            booking = serializer.save(owner=owner)
        except BookingConflictError as exc:
            return self._conflict_response(exc)
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        try:
            booking = serializer.save()
        except BookingConflictError as exc:
            return self._conflict_response(exc)
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_200_OK)

    def perform_destroy(self, instance):  # type: ignore
        delete_booking(instance)

    @action(detail=True, methods=["post"], url_path="toggle-payment")
    def toggle_payment(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        toggle_booking_payment(booking)
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @extend_schema(request=AvailabilityCheckSerializer)
    @action(detail=False, methods=["post"], url_path="check-availability")
    def check_availability(self, request):  # type: ignore
        serializer = AvailabilityCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        report = availability_report(
            self._resolve_owner(data.get("host")),
            data["check_in"],
            data["check_out"],
            exclude_booking_id=data.get("exclude_id"),
        )
        return Response(
            {
                "available": report["available"],
                "conflicts": self._conflicts_data(report["conflicts"]),
                "suggestions": serialize_suggestions(report["suggestions"]),
            }
        )

    @extend_schema(parameters=[SuggestionQuerySerializer])
    @action(detail=False, methods=["get"])
    def suggestions(self, request):  # type: ignore
        serializer = SuggestionQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        dates = suggest_start_dates(
            self._resolve_owner(data.get("host")),
            data["start"],
            horizon=data["horizon"],
            limit=data["limit"],
        )
        return Response({"start": data["start"], "suggestions": serialize_suggestions(dates)})

    @extend_schema(parameters=[CalendarQuerySerializer], responses=MonthLayoutSerializer)
    @action(detail=False, methods=["get"])
    def calendar(self, request):  # type: ignore
        serializer = CalendarQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        layout = month_layout(
            owner_for(request.user),
            serializer.validated_data["year"],
            serializer.validated_data["month"],
        )
        return Response(MonthLayoutSerializer(layout).data)

    @extend_schema(parameters=[CalendarDayQuerySerializer])
    @action(detail=False, methods=["get"], url_path="calendar/day")
    def calendar_day(self, request):  # type: ignore
        serializer = CalendarDayQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        day = serializer.validated_data["date"]
        bookings = bookings_for_day(owner_for(request.user), day)
        return Response(
            {
                "date": day,
                "bookings": BookingSerializer(bookings, many=True, context=self.get_serializer_context()).data,
            }
        )

    @extend_schema(responses=BookingStatsSerializer)
    @action(detail=False, methods=["get"])
    def stats(self, request):  # type: ignore
        summary = booking_stats(owner_for(request.user))
        return Response(BookingStatsSerializer(summary).data)
