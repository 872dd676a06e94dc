"""API views for the booking domain."""

from __future__ import annotations

import structlog
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.domain.value_objects import InvalidTimeLabel

from .application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
    VerifySlotsCommand,
    VerifySlotsHandler,
)
from .domain.exceptions import (
    ConflictError,
    InputError,
    SlotConflict,
    TransactionError,
)
from .filters import BookingFilter
from .models import Booking
from .serializers import BookingRequestSerializer, BookingSerializer, VerifySlotsSerializer

logger = structlog.get_logger(__name__)


def _error_response(exc) -> Response:
    if isinstance(exc, ConflictError):
        code = status.HTTP_409_CONFLICT if isinstance(exc, SlotConflict) else status.HTTP_400_BAD_REQUEST
        return Response(
            {"conflictSlot": exc.slot, "reasonKind": exc.reason_kind, "message": str(exc)},
            status=code,
        )
    if isinstance(exc, InputError):
        return Response(
            {"reasonKind": exc.reason_kind, "detail": exc.detail},
            status=status.HTTP_400_BAD_REQUEST,
        )
    return Response(
        {"reasonKind": exc.reason_kind, "detail": exc.detail},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class BookingViewSet(viewsets.GenericViewSet):
    """Booking, availability checks and booking listings."""

    queryset = Booking.objects.select_related("user").all()
    serializer_class = BookingSerializer
    filterset_class = BookingFilter

    def get_serializer_class(self):  # type: ignore
        if self.action == "book":
            return BookingRequestSerializer
        if self.action == "verify":
            return VerifySlotsSerializer
        return BookingSerializer

    @action(detail=False, methods=["post"])
    def book(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        command = CreateBookingCommand(
            user_id=data["userId"],
            booking_date=data["bookingDate"],
            slot_time_from=data["slotTimeFrom"],
            slot_time_to=data["slotTimeTo"],
            amount=data["amount"],
        )
        try:
            result = CreateBookingHandler().handle(command)
        except (InputError, ConflictError, TransactionError) as exc:
            return _error_response(exc)
        return Response(
            {"bookingId": result.booking_id, "slots": result.slots, "message": "Booking successful"},
            status=status.HTTP_200_OK,
        )

    @action(detail=False, methods=["post"])
    def verify(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        command = VerifySlotsCommand(
            slot_date=data["slotDate"],
            slot_times=data.get("slotTimes") or [],
            slot_time_from=data.get("slotTimeFrom"),
            slot_time_to=data.get("slotTimeTo"),
        )
        try:
            result = VerifySlotsHandler().handle(command)
        except InputError as exc:
            return _error_response(exc)

        if result.available:
            message = "All slots are available"
        else:
            message = "Slots " + ", ".join(result.unavailable) + " are not available"
        return Response(
            {
                "unavailable": result.unavailable,
                "available": result.available,
                "status": "Available" if result.available else "Unavailable",
                "message": message,
            }
        )

    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>\d+)")
    def user(self, request, user_id=None):  # type: ignore
        queryset = self.get_queryset().filter(user_id=user_id)
        serializer = BookingSerializer(queryset, many=True)
        return Response(serializer.data)

    @action(detail=False, methods=["get"], url_path="all")
    def all_bookings(self, request):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        serializer = BookingSerializer(queryset, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=["get"])
    def slots(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        try:
            labels = booking.covered_slots()
        except InvalidTimeLabel:
            logger.error("booking.unreadable_labels", booking_id=booking.pk)
            return Response(
                {"detail": "Booking has unreadable time labels."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(
            {
                "bookingId": booking.pk,
                "bookingDate": booking.booking_date.isoformat(),
                "slots": labels,
            }
        )
