"""Serializers for the booking domain."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.users.models import User

from .models import Booking


class BookingRequestSerializer(serializers.Serializer):
    """Booking request as sent by the client.

    Date and time labels stay raw strings here; the booking handler parses
    them and reports InvalidDate / InvalidTimeFormat itself.
    """

    userId = serializers.IntegerField(min_value=1)
    bookingDate = serializers.CharField(max_length=32)
    slotTimeFrom = serializers.CharField(max_length=8)
    slotTimeTo = serializers.CharField(max_length=8)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))

    def validate_userId(self, value):  # type: ignore
        if not User.objects.filter(pk=value).exists():
            raise serializers.ValidationError("User not found.")
        return value


class VerifySlotsSerializer(serializers.Serializer):
    """Availability check: a list of hours, or a from/to range."""

    slotDate = serializers.CharField(max_length=32)
    slotTimes = serializers.ListField(
        child=serializers.CharField(max_length=8),
        required=False,
        allow_empty=True,
    )
    slotTimeFrom = serializers.CharField(max_length=8, required=False)
    slotTimeTo = serializers.CharField(max_length=8, required=False)

    def validate(self, attrs):  # type: ignore
        has_range = "slotTimeFrom" in attrs and "slotTimeTo" in attrs
        if "slotTimes" not in attrs and not has_range:
            raise serializers.ValidationError(
                "Provide slotTimes or both slotTimeFrom and slotTimeTo."
            )
        return attrs


class BookingSerializer(serializers.ModelSerializer):
    """Booking as listed to clients."""

    userId = serializers.ReadOnlyField(source="user_id")
    bookingDate = serializers.DateField(source="booking_date", read_only=True)
    slotTimeFrom = serializers.CharField(source="slot_time_from", read_only=True)
    slotTimeTo = serializers.CharField(source="slot_time_to", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "userId",
            "bookingDate",
            "slotTimeFrom",
            "slotTimeTo",
            "amount",
            "createdAt",
        ]
        read_only_fields = fields
