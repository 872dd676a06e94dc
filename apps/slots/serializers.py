"""Serializers for the slot domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.domain.value_objects import InvalidTimeLabel, TimeLabel

from .models import Slot


class SlotSerializer(serializers.ModelSerializer):
    slotDate = serializers.DateField(source="slot_date", read_only=True)
    slotTime = serializers.CharField(source="slot_time", read_only=True)

    class Meta:
        model = Slot
        fields = ["id", "slotDate", "slotTime", "status"]
        read_only_fields = fields


class MaintenanceSlotSerializer(serializers.Serializer):
    """Operator request to take one hour out of service."""

    slotDate = serializers.DateField()
    slotTime = serializers.CharField(max_length=8)

    def validate_slotTime(self, value):  # type: ignore
        try:
            return TimeLabel.canonical(value)
        except InvalidTimeLabel as exc:
            raise serializers.ValidationError(str(exc))
