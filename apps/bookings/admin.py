"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from shared.domain.value_objects import InvalidTimeLabel

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "booking_date",
        "slot_time_from",
        "slot_time_to",
        "amount",
        "created_at",
    )
    list_filter = ("booking_date",)
    search_fields = ("user__email", "user__phone")
    date_hierarchy = "booking_date"
    readonly_fields = ("created_at", "covered_slots")
    list_select_related = ("user",)

    @admin.display(description="Slots")
    def covered_slots(self, obj: Booking) -> str:
        try:
            return ", ".join(obj.covered_slots())
        except InvalidTimeLabel:
            return "-"
