"""Admin registration for slots."""

from __future__ import annotations

from django.contrib import admin

from .models import Slot


@admin.register(Slot)
class SlotAdmin(admin.ModelAdmin):
    list_display = ("slot_date", "slot_time", "status", "created_at")
    list_filter = ("status", "slot_date")
    search_fields = ("slot_time",)
    date_hierarchy = "slot_date"
    readonly_fields = ("created_at",)
