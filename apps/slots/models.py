"""Slot models for the turf booking service."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import InvalidTimeLabel, TimeLabel


class SlotStatus(models.TextChoices):
    AVAILABLE = "Available", _("Available")
    UNAVAILABLE = "Unavailable", _("Unavailable")
    MAINTENANCE = "Maintenance", _("Maintenance")


class Slot(models.Model):
    """One hour of the field on one date.

    A missing row for a ``(slot_date, slot_time)`` pair means the hour is
    available. ``slot_time`` holds the canonical 12-hour label ("2 PM").
    """

    slot_date = models.DateField(_("Date"))
    slot_time = models.CharField(_("Time"), max_length=5)
    status = models.CharField(
        _("Status"),
        max_length=16,
        choices=SlotStatus.choices,
        default=SlotStatus.AVAILABLE,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Slot")
        verbose_name_plural = _("Slots")
        ordering = ["slot_date", "slot_time"]
        constraints = [
            models.UniqueConstraint(
                fields=["slot_date", "slot_time"],
                name="slot_date_time_unique",
            ),
        ]
        indexes = [
            models.Index(fields=["slot_date", "status"], name="slot_date_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.slot_date} {self.slot_time} ({self.status})"

    @property
    def hour(self) -> int:
        """Hour of day for sorting; rows with unreadable labels sort last."""
        try:
            return TimeLabel.parse(self.slot_time).hour
        except InvalidTimeLabel:
            return 24
