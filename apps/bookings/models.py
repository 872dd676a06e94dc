"""Booking models for the turf booking service."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import HourRange


class Booking(models.Model):
    """A user's reservation of a run of hours on one date.

    The hours are not linked to slot rows; ``covered_slots()`` recomputes
    them from the stored labels.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    booking_date = models.DateField(_("Booking date"))
    slot_time_from = models.CharField(_("From"), max_length=8)
    slot_time_to = models.CharField(_("To"), max_length=8)
    amount = models.DecimalField(
        _("Amount"),
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-booking_date", "slot_time_from"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=0),
                name="booking_amount_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "booking_date"], name="booking_user_date_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.booking_date} {self.slot_time_from}-{self.slot_time_to}"

    @property
    def hour_range(self) -> HourRange:
        return HourRange.from_labels(self.slot_time_from, self.slot_time_to)

    def covered_slots(self) -> List[str]:
        """Slot labels this booking holds."""
        return self.hour_range.labels()
