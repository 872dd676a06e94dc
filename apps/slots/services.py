"""Domain services for operator-managed slots."""

from __future__ import annotations

from datetime import date
from typing import List

import structlog
from django.db import IntegrityError  # type: ignore
from django.utils import timezone  # type: ignore

from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import TimeLabel

from .domain.entities import SlotCalendar
from .models import Slot, SlotStatus

logger = structlog.get_logger(__name__)


class SlotAlreadyExists(Exception):
    """Raised when a maintenance slot is added over an existing row."""

    def __init__(self, slot_date: date, slot_time: str):
        self.slot_date = slot_date
        self.slot_time = slot_time
        super().__init__(f"A slot for {slot_date} at {slot_time} already exists.")


def add_maintenance_slot(slot_date: date, slot_time: str) -> Slot:
    """Create a Maintenance row for the hour.

    Raises:
        InvalidTimeLabel: ``slot_time`` is not a 12-hour label.
        SlotAlreadyExists: the hour already has a row (booked or in maintenance).
    """
    label = TimeLabel.parse(slot_time)
    calendar = SlotCalendar(slot_date=slot_date)

    with DjangoUnitOfWork() as uow:
        try:
            slot = Slot.objects.create(
                slot_date=slot_date,
                slot_time=str(label),
                status=SlotStatus.MAINTENANCE,
            )
        except IntegrityError:
            logger.info("slot.maintenance_duplicate", slot_date=str(slot_date), slot_time=str(label))
            raise SlotAlreadyExists(slot_date, str(label)) from None

        calendar.schedule_maintenance(slot.pk, label)
        uow.collect_events(calendar)

    return slot


def remove_slot(slot_id: int) -> Slot:
    """Delete a slot row, freeing the hour.

    Raises:
        Slot.DoesNotExist: no row with that id.
    """
    with DjangoUnitOfWork() as uow:
        slot = Slot.objects.select_for_update().get(pk=slot_id)
        calendar = SlotCalendar(slot_date=slot.slot_date)
        calendar.release(slot.pk, slot.slot_time, slot.status)
        slot.delete()
        uow.collect_events(calendar)

    return slot


def slots_for_date(slot_date: date) -> List[Slot]:
    """Slot rows for one date, earliest hour first."""
    return sorted(Slot.objects.filter(slot_date=slot_date), key=lambda slot: slot.hour)


def upcoming_slot_exceptions(today: date | None = None) -> List[Slot]:
    """Every slot row from ``today`` onward, by date then hour."""
    today = today or timezone.localdate()
    return sorted(
        Slot.objects.filter(slot_date__gte=today),
        key=lambda slot: (slot.slot_date, slot.hour),
    )
