"""
Slot Domain Entities

SlotCalendar is the aggregate for operator changes to one day of the
field. Bookings do not go through it; they lock slot rows directly.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import Aggregate
from shared.domain.value_objects import TimeLabel

from .events import SlotMaintenanceScheduled, SlotReleased


@dataclass(eq=False, kw_only=True)
class SlotCalendar(Aggregate):
    slot_date: date

    def schedule_maintenance(self, slot_id: int, label: TimeLabel):
        self.add_event(SlotMaintenanceScheduled(
            aggregate_id=self.id,
            slot_id=slot_id,
            slot_date=self.slot_date,
            slot_time=str(label),
        ))

    def release(self, slot_id: int, slot_time: str, previous_status: str):
        self.add_event(SlotReleased(
            aggregate_id=self.id,
            slot_id=slot_id,
            slot_date=self.slot_date,
            slot_time=slot_time,
            previous_status=previous_status,
        ))
