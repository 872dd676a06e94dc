"""
Slot Domain Events

Published after the maintenance change that raised them has committed.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class SlotMaintenanceScheduled(DomainEvent):
    """Event: an hour was taken out of service"""
    slot_id: int
    slot_date: date
    slot_time: str


@dataclass(kw_only=True)
class SlotReleased(DomainEvent):
    """
    Event: a slot row was removed

    ``previous_status`` tells a released maintenance window apart from a
    booked hour freed by an operator.
    """
    slot_id: int
    slot_date: date
    slot_time: str
    previous_status: str
