"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class BookingCommitted(DomainEvent):
    """
    Event: A booking and its slot claims were committed

    Recorded once every write of the transaction is made; published only
    after the commit has released the slot locks.
    """
    booking_id: int
    user_id: int
    booking_date: date
    slot_time_from: str
    slot_time_to: str
    amount: Decimal
    slots: List[str] = field(default_factory=list)
