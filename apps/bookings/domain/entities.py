"""
Booking Domain Entities

- BookingStage: The stages a booking transaction moves through
- BookingAttempt: Aggregate tracking one booking request from parse to commit
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from shared.domain.base import Aggregate
from shared.domain.value_objects import HourRange


class BookingStage(Enum):
    """
    Booking transaction state machine

    Stages run strictly in order:
    REQUESTED -> PARSED -> EXPANDED -> LOCKED -> INSERTED
              -> SLOTS_CLAIMED -> USER_UPDATED -> COMMITTED

    ABORTED is reachable from every stage except COMMITTED.
    """
    REQUESTED = 'requested'
    PARSED = 'parsed'
    EXPANDED = 'expanded'
    LOCKED = 'locked'
    INSERTED = 'inserted'
    SLOTS_CLAIMED = 'slots_claimed'
    USER_UPDATED = 'user_updated'
    COMMITTED = 'committed'
    ABORTED = 'aborted'


_NEXT_STAGE = {
    BookingStage.REQUESTED: BookingStage.PARSED,
    BookingStage.PARSED: BookingStage.EXPANDED,
    BookingStage.EXPANDED: BookingStage.LOCKED,
    BookingStage.LOCKED: BookingStage.INSERTED,
    BookingStage.INSERTED: BookingStage.SLOTS_CLAIMED,
    BookingStage.SLOTS_CLAIMED: BookingStage.USER_UPDATED,
    BookingStage.USER_UPDATED: BookingStage.COMMITTED,
}


class InvalidStageTransition(Exception):
    """Raised when a stage is entered out of order"""


@dataclass(eq=False, kw_only=True)
class BookingAttempt(Aggregate):
    """
    Booking Attempt Aggregate Root

    Holds what one booking request has established so far. The handler
    advances it one stage at a time; each method checks that the previous
    stage was reached.
    """
    user_id: int
    raw_date: str
    slot_time_from: str
    slot_time_to: str
    amount: Decimal

    stage: BookingStage = BookingStage.REQUESTED
    booking_date: Optional[date] = None
    hours: Optional[HourRange] = None
    booking_id: Optional[int] = None
    failure: Optional[str] = None
    history: List[BookingStage] = field(default_factory=lambda: [BookingStage.REQUESTED])

    def _advance(self, target: BookingStage):
        expected = _NEXT_STAGE.get(self.stage)
        if expected is not target:
            raise InvalidStageTransition(
                f"Cannot move booking attempt from {self.stage.value} to {target.value}"
            )
        self.stage = target
        self.history.append(target)

    def parsed(self, booking_date: date):
        self._advance(BookingStage.PARSED)
        self.booking_date = booking_date

    def expanded(self, hours: HourRange):
        self._advance(BookingStage.EXPANDED)
        self.hours = hours

    def locked(self):
        self._advance(BookingStage.LOCKED)

    def inserted(self, booking_id: int):
        self._advance(BookingStage.INSERTED)
        self.booking_id = booking_id

    def slots_claimed(self):
        self._advance(BookingStage.SLOTS_CLAIMED)

    def user_updated(self):
        """
        Last write of the transaction is done

        Events: BookingCommitted (published by the unit of work only if the
        transaction then commits)
        """
        self._advance(BookingStage.USER_UPDATED)

        from apps.bookings.domain.events import BookingCommitted

        self.add_event(BookingCommitted(
            aggregate_id=self.id,
            booking_id=self.booking_id,
            user_id=self.user_id,
            booking_date=self.booking_date,
            slot_time_from=self.slot_time_from,
            slot_time_to=self.slot_time_to,
            amount=self.amount,
            slots=self.slots,
        ))

    def committed(self):
        self._advance(BookingStage.COMMITTED)

    def aborted(self, reason: str):
        if self.stage is BookingStage.COMMITTED:
            raise InvalidStageTransition("A committed booking attempt cannot be aborted")
        self.failure = reason
        self.stage = BookingStage.ABORTED
        self.history.append(BookingStage.ABORTED)
        self.clear_events()

    @property
    def slots(self) -> List[str]:
        return self.hours.labels() if self.hours is not None else []

    @property
    def is_committed(self) -> bool:
        return self.stage is BookingStage.COMMITTED
