"""
Booking Command Handlers

The use cases of the booking domain. Each one runs inside a unit of work.

Commands:
- CreateBookingCommand: Book a run of hours for a user
- VerifySlotsCommand: Check whether slots could be booked right now
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

import structlog
from django.db import DatabaseError

from apps.bookings.domain.entities import BookingAttempt
from apps.bookings.domain.exceptions import (
    BookingError,
    SlotConflict,
    SlotUnderMaintenance,
    TransactionError,
)
from apps.bookings.domain.timeslots import (
    canonical_labels,
    expand_time_range,
    parse_booking_date,
)
from apps.bookings.models import Booking
from apps.bookings import services
from apps.bookings.services import LockMode, LockUnavailable
from apps.slots.models import SlotStatus
from apps.users.models import User
from shared.application.uow import DjangoUnitOfWork

logger = structlog.get_logger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """Command to book the hours from ``slot_time_from`` up to ``slot_time_to``"""
    user_id: int
    booking_date: str
    slot_time_from: str
    slot_time_to: str
    amount: Decimal


@dataclass
class VerifySlotsCommand:
    """
    Command to probe slot availability

    Either ``slot_times`` or a ``slot_time_from``/``slot_time_to`` pair.
    """
    slot_date: str
    slot_times: List[str] = field(default_factory=list)
    slot_time_from: Optional[str] = None
    slot_time_to: Optional[str] = None


# ===== Results =====

@dataclass
class BookingResult:
    booking_id: int
    booking_date: date
    slots: List[str]


@dataclass
class ProbeResult:
    slot_date: date
    slots: List[str]
    unavailable: List[str]

    @property
    def available(self) -> bool:
        return not self.unavailable


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Stages, all inside one transaction:
    1. Parse the date, expand the hours (no database access)
    2. Give every hour a slot row, then lock the rows in order, waiting for
       other transactions; stop at the first booked or maintenance slot
    3. Insert the booking
    4. Mark every slot Unavailable
    5. Stamp the user's last booking date
    6. Commit; BookingCommitted is published once the locks are released

    Any failure rolls the whole transaction back.
    """

    lock_mode = LockMode.BLOCKING

    def handle(self, command: CreateBookingCommand) -> BookingResult:
        """
        Raises:
            InvalidDate, InvalidTimeFormat: Malformed request, nothing touched
            SlotConflict, SlotUnderMaintenance: A slot cannot be claimed
            TransactionError: Storage failure or unknown user
        """
        attempt = BookingAttempt(
            user_id=command.user_id,
            raw_date=command.booking_date,
            slot_time_from=command.slot_time_from,
            slot_time_to=command.slot_time_to,
            amount=command.amount,
        )
        log = logger.bind(
            attempt_id=str(attempt.id),
            user_id=command.user_id,
            slot_time_from=command.slot_time_from,
            slot_time_to=command.slot_time_to,
        )
        log.info("booking.requested", booking_date=str(command.booking_date))

        try:
            attempt.parsed(parse_booking_date(command.booking_date))
            log = log.bind(booking_date=str(attempt.booking_date))
            log.info("booking.parsed")

            attempt.expanded(expand_time_range(command.slot_time_from, command.slot_time_to))
            log.info("booking.expanded", slots=attempt.slots, crosses_midnight=attempt.hours.crosses_midnight)

            with DjangoUnitOfWork() as uow:
                self._verify_and_lock(attempt, log)
                self._write(attempt, log)
                uow.collect_events(attempt)
        except BookingError as exc:
            attempt.aborted(exc.reason_kind)
            log.warning("booking.aborted", reason_kind=exc.reason_kind, error=str(exc), stage=attempt.history[-2].value)
            raise
        except DatabaseError as exc:
            attempt.aborted(TransactionError.reason_kind)
            log.error("booking.aborted", reason_kind=TransactionError.reason_kind, error=str(exc), stage=attempt.history[-2].value)
            raise TransactionError("The booking could not be saved.") from exc

        attempt.committed()
        log.info("booking.committed", booking_id=attempt.booking_id, slots=attempt.slots)
        return BookingResult(
            booking_id=attempt.booking_id,
            booking_date=attempt.booking_date,
            slots=attempt.slots,
        )

    def _verify_and_lock(self, attempt: BookingAttempt, log):
        labels = attempt.slots
        services.reserve_slot_rows(attempt.booking_date, labels)

        for outcome in services.check_slots(attempt.booking_date, labels, self.lock_mode):
            if isinstance(outcome, LockUnavailable):
                log.warning("booking.conflict", slot=outcome.label, status="locked")
                raise SlotConflict(outcome.label)
            if outcome.status == SlotStatus.UNAVAILABLE:
                log.warning("booking.conflict", slot=outcome.label, status=outcome.status)
                raise SlotConflict(outcome.label)
            if outcome.status == SlotStatus.MAINTENANCE:
                log.warning("booking.conflict", slot=outcome.label, status=outcome.status)
                raise SlotUnderMaintenance(outcome.label)

        attempt.locked()
        log.info("booking.locked", slots=len(labels))

    def _write(self, attempt: BookingAttempt, log):
        booking = Booking.objects.create(
            user_id=attempt.user_id,
            booking_date=attempt.booking_date,
            slot_time_from=attempt.slot_time_from,
            slot_time_to=attempt.slot_time_to,
            amount=attempt.amount,
        )
        attempt.inserted(booking.pk)
        log.info("booking.inserted", booking_id=booking.pk)

        for label in attempt.slots:
            services.claim_slot(attempt.booking_date, label)
        attempt.slots_claimed()
        log.info("booking.slots_claimed", slots=attempt.slots)

        updated = User.objects.filter(pk=attempt.user_id).update(last_booking_date=attempt.booking_date)
        if not updated:
            raise TransactionError(f"User {attempt.user_id} does not exist.")
        attempt.user_updated()
        log.info("booking.user_updated")


class VerifySlotsHandler:
    """
    Handler for VerifySlots command

    Locks every requested slot without waiting and reports the ones that
    are booked, under maintenance or held by another transaction. Nothing
    is ever committed.
    """

    lock_mode = LockMode.NON_BLOCKING

    def handle(self, command: VerifySlotsCommand) -> ProbeResult:
        """
        Raises:
            InvalidDate, InvalidTimeFormat: Malformed request
        """
        slot_date = parse_booking_date(command.slot_date)
        if command.slot_time_from is not None and command.slot_time_to is not None:
            labels = expand_time_range(command.slot_time_from, command.slot_time_to).labels()
        else:
            labels = canonical_labels(command.slot_times)

        log = logger.bind(slot_date=str(slot_date))
        log.info("probe.started", slots=labels)

        unavailable: List[str] = []
        with DjangoUnitOfWork(discard=True):
            for outcome in services.check_slots(slot_date, labels, self.lock_mode):
                if isinstance(outcome, LockUnavailable):
                    log.info("probe.slot_contended", slot=outcome.label)
                    unavailable.append(outcome.label)
                elif not outcome.is_free:
                    unavailable.append(outcome.label)

        result = ProbeResult(slot_date=slot_date, slots=labels, unavailable=unavailable)
        log.info("probe.completed", unavailable=unavailable, available=result.available)
        return result
