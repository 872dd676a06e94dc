"""Slot locking services for booking workflows.

Every booking and availability check goes through ``check_slots``, which
locks slot rows one at a time in the order given and reports what it found.
It never changes a slot; callers claim slots with ``claim_slot`` once every
lock they need is held.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator, Union

import structlog
from django.db import OperationalError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.slots.models import Slot, SlotStatus

logger = structlog.get_logger(__name__)

# PostgreSQL: could not obtain lock on row (FOR UPDATE NOWAIT)
LOCK_NOT_AVAILABLE = "55P03"


class LockMode(enum.Enum):
    BLOCKING = "blocking"
    NON_BLOCKING = "non_blocking"


@dataclass(frozen=True)
class SlotLocked:
    """The row lock is held (or there is no row); ``status`` is what was read."""

    label: str
    status: str

    @property
    def is_free(self) -> bool:
        return self.status == SlotStatus.AVAILABLE


@dataclass(frozen=True)
class LockUnavailable:
    """Another transaction holds the row; only produced in non-blocking mode."""

    label: str

    is_free = False


LockOutcome = Union[SlotLocked, LockUnavailable]


def _is_lock_not_available(exc: OperationalError) -> bool:
    cause = exc.__cause__
    code = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    return code == LOCK_NOT_AVAILABLE


def _lock_queryset_if_possible(queryset, *, nowait: bool = False):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection(queryset.db).in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update(nowait=nowait)
    except NotSupportedError:
        return queryset


def acquire_slot_lock(slot_date: date, label: str, mode: LockMode) -> LockOutcome:
    """Lock one slot row and read its status.

    Must run inside a transaction; the lock lasts until it ends. A missing
    row reads as Available. In non-blocking mode the attempt runs in its own
    savepoint, so a refused lock leaves the outer transaction usable.
    """
    queryset = Slot.objects.filter(slot_date=slot_date, slot_time=label).only("status")

    if mode is LockMode.BLOCKING:
        slot = _lock_queryset_if_possible(queryset).first()
        return SlotLocked(label, slot.status if slot else SlotStatus.AVAILABLE)

    try:
        with transaction.atomic():
            slot = _lock_queryset_if_possible(queryset, nowait=True).first()
    except OperationalError as exc:
        if _is_lock_not_available(exc):
            return LockUnavailable(label)
        raise
    return SlotLocked(label, slot.status if slot else SlotStatus.AVAILABLE)


def check_slots(slot_date: date, labels: Iterable[str], mode: LockMode) -> Iterator[LockOutcome]:
    """Lock and read each slot in order, one per iteration.

    Stopping iteration early leaves the remaining slots unlocked.
    """
    for label in labels:
        outcome = acquire_slot_lock(slot_date, label, mode)
        logger.debug(
            "slots.lock_attempt",
            slot_date=str(slot_date),
            slot_time=label,
            mode=mode.value,
            outcome=type(outcome).__name__,
            status=getattr(outcome, "status", None),
        )
        yield outcome


def reserve_slot_rows(slot_date: date, labels: Iterable[str]) -> None:
    """Insert an Available row for every slot that has none.

    Gives a never-booked hour a row to lock, so two bookings of it queue on
    the row lock instead of both reading "no row". Existing rows are untouched.
    """
    Slot.objects.bulk_create(
        [Slot(slot_date=slot_date, slot_time=label, status=SlotStatus.AVAILABLE) for label in labels],
        ignore_conflicts=True,
    )


def claim_slot(slot_date: date, label: str) -> Slot:
    """Mark a slot Unavailable, creating the row if needed."""
    slot, _ = Slot.objects.update_or_create(
        slot_date=slot_date,
        slot_time=label,
        defaults={"status": SlotStatus.UNAVAILABLE},
    )
    return slot
