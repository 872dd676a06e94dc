"""Row-locking behaviour that only a real PostgreSQL server shows.

SQLite ignores SELECT ... FOR UPDATE, so these tests are skipped there.
Each test drives a second transaction from its own thread (and so its own
database connection).
"""

from __future__ import annotations

import threading
import time
from datetime import date
from decimal import Decimal
from unittest import skipUnless

from django.db import connection, transaction
from django.test import TransactionTestCase

from apps.bookings.application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
    VerifySlotsCommand,
    VerifySlotsHandler,
)
from apps.bookings.domain.exceptions import SlotConflict
from apps.bookings.models import Booking
from apps.slots.models import Slot, SlotStatus
from apps.users.models import User

DAY = date(2030, 9, 1)


def _in_thread(target, *args):
    """Run ``target`` in a thread that closes its connection when done."""

    def run():
        try:
            target(*args)
        finally:
            connection.close()

    thread = threading.Thread(target=run)
    thread.start()
    return thread


@skipUnless(connection.vendor == "postgresql", "row locks need PostgreSQL")
class SlotLockingTests(TransactionTestCase):

    def setUp(self) -> None:
        self.user = User.objects.create_user(email="lock@example.com", password="LockPass123")

    def _command(self, start: str, end: str) -> CreateBookingCommand:
        return CreateBookingCommand(
            user_id=self.user.pk,
            booking_date=DAY.isoformat(),
            slot_time_from=start,
            slot_time_to=end,
            amount=Decimal("20.00"),
        )

    def test_probe_does_not_wait_for_held_row(self) -> None:
        Slot.objects.create(slot_date=DAY, slot_time="3 PM", status=SlotStatus.AVAILABLE)
        locked = threading.Event()
        release = threading.Event()

        def hold_lock():
            with transaction.atomic():
                Slot.objects.select_for_update().get(slot_date=DAY, slot_time="3 PM")
                locked.set()
                release.wait(timeout=10)

        holder = _in_thread(hold_lock)
        try:
            self.assertTrue(locked.wait(timeout=10))
            started = time.monotonic()
            result = VerifySlotsHandler().handle(
                VerifySlotsCommand(slot_date=DAY.isoformat(), slot_times=["2 PM", "3 PM"])
            )
            elapsed = time.monotonic() - started
        finally:
            release.set()
            holder.join(timeout=10)

        self.assertEqual(result.unavailable, ["3 PM"])
        self.assertLess(elapsed, 5)

    def test_booking_waits_for_held_row_then_sees_claim(self) -> None:
        Slot.objects.create(slot_date=DAY, slot_time="5 PM", status=SlotStatus.AVAILABLE)
        locked = threading.Event()
        outcome = {}

        def claim_slowly():
            with transaction.atomic():
                slot = Slot.objects.select_for_update().get(slot_date=DAY, slot_time="5 PM")
                locked.set()
                time.sleep(0.5)
                slot.status = SlotStatus.UNAVAILABLE
                slot.save(update_fields=["status"])

        def book():
            try:
                CreateBookingHandler().handle(self._command("5 PM", "6 PM"))
                outcome["result"] = "booked"
            except SlotConflict as exc:
                outcome["result"] = exc.slot

        holder = _in_thread(claim_slowly)
        self.assertTrue(locked.wait(timeout=10))
        booker = _in_thread(book)
        holder.join(timeout=10)
        booker.join(timeout=10)

        self.assertEqual(outcome["result"], "5 PM")
        self.assertFalse(Booking.objects.exists())

    def test_concurrent_bookings_of_new_slot_only_one_wins(self) -> None:
        barrier = threading.Barrier(2)
        results = []

        def book():
            barrier.wait(timeout=10)
            try:
                CreateBookingHandler().handle(self._command("7 PM", "9 PM"))
                results.append("booked")
            except SlotConflict as exc:
                results.append(f"conflict:{exc.slot}")

        threads = [_in_thread(book), _in_thread(book)]
        for thread in threads:
            thread.join(timeout=20)

        self.assertEqual(sorted(results), ["booked", "conflict:7 PM"])
        self.assertEqual(Booking.objects.count(), 1)
        self.assertEqual(
            set(Slot.objects.filter(slot_date=DAY).values_list("slot_time", "status")),
            {("7 PM", SlotStatus.UNAVAILABLE), ("8 PM", SlotStatus.UNAVAILABLE)},
        )
