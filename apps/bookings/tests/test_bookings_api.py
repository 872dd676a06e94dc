"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings import services
from apps.bookings.models import Booking
from apps.bookings.serializers import BookingRequestSerializer
from apps.slots.models import Slot, SlotStatus
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers booking, conflicts, availability checks and listings."""

    def setUp(self) -> None:
        self.player = User.objects.create_user(
            email="player@example.com",
            phone="+77000000002",
            password="PlayerPass123",
        )
        self.other = User.objects.create_user(
            email="other@example.com",
            phone="+77000000003",
            password="OtherPass123",
        )
        self.book_url = reverse("booking-book")
        self.verify_url = reverse("booking-verify")

    def _payload(self, start: str, end: str, **overrides) -> dict:
        payload = {
            "userId": self.player.pk,
            "bookingDate": "2030-07-01",
            "slotTimeFrom": start,
            "slotTimeTo": end,
            "amount": "60.00",
        }
        payload.update(overrides)
        return payload

    def test_player_can_book_hours(self) -> None:
        response = self.client.post(self.book_url, self._payload("6 PM", "8 PM"), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking = Booking.objects.get(pk=response.data["bookingId"])
        self.assertEqual(booking.user, self.player)
        self.assertEqual(booking.amount, Decimal("60.00"))
        self.assertEqual(response.data["slots"], ["6 PM", "7 PM"])
        self.assertEqual(
            set(Slot.objects.filter(slot_date=date(2030, 7, 1)).values_list("slot_time", "status")),
            {("6 PM", SlotStatus.UNAVAILABLE), ("7 PM", SlotStatus.UNAVAILABLE)},
        )

    def test_booked_slot_returns_conflict(self) -> None:
        self.client.post(self.book_url, self._payload("6 PM", "8 PM"), format="json")

        response = self.client.post(
            self.book_url,
            self._payload("7 PM", "9 PM", userId=self.other.pk),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["conflictSlot"], "7 PM")
        self.assertEqual(response.data["reasonKind"], "SlotConflict")
        self.assertEqual(Booking.objects.count(), 1)
        self.assertFalse(Slot.objects.filter(slot_time="8 PM").exists())

    def test_maintenance_slot_returns_bad_request(self) -> None:
        Slot.objects.create(slot_date=date(2030, 7, 1), slot_time="9 AM", status=SlotStatus.MAINTENANCE)

        response = self.client.post(self.book_url, self._payload("8 AM", "10 AM"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["conflictSlot"], "9 AM")
        self.assertEqual(response.data["reasonKind"], "SlotUnderMaintenance")
        self.assertFalse(Booking.objects.exists())

    def test_bad_time_label_is_rejected(self) -> None:
        response = self.client.post(self.book_url, self._payload("6 PM", "20:00"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["reasonKind"], "InvalidTimeFormat")
        self.assertIn("20:00", response.data["detail"])

    def test_bad_date_is_rejected(self) -> None:
        response = self.client.post(
            self.book_url,
            self._payload("6 PM", "7 PM", bookingDate="July 1st"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["reasonKind"], "InvalidDate")

    def test_missing_fields_fail_validation(self) -> None:
        response = self.client.post(self.book_url, {"userId": self.player.pk}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("slotTimeFrom", response.data)
        self.assertIn("amount", response.data)

    def test_unknown_user_fails_validation(self) -> None:
        response = self.client.post(self.book_url, self._payload("6 PM", "7 PM", userId=99999), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("userId", response.data)

    def test_negative_amount_fails_validation(self) -> None:
        response = self.client.post(self.book_url, self._payload("6 PM", "7 PM", amount="-1.00"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("amount", response.data)

    def test_storage_failure_returns_server_error(self) -> None:
        with mock.patch.object(services, "claim_slot", side_effect=DatabaseError("connection reset")):
            response = self.client.post(self.book_url, self._payload("6 PM", "8 PM"), format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["reasonKind"], "TransactionError")
        self.assertNotIn("connection reset", response.data["detail"])
        self.assertFalse(Booking.objects.exists())
        self.assertFalse(Slot.objects.exists())

    def test_verify_reports_free_slots(self) -> None:
        response = self.client.post(
            self.verify_url,
            {"slotDate": "2030-07-01", "slotTimes": ["6 PM", "7 PM"]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["available"])
        self.assertEqual(response.data["unavailable"], [])
        self.assertEqual(response.data["status"], "Available")

    def test_verify_after_booking_reports_every_slot(self) -> None:
        self.client.post(self.book_url, self._payload("6 PM", "9 PM"), format="json")

        response = self.client.post(
            self.verify_url,
            {"slotDate": "2030-07-01", "slotTimes": ["5 PM", "6 PM", "7 PM", "8 PM"]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(response.data["available"])
        self.assertEqual(response.data["unavailable"], ["6 PM", "7 PM", "8 PM"])
        self.assertEqual(response.data["status"], "Unavailable")
        self.assertIn("6 PM", response.data["message"])

    def test_verify_accepts_a_range(self) -> None:
        Slot.objects.create(slot_date=date(2030, 7, 1), slot_time="11 PM", status=SlotStatus.MAINTENANCE)

        response = self.client.post(
            self.verify_url,
            {"slotDate": "2030-07-01", "slotTimeFrom": "10 PM", "slotTimeTo": "12 AM"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["unavailable"], ["11 PM"])

    def test_verify_needs_times(self) -> None:
        response = self.client.post(self.verify_url, {"slotDate": "2030-07-01"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_verify_empty_list_is_available(self) -> None:
        response = self.client.post(
            self.verify_url,
            {"slotDate": "2030-07-01", "slotTimes": []},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["unavailable"], [])
        self.assertTrue(response.data["available"])
        self.assertEqual(response.data["status"], "Available")

    def test_spaced_labels_fit_booking_columns(self) -> None:
        response = self.client.post(self.book_url, self._payload("10  AM", "12  PM"), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking = Booking.objects.get(pk=response.data["bookingId"])
        self.assertEqual(booking.slot_time_to, "12  PM")
        self.assertEqual(booking.covered_slots(), ["10 AM", "11 AM"])
        request_limit = BookingRequestSerializer().fields["slotTimeTo"].max_length
        for name in ("slot_time_from", "slot_time_to"):
            self.assertGreaterEqual(Booking._meta.get_field(name).max_length, request_limit)

    def test_verify_rejects_bad_label(self) -> None:
        response = self.client.post(
            self.verify_url,
            {"slotDate": "2030-07-01", "slotTimes": ["6 PM", "18:00"]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["reasonKind"], "InvalidTimeFormat")

    def test_user_bookings_are_listed_newest_first(self) -> None:
        self.client.post(self.book_url, self._payload("6 PM", "7 PM", bookingDate="2030-07-01"), format="json")
        self.client.post(self.book_url, self._payload("6 PM", "7 PM", bookingDate="2030-07-03"), format="json")
        self.client.post(
            self.book_url,
            self._payload("9 AM", "10 AM", userId=self.other.pk),
            format="json",
        )

        response = self.client.get(reverse("booking-user", kwargs={"user_id": self.player.pk}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["bookingDate"] for item in response.data], ["2030-07-03", "2030-07-01"])
        self.assertTrue(all(item["userId"] == self.player.pk for item in response.data))

    def test_all_bookings_can_be_filtered(self) -> None:
        self.client.post(self.book_url, self._payload("6 PM", "7 PM", bookingDate="2030-07-01"), format="json")
        self.client.post(
            self.book_url,
            self._payload("6 PM", "7 PM", bookingDate="2030-07-02", userId=self.other.pk),
            format="json",
        )
        url = reverse("booking-all-bookings")

        everything = self.client.get(url)
        by_date = self.client.get(url, {"booking_date": "2030-07-02"})
        by_user = self.client.get(url, {"user": self.player.pk})

        self.assertEqual(len(everything.data), 2)
        self.assertEqual([item["userId"] for item in by_date.data], [self.other.pk])
        self.assertEqual([item["bookingDate"] for item in by_user.data], ["2030-07-01"])

    def test_booking_slots_are_recomputed(self) -> None:
        created = self.client.post(self.book_url, self._payload("11 PM", "2 AM"), format="json")

        response = self.client.get(reverse("booking-slots", kwargs={"pk": created.data["bookingId"]}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["slots"], ["11 PM", "12 AM", "1 AM"])

    def test_unknown_booking_slots_is_not_found(self) -> None:
        response = self.client.get(reverse("booking-slots", kwargs={"pk": 424242}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
