"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.properties.models import Property
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers booking creation, availability conflicts and status changes."""

    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123", name="Guest")
        self.owner = User.objects.create_user(email="owner@example.com", password="OwnerPass123", name="Owner")
        self.property = Property.objects.create(
            owner=self.owner,
            name="Modern apartment",
            type="Apartment",
            description="Spacious apartment in the city center.",
            location="Astana, Yesil",
            email="owner@example.com",
            price=Decimal("100.00"),
            available_from=date(2030, 1, 1),
            available_until=date(2030, 12, 31),
            minimum_stay=3,
        )
        self.book_url = reverse("property-book", args=[self.property.pk])
        self.list_url = reverse("booking-list")

    def _book(self, check_in: str, check_out: str, message: str = "") -> object:
        return self.client.post(
            self.book_url,
            {"checkIn": check_in, "checkOut": check_out, "message": message},
            format="json",
        )

    def _make_booking(self, user: User, check_in: date, check_out: date, **extra) -> Booking:
        return Booking.objects.create(
            property=self.property, user=user, check_in=check_in, check_out=check_out, **extra
        )

    def test_guest_can_book_available_stay(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self._book("2030-03-01", "2030-03-05", "Arriving late")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(str(response.data["checkIn"]), "2030-03-01")
        self.assertEqual(response.data["property"]["name"], "Modern apartment")
        self.assertEqual(response.data["user"]["email"], "guest@example.com")
        booking = Booking.objects.get()
        self.assertEqual(booking.user, self.guest)
        self.assertEqual(booking.message, "Arriving late")

    def test_timestamps_are_truncated_to_dates(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self._book("2030-03-01T15:00:00Z", "2030-03-05T11:00:00Z")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertEqual(booking.check_in, date(2030, 3, 1))
        self.assertEqual(booking.check_out, date(2030, 3, 5))

    def test_stay_shorter_than_minimum_is_a_conflict(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self._book("2030-03-01", "2030-03-02")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "conflict")
        self.assertEqual(response.data["reason"], "booking_conflict")
        self.assertFalse(Booking.objects.exists())

    def test_unavailable_property_is_a_conflict(self) -> None:
        Property.objects.filter(pk=self.property.pk).update(status=Property.Status.MAINTENANCE)
        self.client.force_authenticate(self.guest)

        response = self._book("2030-03-01", "2030-03-05")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_reversed_dates_are_invalid(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self._book("2030-03-05", "2030-03-01")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Booking.objects.exists())

    def test_overlapping_bookings_are_not_rejected(self) -> None:
        self.client.force_authenticate(self.guest)

        first = self._book("2030-03-01", "2030-03-05")
        second = self._book("2030-03-02", "2030-03-06")

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_201_CREATED)

    @override_settings(RENTALS={"SERIALIZE_BOOKING_CREATION": False})
    def test_booking_without_row_lock(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self._book("2030-03-01", "2030-03-05")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_booking_unknown_property(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.post(
            reverse("property-book", args=["9b2f6f2e-8f1c-4a52-9a0f-0d6d5f0d2b11"]),
            {"checkIn": "2030-03-01", "checkOut": "2030-03-05"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_booking_requires_authentication(self) -> None:
        response = self._book("2030-03-01", "2030-03-05")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_is_newest_first(self) -> None:
        older = self._make_booking(self.guest, date(2030, 5, 1), date(2030, 5, 5))
        newer = self._make_booking(self.guest, date(2030, 4, 1), date(2030, 4, 5))
        Booking.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(days=30))
        self.client.force_authenticate(self.owner)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([b["id"] for b in response.data], [str(newer.pk), str(older.pk)])

    def test_list_by_property_is_ordered_by_check_in(self) -> None:
        later = self._make_booking(self.guest, date(2030, 5, 1), date(2030, 5, 5))
        earlier = self._make_booking(self.guest, date(2030, 4, 1), date(2030, 4, 5))
        self.client.force_authenticate(self.guest)

        response = self.client.get(self.list_url, {"property": str(self.property.pk)})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([b["id"] for b in response.data], [str(earlier.pk), str(later.pk)])

    def test_mine_lists_only_callers_bookings(self) -> None:
        own = self._make_booking(self.guest, date(2030, 5, 1), date(2030, 5, 5))
        self._make_booking(self.owner, date(2030, 6, 1), date(2030, 6, 5))
        self.client.force_authenticate(self.guest)

        response = self.client.get(reverse("booking-mine"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([b["id"] for b in response.data], [str(own.pk)])

    def test_list_requires_authentication(self) -> None:
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @override_settings(RENTALS={"BOOKING_ADMIN_PERMISSION_CLASSES": ["rest_framework.permissions.IsAdminUser"]})
    def test_moderation_policy_is_configurable(self) -> None:
        booking = self._make_booking(self.guest, date(2030, 5, 1), date(2030, 5, 5))
        self.client.force_authenticate(self.guest)

        list_response = self.client.get(self.list_url)
        status_response = self.client.put(
            reverse("booking-update-status", args=[booking.pk]), {"status": "confirmed"}, format="json"
        )

        self.assertEqual(list_response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(status_response.status_code, status.HTTP_403_FORBIDDEN)

    def test_dangling_references_resolve_to_null(self) -> None:
        booking = self._make_booking(self.guest, date(2030, 5, 1), date(2030, 5, 5))
        property_id = self.property.pk
        self.property.delete()
        self.client.force_authenticate(self.owner)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        [entry] = response.data
        self.assertEqual(entry["id"], str(booking.pk))
        self.assertIsNone(entry["property"])
        self.assertEqual(entry["propertyId"], str(property_id))
        self.assertEqual(entry["user"]["id"], str(self.guest.pk))

    def test_confirm_pending_booking(self) -> None:
        booking = self._make_booking(self.guest, date(2030, 5, 1), date(2030, 5, 5))
        self.client.force_authenticate(self.owner)

        response = self.client.put(
            reverse("booking-update-status", args=[booking.pk]), {"status": "confirmed"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "confirmed")
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)
        self.assertIsNotNone(booking.decided_at)

    def test_terminal_status_cannot_change(self) -> None:
        booking = self._make_booking(
            self.guest, date(2030, 5, 1), date(2030, 5, 5), status=Booking.Status.REJECTED
        )
        self.client.force_authenticate(self.owner)

        response = self.client.put(
            reverse("booking-update-status", args=[booking.pk]), {"status": "confirmed"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "conflict")
        self.assertEqual(response.data["reason"], "invalid_status_transition")
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.REJECTED)

    def test_invalid_status_value(self) -> None:
        booking = self._make_booking(self.guest, date(2030, 5, 1), date(2030, 5, 5))
        self.client.force_authenticate(self.owner)

        response = self.client.put(
            reverse("booking-update-status", args=[booking.pk]), {"status": "archived"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_status_of_unknown_booking(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self.client.put(
            reverse("booking-update-status", args=["9b2f6f2e-8f1c-4a52-9a0f-0d6d5f0d2b11"]),
            {"status": "confirmed"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
