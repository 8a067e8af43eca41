"""API tests for authentication and profile endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.properties.models import Property
from apps.users.models import User


class AuthAPITests(APITestCase):
    def test_register_returns_tokens(self) -> None:
        payload = {
            "name": "Guest User",
            "email": "guest@example.com",
            "password": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], payload["email"])
        self.assertEqual(response.data["user"]["name"], payload["name"])
        self.assertTrue(User.objects.get(email=payload["email"]).check_password(payload["password"]))

    def test_register_rejects_duplicate_email(self) -> None:
        User.objects.create_user(email="taken@example.com", password="StrongPass123")

        response = self.client.post(
            reverse("auth:register"),
            {"name": "Other", "email": "TAKEN@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_returns_tokens(self) -> None:
        User.objects.create_user(email="user@example.com", password="CorrectPassword1", name="User")

        response = self.client.post(
            reverse("auth:login"),
            {"email": "user@example.com", "password": "CorrectPassword1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data["tokens"])

    def test_login_limited_attempts(self) -> None:
        user = User.objects.create_user(email="lock@example.com", password="CorrectPassword1")

        url = reverse("auth:login")
        wrong_payload = {"email": user.email, "password": "wrong"}
        for _ in range(5):
            response = self.client.post(url, wrong_payload, format="json")

        user.refresh_from_db()
        self.assertTrue(user.is_locked)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        # Correct password is refused while locked
        response = self.client.post(url, {"email": user.email, "password": "CorrectPassword1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        # After lock expires user can login again
        user.locked_until = timezone.now() - timedelta(minutes=1)
        user.save(update_fields=["locked_until"])
        response = self.client.post(url, {"email": user.email, "password": "CorrectPassword1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_token_refresh(self) -> None:
        User.objects.create_user(email="refresh@example.com", password="CorrectPassword1")
        login = self.client.post(
            reverse("auth:login"),
            {"email": "refresh@example.com", "password": "CorrectPassword1"},
            format="json",
        )

        response = self.client.post(
            reverse("auth:token_refresh"), {"refresh": login.data["tokens"]["refresh"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data)


class ProfileAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="owner@example.com", password="StrongPass123", name="Owner")

    def test_profile_requires_authentication(self) -> None:
        response = self.client.get(reverse("user-profile"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_lists_properties_with_matching_email(self) -> None:
        Property.objects.create(
            name="Mine", type="Apartment", price=Decimal("10"), location="Almaty",
            description="d", email="OWNER@example.com",
        )
        Property.objects.create(
            name="Not mine", type="Apartment", price=Decimal("10"), location="Almaty",
            description="d", email="someone@example.com",
        )
        self.client.force_authenticate(self.user)

        response = self.client.get(reverse("user-profile"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["email"], "owner@example.com")
        self.assertEqual([p["name"] for p in response.data["properties"]], ["Mine"])
