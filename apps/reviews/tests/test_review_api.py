"""API tests for reviewing, rating and marking reviews helpful."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.properties.models import Property
from apps.reviews.models import Review
from apps.users.models import User


class ReviewAPITests(APITestCase):
    def setUp(self) -> None:
        self.author = User.objects.create_user(email="author@example.com", password="StrongPass123", name="Aida")
        self.other = User.objects.create_user(email="other@example.com", password="StrongPass123", name="Timur")
        self.property = Property.objects.create(
            name="Lake house",
            type="House",
            price=Decimal("90.00"),
            location="Burabay",
            description="By the lake.",
            email="owner@example.com",
        )
        self.review_url = reverse("property-review", args=[self.property.pk])
        self.rate_url = reverse("property-rate", args=[self.property.pk])

    def test_review_updates_aggregate(self) -> None:
        self.client.force_authenticate(self.author)

        response = self.client.post(
            self.review_url, {"rating": 4, "comment": "Quiet and clean", "title": "Nice"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["averageRating"], 4)
        self.assertEqual(response.data["totalReviews"], 1)
        [review] = response.data["reviews"]
        self.assertEqual(review["userName"], "Aida")
        self.assertEqual(review["user"]["id"], str(self.author.pk))
        self.property.refresh_from_db()
        self.assertEqual(self.property.average_rating, 4)
        self.assertEqual(self.property.total_reviews, 1)

    def test_second_review_by_same_user_is_a_conflict(self) -> None:
        self.client.force_authenticate(self.author)
        self.client.post(self.review_url, {"rating": 4, "comment": "First"}, format="json")

        response = self.client.post(self.review_url, {"rating": 1, "comment": "Second"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "conflict")
        self.assertEqual(response.data["reason"], "duplicate_review")
        self.property.refresh_from_db()
        self.assertEqual(self.property.total_reviews, 1)
        self.assertEqual(self.property.average_rating, 4)

    def test_rating_out_of_range_is_rejected(self) -> None:
        self.client.force_authenticate(self.author)

        response = self.client.post(self.review_url, {"rating": 6, "comment": "Too good"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Review.objects.exists())
        self.property.refresh_from_db()
        self.assertEqual(self.property.total_reviews, 0)

    def test_review_requires_authentication(self) -> None:
        response = self.client.post(self.review_url, {"rating": 4, "comment": "Anon"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_review_of_unknown_property(self) -> None:
        self.client.force_authenticate(self.author)

        response = self.client.post(
            reverse("property-review", args=["9b2f6f2e-8f1c-4a52-9a0f-0d6d5f0d2b11"]),
            {"rating": 4, "comment": "Where?"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_anonymous_rating_is_not_deduplicated(self) -> None:
        first = self.client.post(self.rate_url, {"rating": 5}, format="json")
        second = self.client.post(self.rate_url, {"rating": 2}, format="json")

        self.assertEqual(first.status_code, status.HTTP_200_OK, first.data)
        self.assertEqual(first.data, {"success": True, "newRating": 5})
        self.assertEqual(second.data["newRating"], 3.5)
        self.assertEqual(Review.objects.filter(user__isnull=True, comment="User rating").count(), 2)

    def test_rating_and_reviews_share_the_aggregate(self) -> None:
        self.client.post(self.rate_url, {"rating": 2}, format="json")
        self.client.force_authenticate(self.author)

        response = self.client.post(self.review_url, {"rating": 4, "comment": "Better"}, format="json")

        self.assertEqual(response.data["totalReviews"], 2)
        self.assertEqual(response.data["averageRating"], 3)

    def test_list_reviews_of_property_oldest_first(self) -> None:
        self.client.force_authenticate(self.author)
        self.client.post(self.review_url, {"rating": 5, "comment": "One"}, format="json")
        self.client.force_authenticate(self.other)
        self.client.post(self.review_url, {"rating": 3, "comment": "Two"}, format="json")
        self.client.force_authenticate(None)

        response = self.client.get(reverse("review-list"), {"property": str(self.property.pk)})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["comment"] for r in response.data], ["One", "Two"])

    def test_mark_helpful(self) -> None:
        review = Review.objects.create(property=self.property, user=self.author, rating=4, comment="Helpful")
        url = reverse("review-helpful", args=[review.pk])

        self.client.post(url)
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"helpfulCount": 2})
        review.refresh_from_db()
        self.assertEqual(review.helpful_count, 2)

    def test_mark_helpful_unknown_review(self) -> None:
        response = self.client.post(reverse("review-helpful", args=["9b2f6f2e-8f1c-4a52-9a0f-0d6d5f0d2b11"]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "not_found")
