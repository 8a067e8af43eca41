"""Tests for the rendering of domain errors."""

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated

from shared.domain.exceptions import (
    BookingConflictError,
    ConflictError,
    DomainValidationError,
    NotFoundError,
)
from shared.infrastructure.exception_handler import domain_exception_handler


def test_subtype_is_reported_as_reason() -> None:
    response = domain_exception_handler(BookingConflictError("Stay is too short"), {})

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.data == {
        "detail": "Stay is too short",
        "code": "conflict",
        "reason": "booking_conflict",
    }


def test_base_kinds_have_no_reason() -> None:
    for error, expected_status, kind in (
        (NotFoundError("Property x not found"), status.HTTP_404_NOT_FOUND, "not_found"),
        (ConflictError("Busy"), status.HTTP_409_CONFLICT, "conflict"),
        (DomainValidationError("Bad dates"), status.HTTP_400_BAD_REQUEST, "validation_error"),
    ):
        response = domain_exception_handler(error, {})
        assert response.status_code == expected_status
        assert response.data["code"] == kind
        assert "reason" not in response.data


def test_other_errors_fall_through_to_drf() -> None:
    response = domain_exception_handler(NotAuthenticated(), {"view": None, "request": None})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
