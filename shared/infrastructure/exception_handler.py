"""DRF exception handler that understands domain errors."""

from __future__ import annotations

import structlog
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import (
    ConflictError,
    DomainError,
    DomainValidationError,
    NotFoundError,
)

logger = structlog.get_logger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (DomainValidationError, status.HTTP_400_BAD_REQUEST),
)


def domain_exception_handler(exc, context):  # type: ignore
    """
    Render domain errors as ``{"detail", "code"}``

    ``code`` is the error kind (``not_found``, ``conflict``,
    ``validation_error``). When a more specific subtype was raised its code
    is added as ``reason``.
    """
    if isinstance(exc, DomainError):
        kind, http_status = next(
            ((error_type, code) for error_type, code in STATUS_BY_ERROR if isinstance(exc, error_type)),
            (DomainValidationError, status.HTTP_400_BAD_REQUEST),
        )
        body = {"detail": str(exc), "code": kind.code}
        if exc.code != kind.code:
            body["reason"] = exc.code

        view = context.get("view")
        logger.info(
            "api.domain_error",
            error=kind.code,
            reason=exc.code,
            detail=str(exc),
            view=view.__class__.__name__ if view else None,
        )
        return Response(body, status=http_status)
    return drf_exception_handler(exc, context)
