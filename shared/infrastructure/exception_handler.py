"""DRF exception handler translating domain errors into API responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.errors import (
    Conflict,
    DependencyFailure,
    DomainError,
    Forbidden,
    NotFound,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[type[DomainError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    ValidationFailed: status.HTTP_400_BAD_REQUEST,
    Forbidden: status.HTTP_403_FORBIDDEN,
    Conflict: status.HTTP_409_CONFLICT,
    DependencyFailure: status.HTTP_502_BAD_GATEWAY,
}


def status_for(exc: DomainError) -> int:
    for kind, http_status in STATUS_BY_KIND.items():
        if isinstance(exc, kind):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def domain_exception_handler(exc, context):  # type: ignore
    """Map DomainError subclasses by kind, defer everything else to DRF."""

    if not isinstance(exc, DomainError):
        return drf_exception_handler(exc, context)

    http_status = status_for(exc)
    view = context.get("view")
    logger.info(
        "Domain error in %s: %s (%s)",
        view.__class__.__name__ if view else "unknown view",
        exc.message,
        exc.__class__.__name__,
    )
    payload = {
        "detail": exc.message,
        "code": exc.kind,
        "error": exc.__class__.__name__,
    }
    if exc.retryable:
        payload["retryable"] = True
    return Response(payload, status=http_status)
