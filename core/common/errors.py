"""
Error taxonomy shared by every endpoint.

Caller-facing errors are DRF ``APIException`` subclasses rendered by
``exception_handler`` into the envelope used across the API:

    {"error": {"code": "...", "message": "...", "details": {...}}}

``AuditWriteFailure`` and ``InvalidationFailure`` are the non-fatal kinds.
They are never raised to a caller; they only travel through logs.
"""
from __future__ import annotations

import logging

from rest_framework import exceptions, status
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ApiError(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "ERROR"
    default_detail = "Request failed"

    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(detail=message or self.default_detail, code=self.error_code)
        self.message = message or str(self.default_detail)
        self.details = details or {}


class Unauthenticated(exceptions.NotAuthenticated):
    error_code = "UNAUTHENTICATED"
    default_detail = "Authentication required"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
    default_detail = "Insufficient permissions"


class ValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"
    default_detail = "Invalid request body"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailed":
        return cls(details={field: [message]})


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "duplicate_slug"
    default_detail = "Slug is already in use"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_detail = "Not found"


class TransactionFailure(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "SERVER_ERROR"
    default_detail = "The change could not be saved"


class AuditWriteFailure(Exception):
    """An audit entry could not be written after its mutation committed."""


class InvalidationFailure(Exception):
    """A cache tag could not be invalidated after a committed mutation."""


def _envelope(code: str, message: str, details=None) -> dict:
    return {"error": {"code": code, "message": message, "details": details or {}}}


def exception_handler(exc, context):
    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ApiError):
        response.data = _envelope(exc.error_code, exc.message, exc.details)
    elif isinstance(exc, exceptions.ValidationError):
        details = exc.detail if isinstance(exc.detail, dict) else {"non_field_errors": exc.detail}
        response.data = _envelope(ValidationFailed.error_code, str(ValidationFailed.default_detail), details)
    elif isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response.data = _envelope(Unauthenticated.error_code, str(exc.detail))
    elif isinstance(exc, exceptions.PermissionDenied):
        response.data = _envelope(Forbidden.error_code, str(exc.detail))
    elif isinstance(exc, exceptions.NotFound):
        response.data = _envelope(NotFound.error_code, str(exc.detail))
    else:
        code = getattr(exc, "default_code", "error")
        response.data = _envelope(str(code).upper(), str(getattr(exc, "detail", exc)))

    return response
