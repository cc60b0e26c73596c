"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error body has the shape {"error": {"code", "message"[, "details"]}}.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    CSVValidationError,
    DomainException,
    InvalidAccessTokenError,
    InvalidCredentialsError,
    LicenseNotFoundError,
    ProfileNotFoundError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)


def error_body(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    """Build the error envelope used by every API response."""
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error}


def validation_error_response(errors: Any) -> Response:
    """400 response for serializer validation errors."""
    return Response(
        error_body("VALIDATION_ERROR", "Invalid request data", errors),
        status=status.HTTP_400_BAD_REQUEST,
    )


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response:
            code = (
                exc.default_code.upper().replace("-", "_")
                if hasattr(exc, "default_code")
                else "API_ERROR"
            )
            detail = response.data.get("detail") if isinstance(response.data, dict) else None
            if detail is None:
                response.data = error_body(code, str(exc.default_detail), response.data)
            else:
                response.data = error_body(code, str(detail))
            if trace_id:
                response["X-Trace-ID"] = trace_id
            return response

    if isinstance(exc, Http404):
        response = Response(
            error_body("NOT_FOUND", "Resource not found"),
            status=status.HTTP_404_NOT_FOUND,
        )
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    return _handle_unexpected_exception(exc, context, trace_id)


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (LicenseNotFoundError, ProfileNotFoundError)):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (InvalidCredentialsError, InvalidAccessTokenError)):
        status_code = status.HTTP_401_UNAUTHORIZED

    details = exc.errors if isinstance(exc, CSVValidationError) else None

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.code, exc.message, details), status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    request = context.get("request")
    endpoint = request.path if request is not None else "unknown"
    errors_total.labels(error_type=exc.__class__.__name__, endpoint=endpoint).inc()
    response = Response(
        error_body("INTERNAL_ERROR", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response
