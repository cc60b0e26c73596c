"""
Request logging middleware.

Every request gets a correlation id (taken from X-Correlation-ID or
generated) and one structured log line when it completes, joined with
the active OpenTelemetry trace when there is one.
"""

import logging
import time
import uuid
from typing import Callable, Dict, Optional

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _outcome(status_code: int) -> str:
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    return "success"


class ObservabilityMiddleware:
    """Tag requests with correlation and trace ids and log how they ended."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        trace_id = self._attach_trace(request)
        base_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
        }
        if trace_id:
            base_extra["trace_id"] = trace_id

        logger.debug(
            "Request started",
            extra={**base_extra, "remote_addr": request.META.get("REMOTE_ADDR")},
        )

        started = time.time()
        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **base_extra,
                    "request_status": "exception",
                    "error_type": type(e).__name__,
                    "duration_ms": round((time.time() - started) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.time() - started
        outcome = _outcome(response.status_code)
        self._log_completion(request, response, base_extra, outcome, duration)

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Status"] = outcome
        response["X-Request-Duration"] = f"{duration:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    @staticmethod
    def _attach_trace(request: HttpRequest) -> Optional[str]:
        span_context = trace.get_current_span().get_span_context()
        if not span_context.is_valid:
            return None
        request.trace_id = format_trace_id(span_context.trace_id)  # type: ignore
        request.span_id = format_span_id(span_context.span_id)  # type: ignore
        return request.trace_id  # type: ignore

    @staticmethod
    def _log_completion(
        request: HttpRequest,
        response: HttpResponse,
        base_extra: Dict[str, str],
        outcome: str,
        duration: float,
    ) -> None:
        log_extra = {
            **base_extra,
            "request_status": outcome,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }
        # Set by the access token middleware on authenticated requests
        owner_id = getattr(request, "owner_id", None)
        if owner_id:
            log_extra["owner_id"] = str(owner_id)

        if outcome == "server_error":
            logger.error("Request completed with server error", extra=log_extra)
        elif outcome == "client_error":
            logger.warning("Request completed with client error", extra=log_extra)
        else:
            logger.info("Request completed", extra=log_extra)
