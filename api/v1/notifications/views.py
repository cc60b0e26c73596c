"""
Notification API views.

The expiry sweep endpoint, called by an external scheduler.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from core.instrumentation import Status, StatusCode, get_tracer
from core.middleware.auth import SWEEP_CORS_HEADERS
from notifications.application.commands.run_expiry_sweep import RunExpirySweepCommand
from notifications.infrastructure.factory import build_expiry_sweep_handler

tracer = get_tracer(__name__)


class CheckLicenseExpiryView(APIView):
    """
    View for the expiry notification sweep.

    Accepts any method and ignores the body. OPTIONS returns an empty
    200 response; every response carries the CORS headers.
    """

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        for header, value in SWEEP_CORS_HEADERS.items():
            response[header] = value
        return response

    def options(self, request: Request, *args, **kwargs) -> Response:
        return Response(status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="check_license_expiry",
        summary="Run Expiry Notification Sweep",
        description=(
            "Email a reminder for every license expiring within the next 30 days "
            "that has a notification email. Intended to be called by a scheduler. "
            "When EXPIRY_SWEEP_SECRET is configured the X-Sweep-Secret header must match."
        ),
        tags=["Notifications"],
        request=None,
        responses={
            200: {"description": "Sweep summary"},
            401: {"description": "Missing or invalid sweep secret"},
            500: {"description": "Sweep failed"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_sweep)(request)

    get = post
    put = post
    patch = post
    delete = post

    async def _handle_sweep(self, request: Request) -> Response:
        """Async handler for the sweep."""
        with tracer.start_as_current_span("check_license_expiry") as span:
            span.set_attribute("operation", "check_license_expiry")

            handler = build_expiry_sweep_handler()
            result = await handler.handle(RunExpirySweepCommand())

            span.set_attribute("sweep.checked_licenses", result.checked_licenses)
            span.set_attribute("sweep.notifications_sent", result.notifications_sent)
            span.set_attribute("sweep.notifications_failed", result.notifications_failed)

            if not result.success:
                span.set_status(Status(StatusCode.ERROR, result.error or "Sweep failed"))
                return Response(
                    result.to_dict(), status=status.HTTP_500_INTERNAL_SERVER_ERROR
                )

            span.set_status(Status(StatusCode.OK))
            return Response(result.to_dict(), status=status.HTTP_200_OK)
