"""
License API views.

These endpoints are used by signed-in users to:
- Record, edit and delete licenses
- Change license status and keep payment history
- View the dashboard summary and expiring-soon list
- Import and export licenses as CSV
"""

import uuid

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import HttpResponse
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import error_body, validation_error_response
from api.v1.licenses.parsers import CSVTextParser
from api.v1.licenses.serializers import (
    ChangeStatusRequestSerializer,
    DashboardSummarySerializer,
    ImportResultSerializer,
    LicenseSerializer,
    LicenseWriteSerializer,
    ListLicensesQuerySerializer,
    PaymentHistorySerializer,
    PaymentRecordSerializer,
    RecordPaymentRequestSerializer,
    StatusChangeResultSerializer,
)
from catalog.infrastructure.repositories.django_reference_repository import (
    DjangoReferenceRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.change_license_status import ChangeLicenseStatusCommand
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.import_licenses import ImportLicensesCommand
from licenses.application.commands.record_payment import RecordPaymentCommand
from licenses.application.commands.update_license import (
    DeleteLicenseCommand,
    UpdateLicenseCommand,
)
from licenses.application.handlers.change_status_handler import ChangeLicenseStatusHandler
from licenses.application.handlers.import_licenses_handler import ImportLicensesHandler
from licenses.application.handlers.license_handlers import (
    CreateLicenseHandler,
    DeleteLicenseHandler,
    GetLicenseHandler,
    UpdateLicenseHandler,
)
from licenses.application.handlers.list_licenses_handler import (
    ExportLicensesHandler,
    GetDashboardSummaryHandler,
    ListExpiringLicensesHandler,
    ListLicensesHandler,
)
from licenses.application.handlers.payment_handlers import ListPaymentsHandler, RecordPaymentHandler
from licenses.application.queries.license_queries import (
    ExportLicensesQuery,
    GetDashboardSummaryQuery,
    GetLicenseQuery,
    ListExpiringLicensesQuery,
    ListLicensesQuery,
    ListPaymentsQuery,
)
from licenses.application.services.csv_import import TEMPLATE_CSV, TEMPLATE_FILENAME
from licenses.domain.license import LicenseChanges
from licenses.infrastructure.expiry_config import alert_boundaries, display_boundaries
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
    DjangoPaymentRecordRepository,
)

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_payment_repo = DjangoPaymentRecordRepository()
_reference_repo = DjangoReferenceRepository()

tracer = get_tracer(__name__)

LIST_FILTER_PARAMETERS = [
    OpenApiParameter("search", str, description="Free-text search"),
    OpenApiParameter("category", str, description="Exact category name"),
    OpenApiParameter("branch", str, description="Location name"),
    OpenApiParameter("renewal", str, enum=["upcoming", "expired"], description="Renewal filter"),
]


def _csv_attachment(content: str, filename: str) -> HttpResponse:
    response = HttpResponse(content, content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


def _blank_to_none(value):
    return value or None


class LicenseCollectionView(APIView):
    """View for listing and creating the caller's licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description=(
            "List the caller's licenses ordered by expiry date, each with its "
            "expiry classification."
        ),
        tags=["Licenses"],
        parameters=LIST_FILTER_PARAMETERS,
        responses={200: LicenseSerializer(many=True), 400: {"description": "Bad Request"}},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list_licenses)(request)

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        tags=["Licenses"],
        request=LicenseWriteSerializer,
        responses={201: LicenseSerializer, 400: {"description": "Bad Request"}},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create_license)(request)

    async def _handle_list_licenses(self, request: Request) -> Response:
        """Async handler for list licenses."""
        with tracer.start_as_current_span("list_licenses") as span:
            span.set_attribute("user.id", request.owner_id)

            params = ListLicensesQuerySerializer(data=request.query_params)
            if not params.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(params.errors)

            handler = ListLicensesHandler(
                license_repository=_license_repo,
                boundaries=display_boundaries(),
                upcoming_window_days=settings.EXPIRY_UPCOMING_WINDOW_DAYS,
            )
            result = await handler.handle(
                ListLicensesQuery(
                    owner_id=request.owner_id,
                    search=_blank_to_none(params.validated_data.get("search")),
                    category=_blank_to_none(params.validated_data.get("category")),
                    branch=_blank_to_none(params.validated_data.get("branch")),
                    renewal=_blank_to_none(params.validated_data.get("renewal")),
                )
            )

            span.set_attribute("licenses.count", len(result))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result, many=True).data)

    async def _handle_create_license(self, request: Request) -> Response:
        """Async handler for create license."""
        with tracer.start_as_current_span("create_license") as span:
            span.set_attribute("operation", "create_license")
            span.set_attribute("user.id", request.owner_id)

            serializer = LicenseWriteSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            data = serializer.validated_data
            handler = CreateLicenseHandler(
                license_repository=_license_repo,
                reference_repository=_reference_repo,
                boundaries=display_boundaries(),
            )
            result = await handler.handle(
                CreateLicenseCommand(
                    owner_id=request.owner_id,
                    product_name=data["product_name"],
                    vendor_name=data["vendor_name"],
                    category=data["category"],
                    billing_cycle=data["billing_cycle"],
                    amount=data["amount"],
                    start_date=data["start_date"],
                    expiry_date=data["expiry_date"],
                    category_id=data.get("category_id"),
                    location_id=data.get("location_id"),
                    last_renewal_date=data.get("last_renewal_date"),
                    status=data.get("status") or "Pending",
                    payment_status=data.get("payment_status", False),
                    login_link=_blank_to_none(data.get("login_link")),
                    password=_blank_to_none(data.get("password")),
                    notes=_blank_to_none(data.get("notes")),
                    notification_email=_blank_to_none(data.get("notification_email")),
                    notification_phone=_blank_to_none(data.get("notification_phone")),
                )
            )

            span.set_attribute("license.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data, status=status.HTTP_201_CREATED)


class LicenseDetailView(APIView):
    """View for reading, editing and deleting one license."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        tags=["Licenses"],
        responses={200: LicenseSerializer, 404: {"description": "License not found"}},
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get_license)(request, license_id)

    @extend_schema(
        operation_id="update_license",
        summary="Edit License",
        description="Change any subset of fields. The owner cannot be changed.",
        tags=["Licenses"],
        request=LicenseWriteSerializer,
        responses={
            200: LicenseSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "License not found"},
        },
    )
    def patch(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update_license)(request, license_id)

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        description="Delete a license and its payment history.",
        tags=["Licenses"],
        responses={204: None, 404: {"description": "License not found"}},
    )
    def delete(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete_license)(request, license_id)

    async def _handle_get_license(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_license") as span:
            span.set_attribute("license.id", str(license_id))
            handler = GetLicenseHandler(
                license_repository=_license_repo, boundaries=display_boundaries()
            )
            result = await handler.handle(
                GetLicenseQuery(license_id=license_id, owner_id=request.owner_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data)

    async def _handle_update_license(self, request: Request, license_id: uuid.UUID) -> Response:
        """Async handler for edit license."""
        with tracer.start_as_current_span("update_license") as span:
            span.set_attribute("operation", "update_license")
            span.set_attribute("license.id", str(license_id))

            serializer = LicenseWriteSerializer(data=request.data, partial=True)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            changes = {
                key: (_blank_to_none(value) if isinstance(value, str) else value)
                for key, value in serializer.validated_data.items()
            }
            handler = UpdateLicenseHandler(
                license_repository=_license_repo,
                reference_repository=_reference_repo,
                boundaries=display_boundaries(),
            )
            result = await handler.handle(
                UpdateLicenseCommand(
                    license_id=license_id,
                    owner_id=request.owner_id,
                    changes=LicenseChanges.from_dict(changes),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data)

    async def _handle_delete_license(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_license") as span:
            span.set_attribute("license.id", str(license_id))
            handler = DeleteLicenseHandler(license_repository=_license_repo)
            await handler.handle(
                DeleteLicenseCommand(license_id=license_id, owner_id=request.owner_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)


class LicenseStatusView(APIView):
    """View for changing a license's status."""

    @extend_schema(
        operation_id="change_license_status",
        summary="Change License Status",
        description=(
            "Set the status. Paid and Confirmed mark the license paid; Expired and "
            "Cancelled mark it unpaid. Moving to Paid from any other status also "
            "records a payment for the license amount; if that record cannot be "
            "written the status still changes and a warning is returned."
        ),
        tags=["Licenses"],
        request=ChangeStatusRequestSerializer,
        responses={
            200: StatusChangeResultSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "License not found"},
        },
    )
    def patch(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_change_status)(request, license_id)

    async def _handle_change_status(self, request: Request, license_id: uuid.UUID) -> Response:
        """Async handler for status change."""
        with tracer.start_as_current_span("change_license_status") as span:
            span.set_attribute("operation", "change_license_status")
            span.set_attribute("license.id", str(license_id))

            serializer = ChangeStatusRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            new_status = serializer.validated_data["status"]
            span.set_attribute("license.status", new_status)

            handler = ChangeLicenseStatusHandler(
                license_repository=_license_repo,
                payment_repository=_payment_repo,
                boundaries=display_boundaries(),
            )
            result = await handler.handle(
                ChangeLicenseStatusCommand(
                    license_id=license_id,
                    owner_id=request.owner_id,
                    status=new_status,
                )
            )

            span.set_attribute("payment_recorded", result.payment_recorded)
            if result.warning:
                span.set_attribute("warning", result.warning)
            span.set_status(Status(StatusCode.OK))
            return Response(StatusChangeResultSerializer(result).data)


class LicensePaymentsView(APIView):
    """View for a license's payment history."""

    @extend_schema(
        operation_id="list_payments",
        summary="List Payments",
        description="Payment records of a license, newest first, with the total paid.",
        tags=["Licenses"],
        responses={200: PaymentHistorySerializer, 404: {"description": "License not found"}},
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_list_payments)(request, license_id)

    @extend_schema(
        operation_id="record_payment",
        summary="Record Payment",
        description="Add a payment. The license is marked Paid.",
        tags=["Licenses"],
        request=RecordPaymentRequestSerializer,
        responses={
            201: PaymentRecordSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "License not found"},
        },
    )
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_record_payment)(request, license_id)

    async def _handle_list_payments(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("list_payments") as span:
            span.set_attribute("license.id", str(license_id))
            handler = ListPaymentsHandler(
                license_repository=_license_repo, payment_repository=_payment_repo
            )
            result = await handler.handle(
                ListPaymentsQuery(license_id=license_id, owner_id=request.owner_id)
            )
            span.set_attribute("payments.count", len(result.payments))
            span.set_status(Status(StatusCode.OK))
            return Response(PaymentHistorySerializer(result).data)

    async def _handle_record_payment(self, request: Request, license_id: uuid.UUID) -> Response:
        """Async handler for record payment."""
        with tracer.start_as_current_span("record_payment") as span:
            span.set_attribute("operation", "record_payment")
            span.set_attribute("license.id", str(license_id))

            serializer = RecordPaymentRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            data = serializer.validated_data
            handler = RecordPaymentHandler(
                license_repository=_license_repo, payment_repository=_payment_repo
            )
            result = await handler.handle(
                RecordPaymentCommand(
                    license_id=license_id,
                    owner_id=request.owner_id,
                    amount=data["amount"],
                    payment_date=data["payment_date"],
                    payment_method=_blank_to_none(data.get("payment_method")),
                    transaction_id=_blank_to_none(data.get("transaction_id")),
                    notes=_blank_to_none(data.get("notes")),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(PaymentRecordSerializer(result).data, status=status.HTTP_201_CREATED)


class DashboardView(APIView):
    """View for the dashboard summary."""

    @extend_schema(
        operation_id="dashboard_summary",
        summary="Dashboard Summary",
        description=(
            "Total licenses, unpaid licenses expiring within 30 days, expired "
            "licenses and the total value."
        ),
        tags=["Licenses"],
        responses={200: DashboardSummarySerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_dashboard)(request)

    async def _handle_dashboard(self, request: Request) -> Response:
        with tracer.start_as_current_span("dashboard_summary") as span:
            span.set_attribute("user.id", request.owner_id)
            handler = GetDashboardSummaryHandler(
                license_repository=_license_repo,
                upcoming_window_days=settings.EXPIRY_UPCOMING_WINDOW_DAYS,
            )
            result = await handler.handle(GetDashboardSummaryQuery(owner_id=request.owner_id))
            span.set_status(Status(StatusCode.OK))
            return Response(DashboardSummarySerializer(result).data)


class ExpiringLicensesView(APIView):
    """View for the expiring-soon alert list."""

    @extend_schema(
        operation_id="list_expiring_licenses",
        summary="Expiring Licenses",
        description="Licenses expiring within the next 7 days, with alert tiers.",
        tags=["Licenses"],
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_expiring)(request)

    async def _handle_expiring(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_expiring_licenses") as span:
            span.set_attribute("user.id", request.owner_id)
            handler = ListExpiringLicensesHandler(
                license_repository=_license_repo,
                boundaries=alert_boundaries(),
                window_days=settings.EXPIRY_ALERT_WINDOW_DAYS,
            )
            result = await handler.handle(ListExpiringLicensesQuery(owner_id=request.owner_id))
            span.set_attribute("licenses.count", len(result))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result, many=True).data)


class ExportLicensesView(APIView):
    """View for CSV export."""

    @extend_schema(
        operation_id="export_licenses",
        summary="Export Licenses",
        description="Download the caller's licenses as CSV, filtered like the list.",
        tags=["Import/Export"],
        parameters=LIST_FILTER_PARAMETERS,
        responses={200: {"description": "CSV file (text/csv)"}},
    )
    def get(self, request: Request) -> HttpResponse:
        return async_to_sync(self._handle_export)(request)

    async def _handle_export(self, request: Request):
        """Async handler for export."""
        with tracer.start_as_current_span("export_licenses") as span:
            span.set_attribute("user.id", request.owner_id)

            params = ListLicensesQuerySerializer(data=request.query_params)
            if not params.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(params.errors)

            handler = ExportLicensesHandler(
                license_repository=_license_repo,
                boundaries=display_boundaries(),
                upcoming_window_days=settings.EXPIRY_UPCOMING_WINDOW_DAYS,
            )
            result = await handler.handle(
                ExportLicensesQuery(
                    owner_id=request.owner_id,
                    search=_blank_to_none(params.validated_data.get("search")),
                    category=_blank_to_none(params.validated_data.get("category")),
                    branch=_blank_to_none(params.validated_data.get("branch")),
                    renewal=_blank_to_none(params.validated_data.get("renewal")),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return _csv_attachment(result.content, result.filename)


class ImportLicensesView(APIView):
    """View for CSV import."""

    parser_classes = [MultiPartParser, CSVTextParser, JSONParser]

    @extend_schema(
        operation_id="import_licenses",
        summary="Import Licenses",
        description=(
            "Upload a CSV as multipart field 'file' or as a raw text/csv body. "
            "Every row is validated first; if any row is invalid nothing is "
            "imported and all errors are returned."
        ),
        tags=["Import/Export"],
        request={
            "multipart/form-data": {
                "type": "object",
                "properties": {"file": {"type": "string", "format": "binary"}},
            },
            "text/csv": {"type": "string"},
        },
        responses={
            201: ImportResultSerializer,
            400: {"description": "Unreadable file or invalid rows"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_import)(request)

    @staticmethod
    def _payload(request: Request):
        if isinstance(request.data, bytes):
            return request.data
        upload = request.FILES.get("file")
        if upload is None:
            return None
        return upload.read()

    async def _handle_import(self, request: Request) -> Response:
        """Async handler for import."""
        with tracer.start_as_current_span("import_licenses") as span:
            span.set_attribute("operation", "import_licenses")
            span.set_attribute("user.id", request.owner_id)

            payload = self._payload(request)
            if payload is None:
                span.set_status(Status(StatusCode.ERROR, "No file"))
                return Response(
                    error_body("NO_FILE", "Upload a CSV file as 'file' or a text/csv body"),
                    status=status.HTTP_400_BAD_REQUEST,
                )

            handler = ImportLicensesHandler(
                license_repository=_license_repo, reference_repository=_reference_repo
            )
            result = await handler.handle(
                ImportLicensesCommand(owner_id=request.owner_id, payload=payload)
            )

            span.set_attribute("licenses.imported", result.imported_count)
            span.set_status(Status(StatusCode.OK))
            return Response(ImportResultSerializer(result).data, status=status.HTTP_201_CREATED)


class ImportTemplateView(APIView):
    """View for the CSV import template."""

    @extend_schema(
        operation_id="import_template",
        summary="Import Template",
        description="Download a CSV template with the import columns and two sample rows.",
        tags=["Import/Export"],
        responses={200: {"description": "CSV file (text/csv)"}},
    )
    def get(self, request: Request) -> HttpResponse:
        return _csv_attachment(TEMPLATE_CSV, TEMPLATE_FILENAME)
