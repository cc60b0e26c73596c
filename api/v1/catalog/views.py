"""
Catalog API views.

Read-only reference data: license categories and locations.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.catalog.serializers import ReferenceItemSerializer
from catalog.application.handlers.list_reference_data_handler import (
    ListCategoriesHandler,
    ListLocationsHandler,
)
from catalog.infrastructure.repositories.django_reference_repository import (
    DjangoReferenceRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer

_reference_repo = DjangoReferenceRepository()

tracer = get_tracer(__name__)


class CategoryListView(APIView):
    """View for listing categories."""

    @extend_schema(
        operation_id="list_categories",
        summary="List Categories",
        tags=["Catalog"],
        responses={200: ReferenceItemSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_categories") as span:
            categories = await ListCategoriesHandler(_reference_repo).handle()
            span.set_attribute("categories.count", len(categories))
            span.set_status(Status(StatusCode.OK))
            return Response(ReferenceItemSerializer(categories, many=True).data)


class LocationListView(APIView):
    """View for listing locations."""

    @extend_schema(
        operation_id="list_locations",
        summary="List Locations",
        tags=["Catalog"],
        responses={200: ReferenceItemSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_locations") as span:
            locations = await ListLocationsHandler(_reference_repo).handle()
            span.set_attribute("locations.count", len(locations))
            span.set_status(Status(StatusCode.OK))
            return Response(ReferenceItemSerializer(locations, many=True).data)
