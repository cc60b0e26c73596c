"""
Django implementation of ReferenceRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from catalog.domain.reference import Category, Location
from catalog.infrastructure.models import Category as CategoryModel
from catalog.infrastructure.models import Location as LocationModel
from catalog.ports.reference_repository import ReferenceRepository


class DjangoReferenceRepository(ReferenceRepository):
    """Django ORM implementation of ReferenceRepository."""

    @sync_to_async
    def list_categories(self) -> List[Category]:
        """List all categories ordered by name."""
        # pylint: disable=no-member
        return [
            Category(id=model.id, name=model.name)
            for model in CategoryModel.objects.order_by("name")
        ]

    @sync_to_async
    def list_locations(self) -> List[Location]:
        """List all locations ordered by name."""
        # pylint: disable=no-member
        return [
            Location(id=model.id, name=model.name)
            for model in LocationModel.objects.order_by("name")
        ]

    @sync_to_async
    def find_category(self, category_id: uuid.UUID) -> Optional[Category]:
        # pylint: disable=no-member
        model = CategoryModel.objects.filter(pk=category_id).first()
        return Category(id=model.id, name=model.name) if model else None

    @sync_to_async
    def find_location(self, location_id: uuid.UUID) -> Optional[Location]:
        # pylint: disable=no-member
        model = LocationModel.objects.filter(pk=location_id).first()
        return Location(id=model.id, name=model.name) if model else None
