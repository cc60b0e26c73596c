"""
Handlers for reference data queries.
"""
from typing import List

from catalog.domain.reference import Category, Location
from catalog.ports.reference_repository import ReferenceRepository


class ListCategoriesHandler:
    """Handler for listing categories."""

    def __init__(self, reference_repository: ReferenceRepository):
        """Initialize handler with repository."""
        self.reference_repository = reference_repository

    async def handle(self) -> List[Category]:
        return await self.reference_repository.list_categories()


class ListLocationsHandler:
    """Handler for listing locations."""

    def __init__(self, reference_repository: ReferenceRepository):
        """Initialize handler with repository."""
        self.reference_repository = reference_repository

    async def handle(self) -> List[Location]:
        return await self.reference_repository.list_locations()
