"""
Reference data repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.domain.reference import Category, Location


class ReferenceRepository(ABC):
    """Abstract repository for categories and locations."""

    @abstractmethod
    async def list_categories(self) -> List[Category]:
        """
        List all categories ordered by name.

        Returns:
            List of Category entities
        """
        pass

    @abstractmethod
    async def list_locations(self) -> List[Location]:
        """
        List all locations ordered by name.

        Returns:
            List of Location entities
        """
        pass

    @abstractmethod
    async def find_category(self, category_id: uuid.UUID) -> Optional[Category]:
        """Category by id, or None."""
        pass

    @abstractmethod
    async def find_location(self, location_id: uuid.UUID) -> Optional[Location]:
        """Location by id, or None."""
        pass
