"""
Reference data entities.

Categories and locations are shared lookup tables, readable by every
user and maintained by staff.
"""
import uuid
from dataclasses import dataclass

DEFAULT_CATEGORIES = (
    "Software",
    "Security",
    "Design",
    "Development",
    "Marketing",
    "Analytics",
    "Communication",
    "Productivity",
    "Other",
)

DEFAULT_LOCATIONS = (
    "India",
    "USA",
    "UK",
    "Singapore",
    "Australia",
    "Canada",
    "Germany",
    "Other",
)


@dataclass(frozen=True)
class Category:
    """License category."""

    id: uuid.UUID
    name: str

    def matches(self, name: str) -> bool:
        """Case-insensitive exact name match."""
        return self.name.lower() == name.strip().lower()


@dataclass(frozen=True)
class Location:
    """Location (branch) a license is billed to."""

    id: uuid.UUID
    name: str
