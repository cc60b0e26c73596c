from catalog.infrastructure.models import Category, Location  # noqa: F401
