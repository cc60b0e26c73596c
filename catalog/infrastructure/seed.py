"""
Seeding of default reference data.
"""
import logging

from catalog.domain.reference import DEFAULT_CATEGORIES, DEFAULT_LOCATIONS

logger = logging.getLogger(__name__)


def seed_reference_data(sender=None, using="default", **kwargs):
    """
    Create the default categories and locations if missing.

    Connected to post_migrate; safe to run repeatedly.
    """
    from catalog.infrastructure.models import Category, Location

    created = 0
    for name in DEFAULT_CATEGORIES:
        _, was_created = Category.objects.using(using).get_or_create(name=name)
        created += int(was_created)
    for name in DEFAULT_LOCATIONS:
        _, was_created = Location.objects.using(using).get_or_create(name=name)
        created += int(was_created)

    if created:
        logger.info("Seeded %d reference data row(s)", created)
