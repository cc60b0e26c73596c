"""
App configuration for catalog.
"""
from django.apps import AppConfig
from django.db.models.signals import post_migrate


class CatalogConfig(AppConfig):
    """Seeds default categories and locations after migrate."""

    name = "catalog"
    verbose_name = "Catalog"

    def ready(self):
        from catalog.infrastructure.seed import seed_reference_data

        post_migrate.connect(seed_reference_data, sender=self)
