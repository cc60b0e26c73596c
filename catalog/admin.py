"""
Django admin configuration for catalog app.
"""
from django.contrib import admin

from catalog.infrastructure.models import Category, Location


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """Admin interface for Category model."""

    list_display = ["name", "created_at"]
    search_fields = ["name"]
    readonly_fields = ["id", "created_at"]


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    """Admin interface for Location model."""

    list_display = ["name", "created_at"]
    search_fields = ["name"]
    readonly_fields = ["id", "created_at"]
