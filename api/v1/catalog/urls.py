"""
URL configuration for catalog API endpoints.
"""

from django.urls import path

from api.v1.catalog import views

app_name = "catalog"

urlpatterns = [
    path("catalog/categories", views.CategoryListView.as_view(), name="categories"),
    path("catalog/locations", views.LocationListView.as_view(), name="locations"),
]
