"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.licenses import views

app_name = "licenses"

urlpatterns = [
    path("licenses", views.LicenseCollectionView.as_view(), name="license-list"),
    path("licenses/dashboard", views.DashboardView.as_view(), name="dashboard"),
    path("licenses/expiring", views.ExpiringLicensesView.as_view(), name="expiring"),
    path("licenses/export", views.ExportLicensesView.as_view(), name="export"),
    path("licenses/import", views.ImportLicensesView.as_view(), name="import"),
    path(
        "licenses/import/template",
        views.ImportTemplateView.as_view(),
        name="import-template",
    ),
    path(
        "licenses/<uuid:license_id>",
        views.LicenseDetailView.as_view(),
        name="license-detail",
    ),
    path(
        "licenses/<uuid:license_id>/status",
        views.LicenseStatusView.as_view(),
        name="license-status",
    ),
    path(
        "licenses/<uuid:license_id>/payments",
        views.LicensePaymentsView.as_view(),
        name="license-payments",
    ),
]
