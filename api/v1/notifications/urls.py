"""
URL configuration for notification API endpoints.
"""

from django.urls import path

from api.v1.notifications import views

app_name = "notifications"

urlpatterns = [
    path(
        "notifications/check-license-expiry",
        views.CheckLicenseExpiryView.as_view(),
        name="check-license-expiry",
    ),
]
