"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import AccessToken, NotificationPreference, UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    """Admin interface for UserProfile model."""

    list_display = ["email", "full_name", "role", "created_at"]
    list_filter = ["role", "created_at"]
    search_fields = ["email", "full_name"]
    readonly_fields = ["user", "created_at", "updated_at"]


@admin.register(NotificationPreference)
class NotificationPreferenceAdmin(admin.ModelAdmin):
    """Admin interface for NotificationPreference model."""

    list_display = ["user", "email_enabled", "days_before_expiry", "updated_at"]
    list_filter = ["email_enabled"]
    search_fields = ["user__email"]
    readonly_fields = ["id", "created_at", "updated_at"]


@admin.register(AccessToken)
class AccessTokenAdmin(admin.ModelAdmin):
    """Admin interface for AccessToken model."""

    list_display = ["token_prefix", "user", "expires_at", "last_used_at", "created_at"]
    list_filter = ["expires_at", "created_at"]
    search_fields = ["token_prefix", "user__email"]
    readonly_fields = ["id", "token_prefix", "token_hash", "created_at", "last_used_at"]

    def has_add_permission(self, request):
        """Tokens are issued through the API."""
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("user")
