"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License, PaymentRecord


class PaymentRecordInline(admin.TabularInline):
    """Inline payment history on the license page."""

    model = PaymentRecord
    extra = 0
    fields = ["payment_date", "amount", "payment_method", "transaction_id", "notes"]
    readonly_fields = ["created_at"]


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "product_name",
        "vendor_name",
        "owner",
        "category",
        "amount",
        "status_display",
        "payment_status",
        "expiry_date",
    ]
    list_filter = ["status", "payment_status", "billing_cycle", "category", "location"]
    search_fields = ["product_name", "vendor_name", "category", "owner__email"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [PaymentRecordInline]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": (
                    "id",
                    "owner",
                    "product_name",
                    "vendor_name",
                    "category",
                    "category_ref",
                    "location",
                ),
            },
        ),
        (
            "Billing",
            {
                "fields": ("billing_cycle", "amount", "status", "payment_status"),
            },
        ),
        (
            "Term",
            {
                "fields": ("start_date", "last_renewal_date", "expiry_date"),
            },
        ),
        (
            "Access and Notifications",
            {
                "fields": (
                    "login_link",
                    "password",
                    "notification_email",
                    "notification_phone",
                    "notes",
                ),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "Pending": "orange",
            "Paid": "green",
            "Confirmed": "green",
            "Expired": "gray",
            "Cancelled": "red",
        }
        color = colors.get(obj.status, "black")
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status,
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("owner", "location", "category_ref")


@admin.register(PaymentRecord)
class PaymentRecordAdmin(admin.ModelAdmin):
    """Admin interface for PaymentRecord model."""

    list_display = ["license", "amount", "payment_date", "payment_method", "owner"]
    list_filter = ["payment_date", "payment_method"]
    search_fields = ["license__product_name", "transaction_id", "owner__email"]
    readonly_fields = ["id", "created_at", "updated_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license", "owner")
