"""
License and PaymentRecord models.
"""
import uuid

from django.conf import settings
from django.db import models

from core.domain.value_objects import BillingCycle


class License(models.Model):
    """
    A software license or subscription tracked by one user.
    """

    BILLING_CYCLE_CHOICES = [(cycle.value, cycle.value) for cycle in BillingCycle]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="licenses"
    )
    product_name = models.CharField(max_length=255)
    vendor_name = models.CharField(max_length=255)
    category = models.CharField(max_length=100, help_text="Free-text category name")
    category_ref = models.ForeignKey(
        "catalog.Category",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        db_column="category_id",
        related_name="licenses",
    )
    location = models.ForeignKey(
        "catalog.Location",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="licenses",
    )
    billing_cycle = models.CharField(max_length=20, choices=BILLING_CYCLE_CHOICES)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    start_date = models.DateField()
    last_renewal_date = models.DateField(null=True, blank=True)
    expiry_date = models.DateField()
    status = models.CharField(max_length=50, default="Pending")
    payment_status = models.BooleanField(default=False)
    login_link = models.TextField(null=True, blank=True)
    password = models.TextField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    notification_email = models.CharField(max_length=255, null=True, blank=True)
    notification_phone = models.CharField(max_length=50, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["expiry_date"]
        indexes = [
            models.Index(fields=["owner", "expiry_date"]),
            models.Index(fields=["expiry_date"]),
        ]

    def __str__(self):
        return f"{self.product_name} ({self.vendor_name})"


class PaymentRecord(models.Model):
    """
    A payment made against a license. Deleted with its license.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(License, on_delete=models.CASCADE, related_name="payments")
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="payment_records"
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_date = models.DateField()
    payment_method = models.CharField(max_length=100, null=True, blank=True)
    transaction_id = models.CharField(max_length=255, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "payment_history"
        ordering = ["-payment_date", "-created_at"]
        indexes = [
            models.Index(fields=["license", "payment_date"]),
        ]

    def __str__(self):
        return f"{self.license_id} - {self.amount} on {self.payment_date}"
