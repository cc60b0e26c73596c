"""
Serializers for license API endpoints.
"""

from rest_framework import serializers

from core.domain.value_objects import BillingCycle
from licenses.domain.services import RENEWAL_EXPIRED, RENEWAL_UPCOMING


class LicenseWriteSerializer(serializers.Serializer):
    """
    Serializer for create and edit requests.

    Used with partial=True for edits: only the keys sent are changed, and
    null clears an optional field.
    """

    product_name = serializers.CharField(max_length=255)
    vendor_name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=100)
    category_id = serializers.UUIDField(required=False, allow_null=True)
    location_id = serializers.UUIDField(required=False, allow_null=True)
    billing_cycle = serializers.ChoiceField(choices=BillingCycle.values())
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    start_date = serializers.DateField()
    expiry_date = serializers.DateField()
    last_renewal_date = serializers.DateField(required=False, allow_null=True)
    status = serializers.CharField(required=False, max_length=50)
    payment_status = serializers.BooleanField(required=False)
    login_link = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    password = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    notification_email = serializers.EmailField(
        required=False, allow_null=True, allow_blank=True, max_length=255
    )
    notification_phone = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=50
    )

    def validate(self, attrs):
        """Reject an expiry date before the start date when both are given."""
        start_date = attrs.get("start_date")
        expiry_date = attrs.get("expiry_date")
        if start_date and expiry_date and expiry_date < start_date:
            raise serializers.ValidationError(
                {"expiry_date": "Expiry date cannot be before start date"}
            )
        return attrs


class ExpirySerializer(serializers.Serializer):
    """Serializer for ExpiryDTO."""

    days_until_expiry = serializers.IntegerField()
    tier = serializers.CharField(allow_null=True)
    label = serializers.CharField()


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    product_name = serializers.CharField()
    vendor_name = serializers.CharField()
    category = serializers.CharField()
    category_id = serializers.UUIDField(allow_null=True)
    location_id = serializers.UUIDField(allow_null=True)
    location_name = serializers.CharField(allow_null=True)
    billing_cycle = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    start_date = serializers.DateField()
    expiry_date = serializers.DateField()
    last_renewal_date = serializers.DateField(allow_null=True)
    status = serializers.CharField()
    payment_status = serializers.BooleanField()
    login_link = serializers.CharField(allow_null=True)
    password = serializers.CharField(allow_null=True)
    notes = serializers.CharField(allow_null=True)
    notification_email = serializers.CharField(allow_null=True)
    notification_phone = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)
    expiry = ExpirySerializer(allow_null=True)


class ListLicensesQuerySerializer(serializers.Serializer):
    """Serializer for list and export query parameters."""

    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    branch = serializers.CharField(required=False, allow_blank=True)
    renewal = serializers.ChoiceField(
        choices=[RENEWAL_UPCOMING, RENEWAL_EXPIRED], required=False, allow_blank=True
    )


class ChangeStatusRequestSerializer(serializers.Serializer):
    """Serializer for status change request."""

    status = serializers.CharField(max_length=50)


class StatusChangeResultSerializer(serializers.Serializer):
    """Serializer for StatusChangeResultDTO."""

    license = LicenseSerializer()
    payment_recorded = serializers.BooleanField()
    warning = serializers.CharField(allow_null=True)


class RecordPaymentRequestSerializer(serializers.Serializer):
    """Serializer for record payment request."""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    payment_date = serializers.DateField()
    payment_method = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=100
    )
    transaction_id = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=255
    )
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class PaymentRecordSerializer(serializers.Serializer):
    """Serializer for PaymentRecordDTO."""

    id = serializers.UUIDField()
    license_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_date = serializers.DateField()
    payment_method = serializers.CharField(allow_null=True)
    transaction_id = serializers.CharField(allow_null=True)
    notes = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)


class PaymentHistorySerializer(serializers.Serializer):
    """Serializer for PaymentHistoryDTO."""

    license_id = serializers.UUIDField()
    payments = PaymentRecordSerializer(many=True)
    total_paid = serializers.DecimalField(max_digits=14, decimal_places=2)


class DashboardSummarySerializer(serializers.Serializer):
    """Serializer for DashboardSummaryDTO."""

    total_licenses = serializers.IntegerField()
    upcoming_renewals = serializers.IntegerField()
    expired_licenses = serializers.IntegerField()
    total_value = serializers.DecimalField(max_digits=14, decimal_places=2)


class ImportResultSerializer(serializers.Serializer):
    """Serializer for ImportResultDTO."""

    imported_count = serializers.IntegerField()
