"""
Serializers for account API endpoints.
"""

from rest_framework import serializers


class RegisterRequestSerializer(serializers.Serializer):
    """Serializer for registration request."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, min_length=8, write_only=True)
    full_name = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )


class TokenRequestSerializer(serializers.Serializer):
    """Serializer for token issue request."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True)


class ProfileSerializer(serializers.Serializer):
    """Serializer for ProfileDTO."""

    id = serializers.IntegerField()
    email = serializers.EmailField()
    full_name = serializers.CharField(allow_null=True)
    role = serializers.CharField()
    created_at = serializers.DateTimeField()


class AccessTokenSerializer(serializers.Serializer):
    """Serializer for AccessTokenDTO."""

    access_token = serializers.CharField()
    token_type = serializers.CharField()
    expires_at = serializers.DateTimeField(allow_null=True)
    profile = ProfileSerializer(allow_null=True)


class NotificationPreferencesSerializer(serializers.Serializer):
    """Serializer for NotificationPreferencesDTO."""

    email_enabled = serializers.BooleanField()
    days_before_expiry = serializers.ListField(child=serializers.IntegerField())
    updated_at = serializers.DateTimeField()


class UpdateNotificationPreferencesSerializer(serializers.Serializer):
    """Serializer for notification preference update request."""

    email_enabled = serializers.BooleanField(required=False)
    days_before_expiry = serializers.ListField(
        child=serializers.IntegerField(), required=False
    )
