"""
Serializers for catalog API endpoints.
"""

from rest_framework import serializers


class ReferenceItemSerializer(serializers.Serializer):
    """Serializer for a Category or Location."""

    id = serializers.UUIDField()
    name = serializers.CharField()
