"""
Integration tests for account, catalog and health endpoints.
"""

from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone

from accounts.domain.access_token import hash_token
from accounts.infrastructure.models import AccessToken, NotificationPreference, UserProfile


@pytest.mark.django_db
@pytest.mark.integration
class TestAuthAPI:
    """Integration tests for registration and token issue."""

    def test_register(self, api_client):
        response = api_client.post(
            reverse("accounts:register"),
            {"email": "New@Example.com", "password": "password123", "full_name": "New User"},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "Bearer"
        assert data["expires_at"] is not None
        assert data["profile"]["email"] == "new@example.com"
        assert data["profile"]["full_name"] == "New User"
        assert data["profile"]["role"] == "user"

        user = get_user_model().objects.get(username="new@example.com")
        assert UserProfile.objects.filter(user=user).exists()
        assert NotificationPreference.objects.get(user=user).days_before_expiry == [15, 7, 1]
        assert AccessToken.objects.filter(token_hash=hash_token(data["access_token"])).exists()

    def test_register_duplicate_email(self, api_client, user):
        response = api_client.post(
            reverse("accounts:register"),
            {"email": "owner@example.com", "password": "password123"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMAIL_ALREADY_REGISTERED"

    def test_register_short_password(self, api_client):
        response = api_client.post(
            reverse("accounts:register"),
            {"email": "a@example.com", "password": "short"},
            format="json",
        )

        assert response.status_code == 400
        assert "password" in response.json()["error"]["details"]

    def test_token(self, api_client, user):
        response = api_client.post(
            reverse("accounts:token"),
            {"email": "owner@example.com", "password": "s3cret-pass"},
            format="json",
        )

        assert response.status_code == 200
        token = response.json()["access_token"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        assert api_client.get(reverse("accounts:profile")).status_code == 200

    def test_token_bad_credentials(self, api_client, user):
        response = api_client.post(
            reverse("accounts:token"),
            {"email": "owner@example.com", "password": "wrong"},
            format="json",
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    def test_expired_token(self, api_client, user):
        AccessToken.objects.create(
            user=user,
            token_prefix="expired0",
            token_hash=hash_token("expired-token"),
            expires_at=timezone.now() - timedelta(minutes=1),
        )
        api_client.credentials(HTTP_AUTHORIZATION="Bearer expired-token")

        response = api_client.get(reverse("accounts:profile"))

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "ACCESS_TOKEN_EXPIRED"


@pytest.mark.django_db
@pytest.mark.integration
class TestProfileAPI:
    """Integration tests for the caller's profile and preferences."""

    def test_profile(self, auth_client, user):
        response = auth_client.get(reverse("accounts:profile"))

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == user.pk
        assert data["email"] == "owner@example.com"

    def test_get_preferences(self, auth_client):
        response = auth_client.get(reverse("accounts:notification-preferences"))

        assert response.status_code == 200
        assert response.json()["email_enabled"] is True
        assert response.json()["days_before_expiry"] == [15, 7, 1]

    def test_update_preferences(self, auth_client, user):
        response = auth_client.put(
            reverse("accounts:notification-preferences"),
            {"email_enabled": False, "days_before_expiry": [1, 30, 30]},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["email_enabled"] is False
        assert response.json()["days_before_expiry"] == [30, 1]
        assert NotificationPreference.objects.get(user=user).days_before_expiry == [30, 1]

    def test_update_preferences_rejects_unknown_days(self, auth_client):
        response = auth_client.put(
            reverse("accounts:notification-preferences"),
            {"days_before_expiry": [2]},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_NOTIFICATION_PREFERENCE"


@pytest.mark.django_db
@pytest.mark.integration
class TestCatalogAPI:
    def test_categories(self, auth_client):
        response = auth_client.get(reverse("catalog:categories"))

        assert response.status_code == 200
        names = [item["name"] for item in response.json()]
        assert names == sorted(names)
        assert "Software" in names

    def test_locations(self, auth_client):
        response = auth_client.get(reverse("catalog:locations"))

        assert response.status_code == 200
        assert response.json()[0]["name"] == "Australia"

    def test_catalog_requires_token(self, api_client):
        assert api_client.get(reverse("catalog:categories")).status_code == 401


@pytest.mark.django_db
@pytest.mark.integration
class TestHealthAPI:
    def test_health(self, api_client):
        response = api_client.get(reverse("health"))

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, api_client):
        response = api_client.get(reverse("ready"))

        assert response.status_code == 200
        assert response.json()["checks"] == {"database": True, "cache": True}
